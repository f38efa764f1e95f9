"""Configuration helpers for Herald."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Type, TypeVar

from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from ..utils.discord import DISCORD_MAX_MESSAGE_LENGTH

SettingsT = TypeVar("SettingsT", bound=BaseModel)


class MessagingSettings(BaseModel):
    """Messaging policy parsed from environment variables."""

    default_color: Optional[int] = Field(
        default=None,
        alias="HERALD_DEFAULT_COLOR",
        validation_alias=AliasChoices("HERALD_DEFAULT_COLOR", "EMBED_COLOR"),
    )
    mention_replied_user: bool = Field(default=True, alias="HERALD_MENTION_REPLIED_USER")
    max_message_length: int = Field(
        default=DISCORD_MAX_MESSAGE_LENGTH, alias="HERALD_MAX_MESSAGE_LENGTH", gt=0
    )
    success_reaction: str = Field(default="✅", alias="HERALD_SUCCESS_REACTION")
    error_reaction: str = Field(default="❌", alias="HERALD_ERROR_REACTION")

    class Config:
        populate_by_name = True

    @field_validator("default_color", mode="before")
    @classmethod
    def _parse_color(cls, value):
        # "#FF00FF", "0xFF00FF" and bare "FF00FF" are hex; all-digit strings are decimal
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if value.isdigit():
                return int(value, 10)
            if value.startswith("#"):
                value = value[1:]
            elif value[:2].lower() == "0x":
                value = value[2:]
            return int(value, 16)
        return value


class BotSettings(MessagingSettings):
    """Runtime configuration for the bot host."""

    discord_token: str = Field(..., alias="DISCORD_TOKEN")
    command_prefix: str = Field(default="!", alias="COMMAND_PREFIX")


def _load(model: Type[SettingsT], env_file: Optional[str]) -> SettingsT:
    if env_file and Path(env_file).exists():
        load_dotenv(env_file)

    try:
        settings = model.model_validate(os.environ)
    except ValidationError as exc:
        missing = [err["loc"][0] for err in exc.errors() if err["type"] == "missing"]
        if not missing:
            raise
        raise RuntimeError(
            (
                "Missing required configuration values: "
                f"{', '.join(str(name) for name in missing)}. "
                "Ensure DISCORD_TOKEN is set before running the bot."
            )
        ) from exc

    return settings


def load_settings(env_file: str | None = ".env") -> BotSettings:
    """Load and validate configuration, raising a helpful error if missing."""

    return _load(BotSettings, env_file)


def load_messaging_settings(env_file: str | None = ".env") -> MessagingSettings:
    """Load only the messaging policy; no bot token is required."""

    return _load(MessagingSettings, env_file)
