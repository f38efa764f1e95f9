"""Messaging policy shared by the builder, dispatcher and messenger."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Sequence, Union

from ..utils.discord import (
    DEFAULT_SPLIT_POLICIES,
    DISCORD_MAX_EMBEDS,
    DISCORD_MAX_MESSAGE_LENGTH,
    SplitPolicy,
)
from .colors import ColorResolver

if TYPE_CHECKING:
    from ..models.config import MessagingSettings

logger = logging.getLogger(__name__)

SuccessAction = Callable[[Any], Union[None, Awaitable[None]]]
FailureAction = Callable[[BaseException], Union[None, Awaitable[None]]]
NonceSupplier = Callable[[Any], Union[str, int]]

# Discord rejects nonces longer than 25 characters
_NONCE_CHANNEL_DIGITS = 12


def default_nonce(channel: Any) -> str:
    """Derive a nonce from the channel id and the current time in milliseconds."""

    channel_part = str(getattr(channel, "id", 0))[-_NONCE_CHANNEL_DIGITS:]
    return f"{channel_part}{int(time.time() * 1000)}"


def ignore_success(message: Any) -> None:
    return None


def log_failure(error: BaseException) -> None:
    logger.warning("Failed to send message: %s", error, exc_info=error)


@dataclass
class MessagingContext:
    """Explicit configuration for building and dispatching messages."""

    colors: ColorResolver = field(default_factory=ColorResolver)
    nonce_supplier: NonceSupplier = default_nonce
    mention_replied_user: bool = True
    success_action: SuccessAction = ignore_success
    failure_action: FailureAction = log_failure
    max_message_length: int = DISCORD_MAX_MESSAGE_LENGTH
    max_embeds: int = DISCORD_MAX_EMBEDS
    split_policies: Sequence[SplitPolicy] = DEFAULT_SPLIT_POLICIES
    success_reaction: str = "✅"
    error_reaction: str = "❌"

    @classmethod
    def from_settings(cls, settings: "MessagingSettings") -> "MessagingContext":
        return cls(
            colors=ColorResolver(default=settings.default_color),
            mention_replied_user=settings.mention_replied_user,
            max_message_length=settings.max_message_length,
            success_reaction=settings.success_reaction,
            error_reaction=settings.error_reaction,
        )

    def set_nonce_supplier(self, supplier: NonceSupplier) -> None:
        if supplier is None:
            raise ValueError("nonce supplier may not be None")
        self.nonce_supplier = supplier


_default_context = MessagingContext()


def get_default_context() -> MessagingContext:
    return _default_context


def set_default_context(context: MessagingContext) -> None:
    """Install the process-wide context; intended for the application entry point."""

    global _default_context
    _default_context = context


def resolve_context(context: Optional[MessagingContext]) -> MessagingContext:
    return context if context is not None else _default_context
