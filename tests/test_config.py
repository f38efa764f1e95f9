"""Tests for environment-driven configuration."""

import pytest

from herald.models.config import load_messaging_settings, load_settings
from herald.services.context import MessagingContext

_KEYS = (
    "DISCORD_TOKEN",
    "COMMAND_PREFIX",
    "HERALD_DEFAULT_COLOR",
    "EMBED_COLOR",
    "HERALD_MENTION_REPLIED_USER",
    "HERALD_MAX_MESSAGE_LENGTH",
    "HERALD_SUCCESS_REACTION",
    "HERALD_ERROR_REACTION",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


class TestSettings:
    def test_messaging_defaults(self):
        settings = load_messaging_settings(env_file=None)

        assert settings.default_color is None
        assert settings.mention_replied_user is True
        assert settings.max_message_length == 2000
        assert (settings.success_reaction, settings.error_reaction) == ("✅", "❌")

    @pytest.mark.parametrize("raw", ["#FF00FF", "0xFF00FF", "0XFF00FF", "FF00FF", "ff00ff", "16711935"])
    def test_color_formats(self, monkeypatch, raw):
        monkeypatch.setenv("HERALD_DEFAULT_COLOR", raw)

        assert load_messaging_settings(env_file=None).default_color == 0xFF00FF

    def test_decimal_color_with_leading_zero(self, monkeypatch):
        monkeypatch.setenv("HERALD_DEFAULT_COLOR", "0255")

        assert load_messaging_settings(env_file=None).default_color == 255

    def test_invalid_color(self, monkeypatch):
        monkeypatch.setenv("HERALD_DEFAULT_COLOR", "purple")

        with pytest.raises(ValueError):
            load_messaging_settings(env_file=None)

    def test_color_alias(self, monkeypatch):
        monkeypatch.setenv("EMBED_COLOR", "#000001")

        assert load_messaging_settings(env_file=None).default_color == 1

    def test_missing_token(self):
        with pytest.raises(RuntimeError, match="DISCORD_TOKEN"):
            load_settings(env_file=None)

    def test_bot_settings(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "secret")
        monkeypatch.setenv("COMMAND_PREFIX", "?")
        monkeypatch.setenv("HERALD_MENTION_REPLIED_USER", "false")

        settings = load_settings(env_file=None)

        assert settings.discord_token == "secret"
        assert settings.command_prefix == "?"
        assert settings.mention_replied_user is False

    def test_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("HERALD_MAX_MESSAGE_LENGTH=1500\n")
        # Registers the variable with monkeypatch so the value dotenv writes is removed afterwards
        monkeypatch.setenv("HERALD_MAX_MESSAGE_LENGTH", "0")
        monkeypatch.delenv("HERALD_MAX_MESSAGE_LENGTH")

        settings = load_messaging_settings(env_file=str(env_file))

        assert settings.max_message_length == 1500

    def test_context_from_settings(self, monkeypatch):
        monkeypatch.setenv("HERALD_DEFAULT_COLOR", "0x00FF00")
        monkeypatch.setenv("HERALD_ERROR_REACTION", "🚫")

        context = MessagingContext.from_settings(load_messaging_settings(env_file=None))

        assert context.colors.resolve(1) == 0x00FF00
        assert context.error_reaction == "🚫"
