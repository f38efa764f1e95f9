"""Tests for embed helpers and their plain-text form."""

from datetime import datetime, timezone

import discord
import pytest

from herald.services.colors import ColorResolver
from herald.utils import embeds as embed_utils
from herald.utils.embeds import degrade_embed


def _full_embed() -> discord.Embed:
    embed = discord.Embed(
        title="Release notes",
        description="See [the docs](https://example.com/docs) for details",
        timestamp=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
    )
    embed.set_author(name="Herald")
    embed.add_field(name="Changes", value="Read [PR 12](https://example.com/pr/12)")
    embed.add_field(name="Notes", value="Nothing else")
    embed.set_image(url="https://example.com/banner.png")
    embed.set_footer(text="v1.2.0")
    return embed


class TestDegradeEmbed:
    """Embeds turned into text for channels without embed permission."""

    def test_full_layout(self):
        text = degrade_embed(_full_embed())

        assert text == (
            "***Herald***\n\n"
            "**Release notes**\n\n"
            "_See the docs (Link: https://example.com/docs) for details_\n\n"
            "__Changes__\nRead PR 12 (Link: https://example.com/pr/12)\n\n"
            "__Notes__\nNothing else\n\n"
            "https://example.com/banner.png\n"
            "v1.2.0 | 2024-05-01T12:30:00+00:00"
        )

    def test_empty_embed_is_empty_text(self):
        assert degrade_embed(discord.Embed()) == ""

    def test_timestamp_without_footer(self):
        embed = discord.Embed(timestamp=datetime(2024, 1, 2, tzinfo=timezone.utc))

        assert degrade_embed(embed) == " | 2024-01-02T00:00:00+00:00"

    def test_multiple_links_rewritten_separately(self):
        embed = discord.Embed(description="[a](https://a.example) and [b](https://b.example)")

        assert degrade_embed(embed) == (
            "_a (Link: https://a.example) and b (Link: https://b.example)_\n\n"
        )

    def test_fields_keep_order(self):
        embed = discord.Embed()
        for name in ("first", "second", "third"):
            embed.add_field(name=name, value=name.upper())

        text = degrade_embed(embed)

        assert text.index("__first__") < text.index("__second__") < text.index("__third__")

    def test_deterministic(self):
        assert degrade_embed(_full_embed()) == degrade_embed(_full_embed())

    @pytest.mark.parametrize(
        "expected",
        ["Herald", "Release notes", "the docs", "Changes", "Nothing else", "banner.png", "v1.2.0", "2024-05-01"],
    )
    def test_every_part_present(self, expected):
        assert expected in degrade_embed(_full_embed())


class TestEmbedFactories:
    """Factories mirroring the common embed shapes."""

    def teardown_method(self):
        embed_utils.set_embed_builder(discord.Embed)

    def test_embed_message(self):
        embed = embed_utils.embed_message("Hello World")
        assert embed.description == "Hello World"

    def test_embed_message_with_title(self):
        embed = embed_utils.embed_message_with_title("Greeting", "Hello")
        assert (embed.title, embed.description) == ("Greeting", "Hello")

    def test_embed_field(self):
        embed = embed_utils.embed_field("Name", "Value")
        assert [(f.name, f.value, f.inline) for f in embed.fields] == [("Name", "Value", False)]

    def test_embed_image_with_title(self):
        embed = embed_utils.embed_image_with_title("Cat", "https://cats.example", "https://cats.example/1.png")
        assert embed.title == "Cat"
        assert embed.url == "https://cats.example"
        assert embed.image.url == "https://cats.example/1.png"

    def test_custom_embed_supplier(self):
        embed_utils.set_embed_builder(lambda: discord.Embed().set_author(name="test"))

        custom = embed_utils.default_embed().set_author(name="Kaas")
        normal = embed_utils.embed_message("Hello World")

        assert custom.author.name == "Kaas"
        assert normal.author.name == "test"

    def test_default_embed_uses_color_resolver(self):
        colors = ColorResolver(resolver=lambda guild_id: 0xFF00FF)

        embed = embed_utils.default_embed(3, colors)

        assert embed.colour.value == 0xFF00FF

    def test_default_embed_without_color(self):
        embed = embed_utils.default_embed(3, ColorResolver())
        assert embed.colour is None
