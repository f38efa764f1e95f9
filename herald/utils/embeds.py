"""Embed helpers: factories and plain-text degradation."""

from __future__ import annotations

import re
from typing import Callable, Hashable, List, Optional

import discord

from ..services.colors import ColorResolver

# Markdown-style links, matched lazily so several links on one line stay separate
_LINK_PATTERN = re.compile(r"\[([^\]]+?)\]\((\S+?)\)")

_embed_supplier: Callable[[], discord.Embed] = discord.Embed


def _rewrite_links(text: str) -> str:
    return _LINK_PATTERN.sub(r"\1 (Link: \2)", text)


def degrade_embed(embed: discord.Embed) -> str:
    """Render an embed as readable text for channels that cannot show embeds.

    Every populated part of the embed (author, title, description, fields,
    image, footer and timestamp) ends up somewhere in the output. Missing
    parts contribute nothing. No length limit is applied here.
    """

    parts: List[str] = []

    author = embed.author.name
    if author:
        parts.append(f"***{author}***\n\n")

    if embed.title:
        title = f"**{embed.title}**"
        if embed.url:
            title += f" (Link: {embed.url})"
        parts.append(f"{title}\n\n")

    if embed.description:
        parts.append(f"_{_rewrite_links(embed.description)}_\n\n")

    for field in embed.fields:
        parts.append(f"__{field.name}__\n{_rewrite_links(field.value or '')}\n\n")

    image_url = embed.image.url
    if image_url:
        parts.append(f"{image_url}\n")

    footer = embed.footer.text
    if footer:
        parts.append(footer)

    if embed.timestamp is not None:
        parts.append(f" | {embed.timestamp.isoformat()}")

    return "".join(parts)


def set_embed_builder(supplier: Callable[[], discord.Embed]) -> None:
    """Replace the factory every helper below starts its embed from."""

    global _embed_supplier
    _embed_supplier = supplier


def default_embed(
    scope_key: Optional[Hashable] = None, colors: Optional[ColorResolver] = None
) -> discord.Embed:
    embed = _embed_supplier()
    if colors is not None:
        color = colors.resolve(scope_key)
        if color is not None:
            embed.colour = color
    return embed


def embed_message(message: str) -> discord.Embed:
    embed = default_embed()
    embed.description = message
    return embed


def embed_message_with_title(title: str, message: str) -> discord.Embed:
    embed = embed_message(message)
    embed.title = title
    return embed


def embed_field(title: str, message: str) -> discord.Embed:
    return default_embed().add_field(name=title, value=message, inline=False)


def embed_image(image_url: str) -> discord.Embed:
    return default_embed().set_image(url=image_url)


def embed_image_with_title(title: str, url: str, image_url: str) -> discord.Embed:
    embed = embed_image(image_url)
    embed.title = title
    embed.url = url
    return embed
