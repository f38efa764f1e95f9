"""Accent colors for embeds, resolved per guild."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Hashable, Optional, Union

import discord

logger = logging.getLogger(__name__)

ColorLike = Union[int, discord.Colour]
ColorFunction = Callable[[Optional[Hashable]], Optional[ColorLike]]


def _to_value(color: Optional[ColorLike]) -> Optional[int]:
    if color is None:
        return None
    if isinstance(color, discord.Colour):
        return color.value
    return int(color)


class ColorResolver:
    """Maps a scope key (usually a guild id) to an embed color.

    Resolution order is explicit override, then the resolver function, then
    the default. ``None`` always means "no color", whereas ``0`` is a color.
    """

    def __init__(self, default: Optional[ColorLike] = None, resolver: Optional[ColorFunction] = None):
        self._default = _to_value(default)
        self._resolver = resolver
        self._overrides: Dict[Hashable, int] = {}

    @property
    def default(self) -> Optional[int]:
        return self._default

    def set_default(self, color: Optional[ColorLike]) -> None:
        self._default = _to_value(color)

    def set_resolver(self, resolver: Optional[ColorFunction]) -> None:
        self._resolver = resolver

    def add_color(self, key: Hashable, color: ColorLike) -> None:
        self._overrides[key] = _to_value(color)

    def remove_color(self, key: Hashable) -> None:
        self._overrides.pop(key, None)

    def get_color(self, key: Hashable) -> Optional[int]:
        """Return the explicit override for ``key``, ignoring the resolver and default."""
        return self._overrides.get(key)

    def resolve(self, key: Optional[Hashable]) -> Optional[int]:
        if key is not None and key in self._overrides:
            return self._overrides[key]

        if self._resolver is not None:
            resolved = _to_value(self._resolver(key))
            if resolved is not None:
                return resolved

        return self._default

    def apply(self, embed: discord.Embed, key: Optional[Hashable]) -> discord.Embed:
        """Return a copy of ``embed`` carrying the color resolved for ``key``.

        The copy keeps the embed's own color when nothing resolves.
        """

        colored = embed.copy()
        color = self.resolve(key)
        if color is None:
            return colored

        colored.colour = color
        logger.debug("Applied color %#08x for scope %s", color, key)
        return colored
