"""Capability queries and transport, backed by discord.py."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Protocol, Sequence

import discord

from ..models.message import PendingSend

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    RICH_EMBEDS = "embed_links"
    REFERENCE_HISTORY = "read_message_history"
    ADD_REACTION = "add_reactions"


class ChannelGateway(Protocol):
    """Everything the dispatcher needs from the host client."""

    def resolve_channel(self, channel: Any) -> Optional[Any]:
        ...

    def can_post_in(self, channel: Any) -> bool:
        ...

    def has_capability(self, channel: Any, capability: Capability) -> bool:
        ...

    async def send(self, pending: PendingSend) -> Any:
        ...

    async def add_reaction(self, message: Any, emoji: str) -> None:
        ...

    async def edit(self, message: Any, content: Optional[str], embeds: Sequence[discord.Embed]) -> Any:
        ...


class DiscordGateway:
    """Gateway over a connected ``discord.Client``'s caches."""

    def __init__(self, client: discord.Client):
        self._client = client

    def resolve_channel(self, channel: Any) -> Optional[Any]:
        """Look the channel up again; the handle a caller holds may be stale."""

        channel_id = getattr(channel, "id", None)
        if channel_id is None:
            return None

        guild = getattr(channel, "guild", None)
        if guild is None:
            return self._client.get_channel(channel_id) or (
                channel if isinstance(channel, discord.abc.PrivateChannel) else None
            )

        fresh_guild = self._client.get_guild(guild.id)
        if fresh_guild is None:
            return None
        return fresh_guild.get_channel_or_thread(channel_id)

    def _permissions(self, channel: Any) -> discord.Permissions:
        guild = getattr(channel, "guild", None)
        member = guild.me if guild is not None else self._client.user
        return channel.permissions_for(member)

    def can_post_in(self, channel: Any) -> bool:
        permissions = self._permissions(channel)
        if not permissions.view_channel:
            return False
        if isinstance(channel, discord.Thread):
            return permissions.send_messages_in_threads
        return permissions.send_messages

    def has_capability(self, channel: Any, capability: Capability) -> bool:
        return bool(getattr(self._permissions(channel), capability.value))

    async def send(self, pending: PendingSend) -> discord.Message:
        return await pending.channel.send(**pending.to_send_kwargs())

    async def add_reaction(self, message: discord.Message, emoji: str) -> None:
        await message.add_reaction(emoji)

    async def edit(
        self, message: discord.Message, content: Optional[str], embeds: Sequence[discord.Embed]
    ) -> discord.Message:
        logger.debug("Editing message %s in %s", message.id, message.channel)
        return await message.edit(content=content, embeds=list(embeds))
