"""Convenience sends built on the dispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Sequence

import discord

from ..errors import ValidationError
from ..models.message import MessageSpecBuilder
from ..models.presets import delete_message_after
from .context import FailureAction, SuccessAction
from .dispatcher import MessageDispatcher, fold_embeds
from .gateway import Capability

logger = logging.getLogger(__name__)


class Messenger:
    """Everyday message operations for bot commands."""

    def __init__(self, dispatcher: MessageDispatcher):
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> MessageDispatcher:
        return self._dispatcher

    def _builder(self, channel: Any) -> MessageSpecBuilder:
        return MessageSpecBuilder(self._dispatcher.context).set_channel(channel)

    def send_msg(
        self,
        channel: Any,
        text: str,
        on_success: Optional[SuccessAction] = None,
        on_failure: Optional[FailureAction] = None,
    ) -> List["asyncio.Task[Any]"]:
        spec = (
            self._builder(channel)
            .set_message(text)
            .set_success_action(on_success)
            .set_failure_action(on_failure)
            .build()
        )
        return self._dispatcher.dispatch(spec)

    def send_msg_format(self, channel: Any, text: str, *args: Any) -> List["asyncio.Task[Any]"]:
        return self.send_msg(channel, text.format(*args))

    def send_embed(
        self,
        channel: Any,
        embed: discord.Embed,
        on_success: Optional[SuccessAction] = None,
        raw: bool = False,
    ) -> List["asyncio.Task[Any]"]:
        spec = self._builder(channel).add_embed(embed, raw=raw).set_success_action(on_success).build()
        return self._dispatcher.dispatch(spec)

    def send_msg_and_delete_after(self, channel: Any, text: str, delay: float) -> List["asyncio.Task[Any]"]:
        spec = (
            delete_message_after(delay, self._dispatcher.context)
            .set_channel(channel)
            .set_message(text)
            .build()
        )
        return self._dispatcher.dispatch(spec)

    async def _react(self, message: discord.Message, emoji: str) -> None:
        gateway = self._dispatcher.gateway
        channel = message.channel
        if getattr(channel, "guild", None) is not None:
            if not (
                gateway.has_capability(channel, Capability.ADD_REACTION)
                and gateway.has_capability(channel, Capability.REFERENCE_HISTORY)
            ):
                return

        try:
            await gateway.add_reaction(message, emoji)
        except discord.HTTPException:
            logger.debug("Could not add %s to message %s", emoji, message.id)

    async def send_success(self, message: discord.Message) -> None:
        await self._react(message, self._dispatcher.context.success_reaction)

    async def send_error(self, message: discord.Message) -> None:
        await self._react(message, self._dispatcher.context.error_reaction)

    async def send_success_with_message(self, message: discord.Message, text: str) -> List["asyncio.Task[Any]"]:
        await self.send_success(message)
        return self.send_msg(message.channel, text)

    async def send_error_with_message(self, message: discord.Message, text: str) -> List["asyncio.Task[Any]"]:
        await self.send_error(message)
        return self.send_msg(message.channel, text)

    async def edit_msg(
        self, message: discord.Message, content: str, embeds: Sequence[discord.Embed] = ()
    ) -> Any:
        """Edit ``message``, folding embeds into text where they cannot be shown."""

        gateway = self._dispatcher.gateway
        embeds = list(embeds)
        if embeds and not gateway.has_capability(message.channel, Capability.RICH_EMBEDS):
            content = fold_embeds(content, embeds)
            embeds = []

        limit = self._dispatcher.context.max_message_length
        if len(content) > limit:
            raise ValidationError(f"Edited content is {len(content)} characters; the limit is {limit}")

        return await gateway.edit(message, content or None, embeds)
