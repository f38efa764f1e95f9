"""Turns a MessageSpec into one or more ordered sends."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, List, Optional, Sequence

import discord

from ..errors import ConfigurationError, TransportFailure
from ..models.message import MessageSpec, PendingSend
from ..utils.discord import split_message
from ..utils.embeds import degrade_embed
from .context import MessagingContext, resolve_context
from .gateway import Capability, ChannelGateway

logger = logging.getLogger(__name__)


def fold_embeds(content: str, embeds: Sequence[discord.Embed]) -> str:
    """Append the text form of each embed to ``content``, one per line."""

    parts = [content] if content else []
    parts.extend(degrade_embed(embed) for embed in embeds)
    return "\n".join(parts)


class MessageDispatcher:
    """Sends message specs through a gateway, honouring limits and permissions.

    The dispatcher keeps no state between calls: every ``dispatch`` resolves
    the channel, picks the embed or text path, splits if needed and issues
    one task per chunk in order. Chunks never wait on each other.
    """

    def __init__(self, gateway: ChannelGateway, context: Optional[MessagingContext] = None):
        self._gateway = gateway
        self._context = resolve_context(context)

    @property
    def gateway(self) -> ChannelGateway:
        return self._gateway

    @property
    def context(self) -> MessagingContext:
        return self._context

    def dispatch(self, spec: MessageSpec) -> List["asyncio.Task[Any]"]:
        """Issue every send for ``spec`` and return their tasks in issue order.

        Must be called from a running event loop. Raises
        :class:`ConfigurationError` if the channel no longer resolves. An
        unreachable channel yields no tasks and no callbacks. A chunk whose
        pre-send hook raises is not sent and is reported to ``on_failure``.
        """

        loop = asyncio.get_running_loop()

        channel = self._gateway.resolve_channel(spec.channel)
        if channel is None:
            raise ConfigurationError(
                f"Channel {getattr(spec.channel, 'id', spec.channel)!r} could not be resolved"
            )

        if not self._gateway.can_post_in(channel):
            logger.debug("Cannot post in channel %s; dropping message", channel.id)
            return []

        content = spec.content
        embeds: List[discord.Embed] = list(spec.embeds)
        if embeds and not self._gateway.has_capability(channel, Capability.RICH_EMBEDS):
            logger.debug("No embed permission in %s; sending %d embed(s) as text", channel.id, len(embeds))
            content = fold_embeds(content, embeds)
            embeds = []

        limit = self._context.max_message_length
        if len(content) <= limit:
            chunks = [content]
        else:
            chunks = split_message(content, limit, self._context.split_policies)
            logger.debug("Split %d characters into %d chunks for %s", len(content), len(chunks), channel.id)

        reply_to = None
        if spec.reply_to and self._gateway.has_capability(channel, Capability.REFERENCE_HISTORY):
            reply_to = spec.reply_to

        tasks: List["asyncio.Task[Any]"] = []
        last = len(chunks) - 1
        for index, chunk in enumerate(chunks):
            pending = PendingSend(
                channel=channel,
                content=chunk,
                embeds=embeds if index == last else [],
                nonce=spec.nonce,
                reply_to=reply_to if index == 0 else None,
                mention_replied_user=spec.mention_replied_user,
                chunk_index=index,
                chunk_count=len(chunks),
            )
            try:
                spec.pre_send_hook(pending)
            except Exception as exc:
                # Only this chunk is abandoned; it still gets a task so results line up
                logger.debug("Pre-send hook rejected chunk %d for %s", index, channel.id)
                tasks.append(loop.create_task(self._fail(pending, spec, exc, "was rejected before sending")))
                continue
            tasks.append(loop.create_task(self._deliver(pending, spec)))

        return tasks

    async def deliver(self, spec: MessageSpec) -> List[Optional[Any]]:
        """Dispatch ``spec`` and wait for every chunk; failed chunks yield ``None``."""

        return list(await asyncio.gather(*self.dispatch(spec)))

    async def _deliver(self, pending: PendingSend, spec: MessageSpec) -> Optional[Any]:
        try:
            message = await self._gateway.send(pending)
        except Exception as exc:
            return await self._fail(pending, spec, exc, "failed to send")

        await self._run_callback(spec.on_success, message)
        return message

    async def _fail(self, pending: PendingSend, spec: MessageSpec, exc: Exception, reason: str) -> None:
        failure = TransportFailure(
            f"Chunk {pending.chunk_index + 1}/{pending.chunk_count} {reason}: {exc}",
            chunk_index=pending.chunk_index,
            chunk_count=pending.chunk_count,
            channel=pending.channel,
        )
        failure.__cause__ = exc
        await self._run_callback(spec.on_failure, failure)
        return None

    @staticmethod
    async def _run_callback(callback: Callable[[Any], Any], argument: Any) -> None:
        try:
            result = callback(argument)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Message callback %r raised", callback)
