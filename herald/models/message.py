"""Message descriptions consumed by the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

import discord
from discord.ext import commands

from ..errors import ValidationError
from ..services.context import (
    FailureAction,
    MessagingContext,
    SuccessAction,
    resolve_context,
)

ReplyTarget = Union[int, discord.Message, discord.MessageReference, None]


@dataclass
class PendingSend:
    """One physical send, open to changes by the pre-send hook."""

    channel: Any
    content: Optional[str] = None
    embeds: List[discord.Embed] = field(default_factory=list)
    nonce: Optional[Union[str, int]] = None
    reply_to: Optional[int] = None
    mention_replied_user: bool = True
    allowed_mentions: Optional[discord.AllowedMentions] = None
    delete_after: Optional[float] = None
    silent: bool = False
    chunk_index: int = 0
    chunk_count: int = 1

    def to_send_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``discord.abc.Messageable.send``."""

        kwargs: Dict[str, Any] = {"content": self.content or None}
        if self.embeds:
            kwargs["embeds"] = list(self.embeds)
        if self.nonce is not None:
            kwargs["nonce"] = self.nonce
        if self.reply_to:
            guild = getattr(self.channel, "guild", None)
            kwargs["reference"] = discord.MessageReference(
                message_id=self.reply_to,
                channel_id=self.channel.id,
                guild_id=getattr(guild, "id", None),
                fail_if_not_exists=False,
            )
            kwargs["mention_author"] = self.mention_replied_user
        if self.allowed_mentions is not None:
            kwargs["allowed_mentions"] = self.allowed_mentions
        if self.delete_after is not None:
            kwargs["delete_after"] = self.delete_after
        if self.silent:
            kwargs["silent"] = True
        return kwargs


@dataclass(frozen=True)
class MessageSpec:
    """Validated, immutable description of one outgoing message."""

    channel: Any
    content: str
    embeds: Tuple[discord.Embed, ...]
    reply_to: Optional[int]
    mention_replied_user: bool
    on_success: SuccessAction
    on_failure: FailureAction
    pre_send_hook: Callable[[PendingSend], None]
    nonce: Optional[Union[str, int]]


def _no_hook(pending: PendingSend) -> None:
    return None


def _reply_id(target: ReplyTarget) -> Optional[int]:
    if target is None:
        return None
    if isinstance(target, discord.Message):
        return target.id
    if isinstance(target, discord.MessageReference):
        return target.message_id
    return int(target) or None


class MessageSpecBuilder:
    """Fluent builder producing a :class:`MessageSpec`."""

    def __init__(self, context: Optional[MessagingContext] = None):
        self._context = resolve_context(context)
        self._channel: Any = None
        self._content: List[str] = []
        self._embeds: List[Tuple[discord.Embed, bool]] = []
        self._reply_to: Optional[int] = None
        self._mention_replied_user: Optional[bool] = None
        self._success_action: Optional[SuccessAction] = None
        self._failure_action: Optional[FailureAction] = None
        self._pre_send_hook: Callable[[PendingSend], None] = _no_hook

    @classmethod
    def from_context(
        cls, ctx: commands.Context, context: Optional[MessagingContext] = None
    ) -> "MessageSpecBuilder":
        return cls(context).set_channel(ctx.channel)

    @classmethod
    def from_message(
        cls, message: discord.Message, context: Optional[MessagingContext] = None
    ) -> "MessageSpecBuilder":
        return cls(context).set_channel(message.channel)

    @property
    def content(self) -> str:
        return "".join(self._content)

    def set_channel(self, channel: Any) -> "MessageSpecBuilder":
        if channel is None:
            raise ValidationError("channel may not be None")
        self._channel = channel
        return self

    def set_message(self, text: str) -> "MessageSpecBuilder":
        self._content = [text]
        return self

    def set_message_format(self, text: str, *args: Any, **kwargs: Any) -> "MessageSpecBuilder":
        return self.set_message(text.format(*args, **kwargs))

    def set_message_from(self, message: discord.Message) -> "MessageSpecBuilder":
        return self.set_message(message.content)

    def append(self, text: str) -> "MessageSpecBuilder":
        self._content.append(text)
        return self

    def append_format(self, text: str, *args: Any, **kwargs: Any) -> "MessageSpecBuilder":
        return self.append(text.format(*args, **kwargs))

    def add_embed(self, embed: discord.Embed, raw: bool = False) -> "MessageSpecBuilder":
        """Attach an embed; unless ``raw``, its color is set from the guild at build time."""

        self._embeds.append((embed, raw))
        return self

    def set_embeds(self, embeds: Iterable[discord.Embed], raw: bool = False) -> "MessageSpecBuilder":
        self._embeds = [(embed, raw) for embed in embeds]
        return self

    def set_reply_to(self, target: ReplyTarget, mention: Optional[bool] = None) -> "MessageSpecBuilder":
        self._reply_to = _reply_id(target)
        if mention is not None:
            self._mention_replied_user = mention
        return self

    def set_mention_replied_user(self, mention: bool) -> "MessageSpecBuilder":
        self._mention_replied_user = mention
        return self

    def set_success_action(self, action: Optional[SuccessAction]) -> "MessageSpecBuilder":
        self._success_action = action
        return self

    def set_failure_action(self, action: Optional[FailureAction]) -> "MessageSpecBuilder":
        self._failure_action = action
        return self

    def set_pre_send_hook(self, hook: Callable[[PendingSend], None]) -> "MessageSpecBuilder":
        if hook is None:
            raise ValidationError("pre-send hook may not be None")
        self._pre_send_hook = hook
        return self

    def build(self) -> MessageSpec:
        """Validate the configuration and freeze it."""

        context = self._context

        if self._channel is None:
            raise ValidationError("No channel has been set, set this with set_channel")

        content = self.content
        if not content.strip() and not self._embeds:
            raise ValidationError(
                "This message has no content, please add some with set_message or add_embed"
            )

        if len(self._embeds) > context.max_embeds:
            raise ValidationError(
                f"A message may carry at most {context.max_embeds} embeds, got {len(self._embeds)}"
            )

        guild = getattr(self._channel, "guild", None)
        scope_key = getattr(guild, "id", None)
        embeds = tuple(
            embed.copy() if raw else context.colors.apply(embed, scope_key) for embed, raw in self._embeds
        )

        mention = self._mention_replied_user
        if mention is None:
            mention = context.mention_replied_user

        return MessageSpec(
            channel=self._channel,
            content=content,
            embeds=embeds,
            reply_to=self._reply_to,
            mention_replied_user=mention,
            on_success=self._success_action or context.success_action,
            on_failure=self._failure_action or context.failure_action,
            pre_send_hook=self._pre_send_hook,
            nonce=context.nonce_supplier(self._channel),
        )
