"""Shared fakes for the messaging tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

import pytest

from herald.models.message import PendingSend
from herald.services.colors import ColorResolver
from herald.services.context import MessagingContext
from herald.services.gateway import Capability


@dataclass
class FakeGuild:
    id: int


@dataclass
class FakeChannel:
    id: int
    guild: Optional[FakeGuild] = None


@dataclass
class FakeMessage:
    id: int
    channel: FakeChannel
    content: Optional[str] = None
    embeds: List[Any] = field(default_factory=list)


class FakeGateway:
    """In-memory gateway recording what would have been sent."""

    def __init__(self) -> None:
        self.known: Set[int] = set()
        self.muted: Set[int] = set()
        self.capabilities: Dict[int, Set[Capability]] = {}
        self.fail_when: Callable[[PendingSend], bool] = lambda pending: False
        self.sent: List[PendingSend] = []
        self.reactions: List[Tuple[Any, str]] = []
        self.edits: List[Tuple[Any, Optional[str], List[Any]]] = []
        self._next_id = 1000

    def add_channel(self, channel: FakeChannel, *capabilities: Capability, reachable: bool = True) -> FakeChannel:
        self.known.add(channel.id)
        self.capabilities[channel.id] = set(capabilities)
        if not reachable:
            self.muted.add(channel.id)
        return channel

    def resolve_channel(self, channel: Any) -> Optional[Any]:
        return channel if channel.id in self.known else None

    def can_post_in(self, channel: Any) -> bool:
        return channel.id not in self.muted

    def has_capability(self, channel: Any, capability: Capability) -> bool:
        return capability in self.capabilities.get(channel.id, set())

    async def send(self, pending: PendingSend) -> FakeMessage:
        self.sent.append(pending)
        if self.fail_when(pending):
            raise RuntimeError(f"transport rejected chunk {pending.chunk_index}")
        self._next_id += 1
        return FakeMessage(self._next_id, pending.channel, pending.content, list(pending.embeds))

    async def add_reaction(self, message: Any, emoji: str) -> None:
        self.reactions.append((message, emoji))

    async def edit(self, message: Any, content: Optional[str], embeds: Any) -> Any:
        self.edits.append((message, content, list(embeds)))
        return message


@pytest.fixture
def context() -> MessagingContext:
    return MessagingContext(
        colors=ColorResolver(default=0x123456),
        nonce_supplier=lambda channel: f"nonce-{channel.id}",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def guild() -> FakeGuild:
    return FakeGuild(id=42)


@pytest.fixture
def channel(gateway: FakeGateway, guild: FakeGuild) -> FakeChannel:
    return gateway.add_channel(
        FakeChannel(id=555, guild=guild),
        Capability.RICH_EMBEDS,
        Capability.REFERENCE_HISTORY,
        Capability.ADD_REACTION,
    )
