"""Exception types raised or routed by the messaging layer."""

from __future__ import annotations

from typing import Any, Optional


class HeraldError(Exception):
    """Base class for every error Herald produces."""


class ValidationError(HeraldError, ValueError):
    """Raised when a message cannot be built or edited as described."""


class ConfigurationError(HeraldError, RuntimeError):
    """Raised when a message targets a channel that no longer resolves."""


class TransportFailure(HeraldError):
    """A single chunk failed to send.

    Never raised by the dispatcher; it is handed to the message's failure
    action with the transport exception attached as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        chunk_index: int = 0,
        chunk_count: int = 1,
        channel: Optional[Any] = None,
    ):
        super().__init__(message)
        self.chunk_index = chunk_index
        self.chunk_count = chunk_count
        self.channel = channel
