"""Ready-made builders for common message lifecycles."""

from __future__ import annotations

from typing import Optional

import discord

from ..services.context import MessagingContext
from .message import MessageSpecBuilder


def delete_message_after(seconds: float, context: Optional[MessagingContext] = None) -> MessageSpecBuilder:
    """Builder whose sent messages remove themselves after ``seconds``."""

    async def _delete(message: discord.Message) -> None:
        await message.delete(delay=seconds)

    return MessageSpecBuilder(context).set_success_action(_delete)
