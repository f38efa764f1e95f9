"""Discord bot wiring for Herald."""

from __future__ import annotations

import logging
from typing import Optional

import discord
from discord.ext import commands

from .errors import HeraldError
from .models.config import BotSettings
from .models.message import MessageSpecBuilder
from .services.context import MessagingContext
from .services.dispatcher import MessageDispatcher
from .services.gateway import ChannelGateway, DiscordGateway
from .services.messages import Messenger
from .utils.embeds import default_embed

logger = logging.getLogger(__name__)


def create_bot(
    settings: BotSettings,
    context: MessagingContext,
    gateway: Optional[ChannelGateway] = None,
) -> commands.Bot:
    intents = discord.Intents.default()
    intents.message_content = True

    bot = commands.Bot(
        command_prefix=settings.command_prefix,
        intents=intents,
        help_command=None,
    )

    dispatcher = MessageDispatcher(gateway or DiscordGateway(bot), context)
    messenger = Messenger(dispatcher)

    # Store the messenger so extensions can reach it
    bot.messenger = messenger  # type: ignore

    @bot.event
    async def on_ready() -> None:
        logger.info("Logged in as %s", bot.user)

    @bot.event
    async def on_command_error(ctx: commands.Context, error: commands.CommandError) -> None:
        if isinstance(error, commands.CommandNotFound):
            return
        logger.warning("Command %s failed: %s", ctx.command, error)
        await messenger.send_error_with_message(ctx.message, f"Something went wrong: {error}")

    @bot.command(name="say")
    async def say(ctx: commands.Context, *, text: str) -> None:
        """Repeat the text as a reply to the invoking message."""
        spec = (
            MessageSpecBuilder.from_context(ctx, context)
            .set_message(text)
            .set_reply_to(ctx.message)
            .build()
        )
        try:
            dispatcher.dispatch(spec)
        except HeraldError:
            logger.exception("Failed to dispatch reply in %s", ctx.channel)
            return
        await messenger.send_success(ctx.message)

    @bot.command(name="announce")
    async def announce(ctx: commands.Context, *, text: str) -> None:
        """Post the text inside an embed, or as plain text where embeds are not allowed."""
        embed = default_embed()
        embed.description = text
        embed.set_author(name=ctx.author.display_name)
        messenger.send_embed(ctx.channel, embed)

    return bot
