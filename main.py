"""Entry-point for running the Herald Discord bot."""

from __future__ import annotations

import asyncio
import logging

from herald import create_bot
from herald.models.config import load_settings
from herald.services.context import MessagingContext, set_default_context


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


async def async_main() -> None:
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = load_settings()

    context = MessagingContext.from_settings(settings)
    set_default_context(context)
    if settings.default_color is not None:
        logger.info("Default embed color set to %#08x", settings.default_color)

    bot = create_bot(settings, context)
    async with bot:
        await bot.start(settings.discord_token)


def main() -> None:
    try:
        asyncio.run(async_main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
