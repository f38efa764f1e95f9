"""Message composition and dispatch for Discord bots."""

from .bot import create_bot
from .errors import ConfigurationError, HeraldError, TransportFailure, ValidationError
from .models.message import MessageSpec, MessageSpecBuilder, PendingSend
from .models.presets import delete_message_after
from .services.colors import ColorResolver
from .services.context import MessagingContext, get_default_context, set_default_context
from .services.dispatcher import MessageDispatcher
from .services.gateway import Capability, ChannelGateway, DiscordGateway
from .services.messages import Messenger
from .utils.discord import DISCORD_MAX_EMBEDS, DISCORD_MAX_MESSAGE_LENGTH, SplitPolicy, split_message
from .utils.embeds import degrade_embed

__all__ = [
    "Capability",
    "ChannelGateway",
    "ColorResolver",
    "ConfigurationError",
    "DISCORD_MAX_EMBEDS",
    "DISCORD_MAX_MESSAGE_LENGTH",
    "DiscordGateway",
    "HeraldError",
    "MessageDispatcher",
    "MessageSpec",
    "MessageSpecBuilder",
    "MessagingContext",
    "Messenger",
    "PendingSend",
    "SplitPolicy",
    "TransportFailure",
    "ValidationError",
    "create_bot",
    "degrade_embed",
    "delete_message_after",
    "get_default_context",
    "set_default_context",
    "split_message",
]
