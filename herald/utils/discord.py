"""Discord-specific limits and the content splitter."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

# Discord's maximum message length
DISCORD_MAX_MESSAGE_LENGTH = 2000

# Discord's maximum number of embeds on a single message
DISCORD_MAX_EMBEDS = 10


class SplitPolicy(str, Enum):
    """Boundaries the splitter may break on, identified by their separator.

    Separators match literally: ``SPACE`` is the ASCII space only, so text
    separated by tabs or other whitespace is hard-cut.
    """

    PARAGRAPH = "\n\n"
    NEWLINE = "\n"
    SPACE = " "


DEFAULT_SPLIT_POLICIES: Sequence[SplitPolicy] = (SplitPolicy.SPACE, SplitPolicy.NEWLINE)


def _find_split_point(window: str, policies: Sequence[SplitPolicy]) -> int:
    """Return how many characters of ``window`` belong in the current chunk."""

    for policy in policies:
        position = window.rfind(policy.value)
        if position != -1:
            # Keep the separator with the chunk it closes
            return position + len(policy.value)

    # Hard cut
    return len(window)


def split_message(
    content: str,
    max_length: int = DISCORD_MAX_MESSAGE_LENGTH,
    policies: Sequence[SplitPolicy] = DEFAULT_SPLIT_POLICIES,
) -> List[str]:
    """Split a message into chunks that fit within Discord's character limit.

    Policies are tried in priority order; the last occurrence of the first
    matching separator inside the window closes the chunk. When no policy
    matches, the window is cut at ``max_length``. Nothing is stripped, so
    joining the chunks reproduces ``content`` exactly.

    Args:
        content: The message content to split
        max_length: Maximum length per chunk (default: 2000 for Discord)
        policies: Boundaries to try, highest priority first

    Returns:
        List of message chunks, each at most max_length characters. An empty
        message yields a single empty chunk.

    Examples:
        >>> split_message("Short message")
        ['Short message']

        >>> split_message("aaa bbb ccc", max_length=5)
        ['aaa ', 'bbb ', 'ccc']
    """
    if max_length <= 0:
        raise ValueError("max_length must be positive")

    if len(content) <= max_length:
        return [content]

    chunks: List[str] = []
    remaining = content

    while len(remaining) > max_length:
        split_point = _find_split_point(remaining[:max_length], policies)
        chunks.append(remaining[:split_point])
        remaining = remaining[split_point:]

    if remaining:
        chunks.append(remaining)

    return chunks
