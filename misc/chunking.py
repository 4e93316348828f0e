from __future__ import annotations

from config.defaults import DISCORD_MAX_MESSAGE_LEN
from controller.models import Fragment


def _split_index(remaining: str, limit: int) -> int:
    midpoint = limit / 2

    # Prefer a newline, then a space, both no earlier than half the window.
    split_at = remaining.rfind("\n", 0, limit + 1)
    if split_at == -1 or split_at < midpoint:
        split_at = remaining.rfind(" ", 0, limit + 1)
    if split_at == -1 or split_at < midpoint:
        split_at = limit
    return split_at


def split_message_text(text: str, limit: int = DISCORD_MAX_MESSAGE_LEN) -> list[str]:
    if limit <= 0:
        raise ValueError("limit must be positive")

    remaining = text or ""
    chunks: list[str] = []
    while len(remaining) > limit:
        split_at = _split_index(remaining, limit)
        chunk = remaining[:split_at]
        if chunk:
            chunks.append(chunk)
        remaining = remaining[split_at:].lstrip()

    if remaining:
        chunks.append(remaining)
    return chunks


def split_message(text: str, limit: int = DISCORD_MAX_MESSAGE_LEN) -> list[Fragment]:
    return [Fragment(index=i, text=chunk) for i, chunk in enumerate(split_message_text(text, limit))]
