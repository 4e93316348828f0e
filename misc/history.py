from __future__ import annotations

from typing import Any

import discord

from config.defaults import DEFAULT_HISTORY_LIMIT
from controller.models import ConversationTurn
from misc.triggers import strip_bot_mention


def build_history_turns(messages: list[Any], bot_id: int) -> list[ConversationTurn]:
    """Turn chronologically ordered channel messages into conversation turns."""
    turns: list[ConversationTurn] = []
    for msg in messages:
        author_id = int(msg.author.id)
        from_self = author_id == int(bot_id)
        if getattr(msg.author, "bot", False) and not from_self:
            continue

        content = strip_bot_mention(msg.content or "", bot_id)
        if not content and not from_self:
            print(f"[History] Skipping message {getattr(msg, 'id', '?')}: empty after mention removal")
            continue

        turns.append(
            ConversationTurn(
                role="assistant" if from_self else "user",
                content=content or (msg.content or "").strip(),
            )
        )
    return turns


async def assemble_history(
    channel: Any,
    before_message_id: int,
    bot_id: int,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> list[ConversationTurn]:
    if not hasattr(channel, "history"):
        print("[History] Channel does not support message fetching")
        return []

    try:
        fetched = [
            msg
            async for msg in channel.history(limit=limit, before=discord.Object(id=int(before_message_id)))
        ]
    except Exception as e:
        print(f"[History] Failed to fetch conversation history: {e}")
        return []

    # history() yields newest first
    fetched.reverse()
    turns = build_history_turns(fetched, bot_id)
    print(f"[History] channel={getattr(channel, 'id', '?')} fetched={len(fetched)} kept={len(turns)}")
    return turns
