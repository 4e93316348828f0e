from __future__ import annotations

from typing import Any

import discord

from controller.models import CHANNEL_KIND_DM
from controller.models import CHANNEL_KIND_GUILD_TEXT
from controller.models import CHANNEL_KIND_THREAD
from controller.models import InboundMessage

THREAD_CHANNEL_TYPES = {
    discord.ChannelType.public_thread,
    discord.ChannelType.private_thread,
    discord.ChannelType.news_thread,
}


def channel_kind(channel: Any) -> str:
    channel_type = getattr(channel, "type", None)
    if channel_type == discord.ChannelType.private:
        return CHANNEL_KIND_DM
    if channel_type in THREAD_CHANNEL_TYPES:
        return CHANNEL_KIND_THREAD
    return CHANNEL_KIND_GUILD_TEXT


async def resolve_reference_author_id(message: Any) -> int | None:
    ref = getattr(message, "reference", None)
    if ref is None:
        return None

    # discord.py resolves cached references; deleted ones carry no author.
    resolved = getattr(ref, "resolved", None)
    author = getattr(resolved, "author", None)
    if author is not None:
        return int(author.id)

    if getattr(ref, "message_id", None) is None:
        return None
    try:
        referenced = await message.channel.fetch_message(ref.message_id)
    except Exception as e:
        print(f"[Trigger] Could not fetch referenced message {ref.message_id}: {e}")
        return None
    return int(referenced.author.id)


async def inbound_from_discord(message: Any) -> InboundMessage:
    ref = getattr(message, "reference", None)
    author_is_bot = bool(getattr(message.author, "bot", False))
    return InboundMessage(
        message_id=int(message.id),
        author_id=int(message.author.id),
        author_is_bot=author_is_bot,
        content=message.content or "",
        channel_kind=channel_kind(message.channel),
        mentioned_user_ids=frozenset(int(u.id) for u in (getattr(message, "mentions", None) or [])),
        reference_message_id=getattr(ref, "message_id", None) if ref is not None else None,
        # bot authors are never answered, so their references are not fetched
        reference_author_id=None if author_is_bot else await resolve_reference_author_id(message),
    )
