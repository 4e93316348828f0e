from __future__ import annotations

import re
from typing import Any
from typing import Callable

from config.defaults import THREAD_PARTICIPATION_SCAN_LIMIT
from controller.models import InboundMessage
from controller.models import TriggerDecision


def mention_pattern(bot_id: int) -> re.Pattern[str]:
    return re.compile(rf"<@!?{int(bot_id)}>")


def strip_bot_mention(text: str, bot_id: int) -> str:
    return mention_pattern(bot_id).sub("", text or "").strip()


def extract_question(content: str, bot_id: int) -> str:
    return strip_bot_mention(content, bot_id)


def is_mentioned(message: InboundMessage, bot_id: int) -> bool:
    if int(bot_id) in message.mentioned_user_ids:
        return True
    return mention_pattern(bot_id).search(message.content or "") is not None


def is_reply_to_bot(message: InboundMessage, bot_id: int) -> bool:
    return message.reference_author_id is not None and int(message.reference_author_id) == int(bot_id)


def should_include_history(message: InboundMessage, bot_id: int) -> bool:
    return message.in_thread or message.is_reply or is_reply_to_bot(message, bot_id)


def needs_participation_check(message: InboundMessage, bot_id: int) -> bool:
    """True only when the thread-participation rule is the one left to decide."""
    if message.author_is_bot or not message.in_thread:
        return False
    return not is_mentioned(message, bot_id) and not is_reply_to_bot(message, bot_id)


# (name, predicate, respond). First match wins.
TriggerRule = tuple[str, Callable[[InboundMessage, int, bool], bool], bool]

TRIGGER_RULES: tuple[TriggerRule, ...] = (
    ("author_is_bot", lambda m, bot_id, participated: m.author_is_bot, False),
    ("direct_message", lambda m, bot_id, participated: m.is_dm, True),
    ("mentioned", lambda m, bot_id, participated: is_mentioned(m, bot_id), True),
    ("reply_to_bot", lambda m, bot_id, participated: is_reply_to_bot(m, bot_id), True),
    ("thread_participation", lambda m, bot_id, participated: m.in_thread and participated, True),
)


def decide(
    message: InboundMessage,
    bot_id: int,
    thread_has_bot_participation: bool = False,
) -> TriggerDecision:
    for name, predicate, respond in TRIGGER_RULES:
        if predicate(message, bot_id, bool(thread_has_bot_participation)):
            if not respond:
                return TriggerDecision(respond=False, include_history=False, reason=name)
            return TriggerDecision(
                respond=True,
                include_history=should_include_history(message, bot_id),
                reason=name,
            )
    return TriggerDecision(respond=False, include_history=False, reason="no_trigger")


async def thread_has_participation(
    channel: Any,
    bot_id: int,
    limit: int = THREAD_PARTICIPATION_SCAN_LIMIT,
) -> bool:
    if not hasattr(channel, "history"):
        return False
    try:
        async for msg in channel.history(limit=limit):
            if int(msg.author.id) == int(bot_id):
                return True
    except Exception as e:
        print(f"[Trigger] Thread participation check failed in {getattr(channel, 'id', '?')}: {e}")
        return False
    return False
