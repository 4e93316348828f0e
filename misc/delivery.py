from __future__ import annotations

import asyncio
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Sequence

from config.defaults import THREAD_AUTO_ARCHIVE_MINUTES
from config.defaults import THREAD_NAME_MAX_CHARS
from config.defaults import TYPING_INTERVAL_SECONDS
from controller.models import Fragment


class TypingIndicator:
    """Keeps the channel's typing indicator alive until the block exits.

    Usage:
        async with TypingIndicator(channel):
            answer = await client.ask(...)

    A failed trigger is logged and the loop keeps going.
    """

    def __init__(self, channel: Any, interval: float = TYPING_INTERVAL_SECONDS):
        self._channel = channel
        self._interval = float(interval)
        self._task: asyncio.Task | None = None

    async def _trigger(self) -> None:
        try:
            await self._channel.typing()
        except Exception as e:
            print(f"[Typing] trigger failed in {getattr(self._channel, 'id', '?')}: {e}")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self._trigger()

    async def __aenter__(self) -> TypingIndicator:
        if hasattr(self._channel, "typing"):
            await self._trigger()
            self._task = asyncio.create_task(self._loop())
        return self

    async def __aexit__(self, *exc) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None


async def deliver_fragments(
    fragments: Sequence[Fragment],
    *,
    send_first: Callable[[str], Awaitable[Any]],
    send_rest: Callable[[str], Awaitable[Any]],
) -> int:
    # Each send finishes before the next starts; order is conversation order.
    sent = 0
    for fragment in sorted(fragments, key=lambda f: f.index):
        sender = send_first if sent == 0 else send_rest
        await sender(fragment.text)
        sent += 1
    return sent


def thread_name_for(question: str, max_chars: int = THREAD_NAME_MAX_CHARS) -> str:
    name = (question or "").strip()
    if len(name) <= max_chars:
        return name
    return name[: max_chars - 3] + "..."


async def start_answer_thread(message: Any, question: str) -> Any:
    return await message.create_thread(
        name=thread_name_for(question),
        auto_archive_duration=THREAD_AUTO_ARCHIVE_MINUTES,
    )
