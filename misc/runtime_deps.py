from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any

from config.defaults import DEFAULT_HISTORY_LIMIT
from config.defaults import DISCORD_MAX_MESSAGE_LEN
from config.defaults import THREAD_PARTICIPATION_SCAN_LIMIT
from config.defaults import TYPING_INTERVAL_SECONDS
from controller.replies import Replies


@dataclass(frozen=True)
class RuntimeDeps:
    # backend
    nitro: Any
    replies: Replies = field(default_factory=Replies)

    # context windows
    history_limit: int = DEFAULT_HISTORY_LIMIT
    participation_scan_limit: int = THREAD_PARTICIPATION_SCAN_LIMIT

    # delivery
    max_message_len: int = DISCORD_MAX_MESSAGE_LEN
    typing_interval: float = TYPING_INTERVAL_SECONDS


@dataclass(frozen=True)
class RuntimeBootDeps:
    sync_commands: bool = True
    check_tools: bool = False
