from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any

from config.defaults import DISCORD_MAX_MESSAGE_LEN
from controller.replies import Replies


@dataclass(frozen=True)
class CommandDeps:
    nitro: Any = None
    replies: Replies = field(default_factory=Replies)
    max_message_len: int = DISCORD_MAX_MESSAGE_LEN
