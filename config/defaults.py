from __future__ import annotations

DISCORD_MAX_MESSAGE_LEN = 2000
DEFAULT_HISTORY_LIMIT = 20
THREAD_PARTICIPATION_SCAN_LIMIT = 50

TYPING_INTERVAL_SECONDS = 5.0
DEFAULT_NITRO_TIMEOUT_SECONDS = 120.0

THREAD_NAME_MAX_CHARS = 100
THREAD_AUTO_ARCHIVE_MINUTES = 60

ASK_COMMAND_NAME = "ask"
