from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from config.defaults import DEFAULT_HISTORY_LIMIT
from config.defaults import DEFAULT_NITRO_TIMEOUT_SECONDS
from nitro.errors import ConfigurationError

DEFAULT_REPLIES_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "replies.yml")


@dataclass(frozen=True)
class Settings:
    discord_token: str
    nitro_base_url: str
    nitro_api_key: str
    nitro_model: str | None = None
    nitro_timeout: float = DEFAULT_NITRO_TIMEOUT_SECONDS
    history_limit: int = DEFAULT_HISTORY_LIMIT
    check_tools: bool = False
    sync_commands: bool = True
    replies_path: str = DEFAULT_REPLIES_PATH

    def describe(self) -> str:
        # never echo the key or the endpoint
        return (
            f"model={self.nitro_model or '(backend default)'} timeout_s={self.nitro_timeout:g} "
            f"history_limit={self.history_limit} check_tools={self.check_tools} "
            f"sync_commands={self.sync_commands} api_key={'set' if self.nitro_api_key else 'missing'}"
        )


def _flag(raw: str | None, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip() == "1"


def _int(raw: str | None, default: int) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    return value if value > 0 else default


def _float(raw: str | None, default: float) -> float:
    try:
        value = float((raw or "").strip())
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env

    missing = [
        name
        for name in ("DISCORD_TOKEN", "NITRO_BASE_URL", "NITRO_API_KEY")
        if not (env.get(name) or "").strip()
    ]
    if missing:
        raise ConfigurationError(f"Missing required env var(s): {', '.join(missing)}")

    return Settings(
        discord_token=env["DISCORD_TOKEN"].strip(),
        nitro_base_url=env["NITRO_BASE_URL"].strip(),
        nitro_api_key=env["NITRO_API_KEY"].strip(),
        nitro_model=(env.get("NITRO_MODEL") or "").strip() or None,
        nitro_timeout=_float(env.get("NITRO_TIMEOUT_SECONDS"), DEFAULT_NITRO_TIMEOUT_SECONDS),
        history_limit=_int(env.get("NITRO_HISTORY_LIMIT"), DEFAULT_HISTORY_LIMIT),
        check_tools=_flag(env.get("NITRO_CHECK_TOOLS"), False),
        sync_commands=_flag(env.get("NITRO_SYNC_COMMANDS"), True),
        replies_path=(env.get("NITRO_REPLIES_PATH") or "").strip() or DEFAULT_REPLIES_PATH,
    )
