from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from nitro.errors import BackendError


@dataclass(frozen=True, slots=True)
class Replies:
    version: str = "replies_v1"
    greeting: str = "Hi! Ask me anything and I'll help you out."
    generic_error: str = "Sorry, I couldn't reach Nitro AI right now. Please try again in a moment."
    backend_error: str = "Sorry, I encountered an error: {message}"
    command_error: str = "There was an error executing this command."

    def format_backend_error(self, message: str) -> str:
        try:
            return self.backend_error.format(message=message)
        except (KeyError, IndexError, ValueError):
            return f"{self.backend_error} {message}".strip()

    def for_error(self, exc: BaseException) -> str:
        # Only the backend-supplied message is surfaced; transport details stay in the logs.
        if isinstance(exc, BackendError):
            return self.format_backend_error(exc.message)
        return self.generic_error


def _as_text(value: object) -> str:
    return str(value or "").strip() if isinstance(value, (str, int, float)) else ""


def load_replies(path: str | Path | None) -> tuple[Replies, str | None]:
    """
    Returns (replies, warning_message). warning_message is None on clean load.
    """
    defaults = Replies()
    if not path:
        return (defaults, "Replies path missing; using built-in defaults.")

    p = Path(path)
    if not p.exists():
        return (defaults, f"Replies file not found at {p}; using built-in defaults.")

    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except Exception as exc:
        return (defaults, f"Failed to read replies from {p}: {exc}; using built-in defaults.")

    if not isinstance(payload, dict):
        return (defaults, f"Invalid replies format in {p}; using built-in defaults.")

    replies = Replies(
        version=_as_text(payload.get("version")) or defaults.version,
        greeting=_as_text(payload.get("greeting")) or defaults.greeting,
        generic_error=_as_text(payload.get("generic_error")) or defaults.generic_error,
        backend_error=_as_text(payload.get("backend_error")) or defaults.backend_error,
        command_error=_as_text(payload.get("command_error")) or defaults.command_error,
    )
    return (replies, None)
