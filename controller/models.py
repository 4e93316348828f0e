from __future__ import annotations

from dataclasses import dataclass
from typing import Any

CHANNEL_KIND_DM = "dm"
CHANNEL_KIND_GUILD_TEXT = "guild_text"
CHANNEL_KIND_THREAD = "thread"

TURN_ROLES = ("user", "assistant", "system")


@dataclass(frozen=True, slots=True)
class InboundMessage:
    message_id: int
    author_id: int
    author_is_bot: bool
    content: str
    channel_kind: str
    mentioned_user_ids: frozenset[int] = frozenset()
    reference_message_id: int | None = None
    reference_author_id: int | None = None

    @property
    def is_reply(self) -> bool:
        return self.reference_message_id is not None

    @property
    def in_thread(self) -> bool:
        return self.channel_kind == CHANNEL_KIND_THREAD

    @property
    def is_dm(self) -> bool:
        return self.channel_kind == CHANNEL_KIND_DM


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    role: str
    content: str

    def __post_init__(self):
        if self.role not in TURN_ROLES:
            raise ValueError(f"unknown conversation role: {self.role!r}")

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    question: str
    external_user_id: str
    email: str | None = None
    model: str | None = None
    history: tuple[ConversationTurn, ...] = ()

    def to_arguments(self) -> dict[str, Any]:
        args: dict[str, Any] = {
            "question": self.question,
            "user_id": self.external_user_id,
        }
        if self.email:
            args["email"] = self.email
        if self.model:
            args["model"] = self.model
        if self.history:
            args["messages"] = [turn.to_payload() for turn in self.history]
        return args


@dataclass(frozen=True, slots=True)
class BackendEnvelope:
    id: str | int | None
    result: Any = None
    error: dict[str, Any] | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True, slots=True)
class Fragment:
    index: int
    text: str


@dataclass(frozen=True, slots=True)
class TriggerDecision:
    respond: bool
    include_history: bool = False
    reason: str = "no_trigger"
