from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Iterable
from typing import Iterator
from typing import Mapping


@dataclass(frozen=True, slots=True)
class SlashCommand:
    name: str
    description: str
    # execute(interaction, deps, **options)
    execute: Callable[..., Awaitable[Any]]


class CommandRegistry:
    """Read-only lookup from command name to handler, fixed at construction."""

    def __init__(self, commands: Iterable[SlashCommand]):
        table: dict[str, SlashCommand] = {}
        for command in commands:
            if command.name in table:
                raise ValueError(f"duplicate command name: {command.name}")
            table[command.name] = command
        self._commands: Mapping[str, SlashCommand] = MappingProxyType(table)

    @property
    def commands(self) -> Mapping[str, SlashCommand]:
        return self._commands

    def get(self, name: str) -> SlashCommand | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return list(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[SlashCommand]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)
