from __future__ import annotations

from controller.replies import Replies
from misc.commands.command_deps import CommandDeps
from misc.commands.commands_ask import ASK_COMMAND
from misc.commands.commands_ask import register as register_ask
from misc.commands.registry import CommandRegistry
from misc.events_runtime import register_runtime_events
from misc.orchestrator import ConversationOrchestrator
from misc.runtime_deps import RuntimeBootDeps
from misc.runtime_deps import RuntimeDeps


def build_command_registry() -> CommandRegistry:
    return CommandRegistry([ASK_COMMAND])


def wire_bot_runtime(
    bot,
    *,
    nitro,
    replies: Replies,
    history_limit: int,
    max_message_len: int,
    typing_interval: float,
    sync_commands: bool,
    check_tools: bool,
) -> ConversationOrchestrator:
    orchestrator = ConversationOrchestrator(
        deps=RuntimeDeps(
            nitro=nitro,
            replies=replies,
            history_limit=history_limit,
            max_message_len=max_message_len,
            typing_interval=typing_interval,
        ),
        command_deps=CommandDeps(
            nitro=nitro,
            replies=replies,
            max_message_len=max_message_len,
        ),
        commands=build_command_registry(),
    )

    register_ask(bot, orchestrator=orchestrator)

    register_runtime_events(
        bot,
        orchestrator=orchestrator,
        boot=RuntimeBootDeps(
            sync_commands=sync_commands,
            check_tools=check_tools,
        ),
    )
    return orchestrator
