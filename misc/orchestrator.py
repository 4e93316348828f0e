from __future__ import annotations

from typing import Any

from controller.models import ConversationTurn
from controller.models import InboundMessage
from controller.models import TriggerDecision
from misc.chunking import split_message
from misc.commands.command_deps import CommandDeps
from misc.commands.registry import CommandRegistry
from misc.delivery import TypingIndicator
from misc.delivery import deliver_fragments
from misc.discord_gates import inbound_from_discord
from misc.history import assemble_history
from misc.runtime_deps import RuntimeDeps
from misc.triggers import decide
from misc.triggers import extract_question
from misc.triggers import needs_participation_check
from misc.triggers import thread_has_participation


class ConversationOrchestrator:
    """
    Runs one inbound event end to end: trigger decision, optional history,
    the Nitro call, chunking and ordered delivery.

    Holds only read-only collaborators, so concurrent events share nothing
    mutable.
    """

    def __init__(
        self,
        *,
        deps: RuntimeDeps,
        command_deps: CommandDeps,
        commands: CommandRegistry,
    ):
        self.deps = deps
        self.command_deps = command_deps
        self.commands = commands

    async def evaluate(self, message: Any, bot_id: int) -> tuple[InboundMessage, TriggerDecision]:
        inbound = await inbound_from_discord(message)

        participated = False
        if needs_participation_check(inbound, bot_id):
            participated = await thread_has_participation(
                message.channel,
                bot_id,
                limit=self.deps.participation_scan_limit,
            )

        decision = decide(inbound, bot_id, participated)
        print(
            f"[Trigger] message={inbound.message_id} kind={inbound.channel_kind} "
            f"reply={inbound.is_reply} rule={decision.reason} respond={decision.respond} "
            f"history={decision.include_history}"
        )
        return inbound, decision

    async def handle_message(self, message: Any, bot_id: int) -> TriggerDecision:
        inbound, decision = await self.evaluate(message, bot_id)
        if not decision.respond:
            return decision

        question = extract_question(inbound.content, bot_id)
        if not question:
            await message.reply(self.deps.replies.greeting)
            return decision

        channel = message.channel
        print(f"[Message] User {message.author} asked: {question[:200]!r}")
        try:
            async with TypingIndicator(channel, interval=self.deps.typing_interval):
                history: list[ConversationTurn] = []
                if decision.include_history:
                    history = await assemble_history(
                        channel,
                        inbound.message_id,
                        bot_id,
                        limit=self.deps.history_limit,
                    )
                answer = await self.deps.nitro.ask(question, inbound.author_id, history=history)
        except Exception as e:
            print(f"[Message] Error: {type(e).__name__}: {e}")
            await message.reply(self.deps.replies.for_error(e))
            return decision

        fragments = split_message(answer, self.deps.max_message_len)
        await deliver_fragments(fragments, send_first=message.reply, send_rest=channel.send)
        print(f"[Message] Responded to {message.author} fragments={len(fragments)} history={len(history)}")
        return decision

    async def handle_command(self, name: str, interaction: Any, **options) -> None:
        command = self.commands.get(name)
        if command is None:
            print(f"[Command] Unknown command: {name}")
            return

        try:
            await command.execute(interaction, self.command_deps, **options)
        except Exception as e:
            print(f"[Command] Error executing {name}: {type(e).__name__}: {e}")
            text = self.command_deps.replies.command_error
            if interaction.response.is_done():
                await interaction.followup.send(text, ephemeral=True)
            else:
                await interaction.response.send_message(text, ephemeral=True)
