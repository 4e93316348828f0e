from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from config.defaults import ASK_COMMAND_NAME
from misc.chunking import split_message
from misc.commands.command_deps import CommandDeps
from misc.commands.registry import SlashCommand
from misc.delivery import deliver_fragments
from misc.delivery import start_answer_thread
from nitro.errors import NitroError

ASK_DESCRIPTION = "Ask Nitro AI a question"


async def execute_ask(
    interaction: discord.Interaction,
    deps: CommandDeps,
    *,
    question: str,
    thread: bool = False,
) -> None:
    await interaction.response.defer()

    user = interaction.user
    print(f"[/ask] User {user} ({user.id}) asked: {question[:200]!r}")

    try:
        answer = await deps.nitro.ask(question, user.id)
    except NitroError as e:
        print(f"[/ask] Error: {e}")
        await interaction.edit_original_response(content=deps.replies.for_error(e))
        return

    fragments = split_message(answer, deps.max_message_len)
    await deliver_fragments(
        fragments,
        send_first=lambda text: interaction.edit_original_response(content=text),
        send_rest=lambda text: interaction.followup.send(text),
    )

    channel = interaction.channel
    if thread and getattr(channel, "type", None) == discord.ChannelType.text:
        reply = await interaction.original_response()
        await start_answer_thread(reply, question)

    print(f"[/ask] Responded to {user} fragments={len(fragments)}")


ASK_COMMAND = SlashCommand(
    name=ASK_COMMAND_NAME,
    description=ASK_DESCRIPTION,
    execute=execute_ask,
)


def register(bot: commands.Bot, *, orchestrator) -> None:
    @bot.tree.command(name=ASK_COMMAND_NAME, description=ASK_DESCRIPTION)
    @app_commands.describe(
        question="The question to ask Nitro",
        thread="Create a thread for follow-up conversation",
    )
    async def ask(interaction: discord.Interaction, question: str, thread: bool = False):
        await orchestrator.handle_command(ASK_COMMAND_NAME, interaction, question=question, thread=thread)
