from __future__ import annotations

import discord
from discord.ext import commands

from misc.orchestrator import ConversationOrchestrator
from misc.runtime_deps import RuntimeBootDeps


def register_runtime_events(
    bot: commands.Bot,
    *,
    orchestrator: ConversationOrchestrator,
    boot: RuntimeBootDeps,
) -> None:
    @bot.event
    async def on_ready():
        print(f"Nitro relay is online as {bot.user} (id={bot.user.id if bot.user else '?'})")

        if boot.sync_commands and not getattr(bot, "_commands_synced", False):
            try:
                synced = await bot.tree.sync()
                bot._commands_synced = True
                print(f"[Commands] Synced {len(synced)} slash command(s)")
            except Exception as e:
                print(f"[Commands] Failed to sync slash commands: {e}")

        if boot.check_tools:
            try:
                tools = await orchestrator.deps.nitro.list_tools()
                names = ", ".join(str(t.get("name")) for t in tools) or "(none)"
                print(f"[Nitro] tools/list ok: {names}")
            except Exception as e:
                print(f"[Nitro] tools/list failed: {type(e).__name__}: {e}")

    @bot.event
    async def on_message(message: discord.Message):
        if bot.user is None or message.author.id == bot.user.id:
            return

        await orchestrator.handle_message(message, bot.user.id)
