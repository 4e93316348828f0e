from __future__ import annotations

import importlib


class _DummyNitro:
    async def ask(self, question, user_id=None, email=None, history=None):
        return "4"

    async def list_tools(self):
        return [{"name": "ask-nitro"}]


def _try_import_or_skip(module_name: str, pip_name: str | None = None) -> bool:
    try:
        importlib.import_module(module_name)
        return True
    except ModuleNotFoundError:
        install_name = pip_name or module_name
        print(
            f"Smoke wiring check skipped: missing dependency '{module_name}'. "
            f"Install the project and retry (e.g. `pip install {install_name}` "
            f"or `pip install -e .`)."
        )
        return False


def _main() -> int:
    if not _try_import_or_skip("discord", "discord.py"):
        return 0

    import discord
    from discord.ext import commands
    from controller.replies import Replies
    from misc.runtime_wiring import wire_bot_runtime

    bot = commands.Bot(command_prefix="!", intents=discord.Intents.none())

    orchestrator = wire_bot_runtime(
        bot,
        nitro=_DummyNitro(),
        replies=Replies(),
        history_limit=20,
        max_message_len=2000,
        typing_interval=5.0,
        sync_commands=False,
        check_tools=True,
    )

    expected_commands = {"ask"}
    existing_commands = {cmd.name for cmd in bot.tree.get_commands()}
    missing = sorted(expected_commands - existing_commands)
    if missing:
        raise RuntimeError(f"Missing expected slash commands: {missing}")

    unregistered = sorted(expected_commands - set(orchestrator.commands.names()))
    if unregistered:
        raise RuntimeError(f"Slash commands without a registry handler: {unregistered}")

    for event_name in ("on_ready", "on_message"):
        if not callable(getattr(bot, event_name, None)):
            raise RuntimeError(f"Runtime event {event_name} was not registered")

    print("Smoke wiring check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
