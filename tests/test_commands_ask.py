from __future__ import annotations

import unittest
from types import SimpleNamespace

try:
    import discord
    from discord.ext import commands
except ModuleNotFoundError:
    discord = None
    commands = None

if discord is not None:
    from controller.replies import Replies
    from misc.commands.command_deps import CommandDeps
    from misc.commands.commands_ask import execute_ask
    from misc.commands.commands_ask import register as register_ask
    from misc.runtime_wiring import build_command_registry
    from nitro.errors import BackendError
    from nitro.errors import MalformedStreamError

USER_ID = 100000000000000001


class FakeNitro:
    def __init__(self, answer: str = "4", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[tuple] = []

    async def ask(self, question, user_id=None, email=None, history=None):
        self.calls.append((question, user_id, history))
        if self.error is not None:
            raise self.error
        return self.answer


class FakeReplyMessage:
    def __init__(self):
        self.threads: list[dict] = []

    async def create_thread(self, *, name, auto_archive_duration):
        self.threads.append({"name": name, "auto_archive_duration": auto_archive_duration})


class FakeInteraction:
    def __init__(self, channel_type):
        self.user = SimpleNamespace(id=USER_ID, name="asker")
        self.channel = SimpleNamespace(id=1, type=channel_type)
        self.log: list[tuple[str, str]] = []
        self.deferred = False
        self.reply_message = FakeReplyMessage()
        self.response = SimpleNamespace(defer=self._defer)
        self.followup = SimpleNamespace(send=self._followup)

    async def _defer(self):
        self.deferred = True

    async def _followup(self, text):
        self.log.append(("followup", text))

    async def edit_original_response(self, *, content):
        self.log.append(("edit", content))

    async def original_response(self):
        return self.reply_message


@unittest.skipIf(discord is None, "discord.py not installed")
class AskCommandTests(unittest.IsolatedAsyncioTestCase):
    async def test_answer_edits_deferred_reply(self):
        nitro = FakeNitro("4")
        interaction = FakeInteraction(discord.ChannelType.text)

        await execute_ask(interaction, CommandDeps(nitro=nitro), question="What is 2+2?")

        self.assertTrue(interaction.deferred)
        self.assertEqual(nitro.calls, [("What is 2+2?", USER_ID, None)])
        self.assertEqual(interaction.log, [("edit", "4")])
        self.assertEqual(interaction.reply_message.threads, [])

    async def test_long_answer_uses_followups(self):
        interaction = FakeInteraction(discord.ChannelType.text)

        await execute_ask(interaction, CommandDeps(nitro=FakeNitro("z" * 4500)), question="q")

        self.assertEqual([(kind, len(text)) for kind, text in interaction.log], [("edit", 2000), ("followup", 2000), ("followup", 500)])

    async def test_thread_is_created_in_text_channels(self):
        interaction = FakeInteraction(discord.ChannelType.text)
        question = "Why " * 40

        await execute_ask(interaction, CommandDeps(nitro=FakeNitro("ok")), question=question, thread=True)

        self.assertEqual(len(interaction.reply_message.threads), 1)
        thread = interaction.reply_message.threads[0]
        self.assertEqual(len(thread["name"]), 100)
        self.assertTrue(thread["name"].endswith("..."))
        self.assertEqual(thread["auto_archive_duration"], 60)

    async def test_no_thread_outside_text_channels(self):
        interaction = FakeInteraction(discord.ChannelType.private)

        await execute_ask(interaction, CommandDeps(nitro=FakeNitro("ok")), question="q", thread=True)

        self.assertEqual(interaction.reply_message.threads, [])

    async def test_backend_error_is_reported_in_reply(self):
        interaction = FakeInteraction(discord.ChannelType.text)
        nitro = FakeNitro(error=BackendError(-1, "model offline"))

        await execute_ask(interaction, CommandDeps(nitro=nitro, replies=Replies()), question="q")

        self.assertEqual(interaction.log, [("edit", "Sorry, I encountered an error: model offline")])

    async def test_malformed_stream_is_generic(self):
        interaction = FakeInteraction(discord.ChannelType.text)
        nitro = FakeNitro(error=MalformedStreamError("No valid data found in SSE response"))

        await execute_ask(interaction, CommandDeps(nitro=nitro), question="q")

        self.assertEqual(interaction.log, [("edit", Replies().generic_error)])


@unittest.skipIf(commands is None, "discord.py not installed")
class AskRegistrationTests(unittest.IsolatedAsyncioTestCase):
    async def test_registry_holds_ask(self):
        registry = build_command_registry()
        self.assertEqual(registry.names(), ["ask"])

    async def test_slash_command_declared_on_tree(self):
        bot = commands.Bot(command_prefix="!", intents=discord.Intents.none())
        register_ask(bot, orchestrator=SimpleNamespace())

        command = bot.tree.get_command("ask")
        self.assertIsNotNone(command)
        self.assertEqual(sorted(p.name for p in command.parameters), ["question", "thread"])
        self.assertTrue(command.get_parameter("question").required)
        self.assertFalse(command.get_parameter("thread").required)


if __name__ == "__main__":
    unittest.main()
