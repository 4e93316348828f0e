from __future__ import annotations

import unittest
from types import SimpleNamespace

try:
    import discord
    from misc.discord_gates import channel_kind
    from misc.discord_gates import inbound_from_discord
except ModuleNotFoundError:
    discord = None

BOT_ID = 900000000000000001
USER_ID = 100000000000000001


class FakeChannel:
    def __init__(self, channel_type, referenced=None, fail: bool = False):
        self.id = 77
        self.type = channel_type
        self.referenced = referenced
        self.fail = fail
        self.fetched: list[int] = []

    async def fetch_message(self, message_id):
        self.fetched.append(message_id)
        if self.fail:
            raise RuntimeError("Unknown Message")
        return self.referenced


def make_message(channel, *, content="hi", reference=None, bot=False, mentions=()):
    return SimpleNamespace(
        id=500,
        author=SimpleNamespace(id=USER_ID, bot=bot),
        content=content,
        channel=channel,
        mentions=list(mentions),
        reference=reference,
    )


@unittest.skipIf(discord is None, "discord.py not installed")
class ChannelKindTests(unittest.TestCase):
    def test_dm(self):
        self.assertEqual(channel_kind(SimpleNamespace(type=discord.ChannelType.private)), "dm")

    def test_threads(self):
        for channel_type in (discord.ChannelType.public_thread, discord.ChannelType.private_thread):
            self.assertEqual(channel_kind(SimpleNamespace(type=channel_type)), "thread")

    def test_guild_text_and_unknown(self):
        self.assertEqual(channel_kind(SimpleNamespace(type=discord.ChannelType.text)), "guild_text")
        self.assertEqual(channel_kind(SimpleNamespace()), "guild_text")


@unittest.skipIf(discord is None, "discord.py not installed")
class InboundMessageTests(unittest.IsolatedAsyncioTestCase):
    async def test_plain_message(self):
        message = make_message(
            FakeChannel(discord.ChannelType.text),
            mentions=[SimpleNamespace(id=BOT_ID)],
        )
        inbound = await inbound_from_discord(message)
        self.assertEqual(inbound.message_id, 500)
        self.assertEqual(inbound.channel_kind, "guild_text")
        self.assertEqual(inbound.mentioned_user_ids, frozenset({BOT_ID}))
        self.assertFalse(inbound.is_reply)
        self.assertIsNone(inbound.reference_author_id)

    async def test_resolved_reference_is_used_without_fetch(self):
        channel = FakeChannel(discord.ChannelType.text)
        reference = SimpleNamespace(
            message_id=321,
            resolved=SimpleNamespace(author=SimpleNamespace(id=BOT_ID)),
        )
        inbound = await inbound_from_discord(make_message(channel, reference=reference))
        self.assertEqual(inbound.reference_message_id, 321)
        self.assertEqual(inbound.reference_author_id, BOT_ID)
        self.assertEqual(channel.fetched, [])

    async def test_unresolved_reference_is_fetched(self):
        channel = FakeChannel(
            discord.ChannelType.text,
            referenced=SimpleNamespace(author=SimpleNamespace(id=BOT_ID)),
        )
        reference = SimpleNamespace(message_id=321, resolved=None)
        inbound = await inbound_from_discord(make_message(channel, reference=reference))
        self.assertEqual(channel.fetched, [321])
        self.assertEqual(inbound.reference_author_id, BOT_ID)

    async def test_reference_fetch_failure_is_not_fatal(self):
        channel = FakeChannel(discord.ChannelType.text, fail=True)
        reference = SimpleNamespace(message_id=321, resolved=None)
        inbound = await inbound_from_discord(make_message(channel, reference=reference))
        self.assertTrue(inbound.is_reply)
        self.assertIsNone(inbound.reference_author_id)

    async def test_bot_author_references_are_not_fetched(self):
        channel = FakeChannel(discord.ChannelType.text)
        reference = SimpleNamespace(message_id=321, resolved=None)
        inbound = await inbound_from_discord(make_message(channel, reference=reference, bot=True))
        self.assertTrue(inbound.author_is_bot)
        self.assertEqual(channel.fetched, [])


if __name__ == "__main__":
    unittest.main()
