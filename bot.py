import asyncio

import discord
from discord.ext import commands

from config.defaults import DISCORD_MAX_MESSAGE_LEN
from config.defaults import TYPING_INTERVAL_SECONDS
from config.settings import load_settings
from controller.replies import load_replies
from misc.runtime_wiring import wire_bot_runtime
from nitro.client import NitroClient

# =========================
# ENV
# =========================
# Raises ConfigurationError when DISCORD_TOKEN / NITRO_BASE_URL / NITRO_API_KEY are missing.
SETTINGS = load_settings()
print(f"[CFG] {SETTINGS.describe()}")

REPLIES, REPLIES_WARNING = load_replies(SETTINGS.replies_path)
if REPLIES_WARNING:
    print(f"[CFG] replies={REPLIES.version} source=fallback path={SETTINGS.replies_path}")
    print(f"[CFG] {REPLIES_WARNING}")
else:
    print(f"[CFG] replies={REPLIES.version} source=file path={SETTINGS.replies_path}")

# =========================
# DISCORD
# =========================
intents = discord.Intents.default()
intents.guilds = True
intents.guild_messages = True
intents.dm_messages = True
intents.message_content = True
intents.members = True

bot = commands.Bot(command_prefix=commands.when_mentioned, intents=intents)

nitro = NitroClient(
    SETTINGS.nitro_base_url,
    SETTINGS.nitro_api_key,
    model=SETTINGS.nitro_model,
    timeout=SETTINGS.nitro_timeout,
)

wire_bot_runtime(
    bot,
    nitro=nitro,
    replies=REPLIES,
    history_limit=SETTINGS.history_limit,
    max_message_len=DISCORD_MAX_MESSAGE_LEN,
    typing_interval=TYPING_INTERVAL_SECONDS,
    sync_commands=SETTINGS.sync_commands,
    check_tools=SETTINGS.check_tools,
)


async def main() -> None:
    try:
        async with bot:
            await bot.start(SETTINGS.discord_token)
    finally:
        await nitro.aclose()


if __name__ == "__main__":
    asyncio.run(main())
