"""
Discord Client

This module owns the Discord connection itself.
It is intentionally minimal and lifecycle-focused.

Responsibilities:
- connect to Discord
- handle ready / resume / disconnect / guild events
- build the provider adapters and register command surfaces
- expose a clean async run() / shutdown() contract

IMPORTANT:
- This client MUST be controlled by DiscordSupervisor
- This client MUST NOT create its own event loop
- This client MUST NOT start the status rotation (supervisor-owned)
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import discord
from discord.ext import commands

from shared.config.settings import BotConfig
from shared.logging.logger import get_logger

from services.crypto.api.price import CryptoPriceService
from services.discord import commands as command_surfaces
from services.discord.commands.public import PublicCommandHandler
from services.discord.excuses import ExcuseProvider
from services.discord.logging import DiscordLogAdapter
from services.http.probe import measure_latency
from services.http.transport import DEFAULT_TIMEOUT_SECONDS, HttpTransport
from services.openai.api.completions import OpenAIService
from services.watch2gether.api.rooms import Watch2GetherService
from services.weather.api.current import OpenWeatherMapService

log = get_logger("discord.client", runtime="discord")


class DiscordClient:
    """
    Thin wrapper around discord.py Bot.

    This class provides:
    - async run() entrypoint
    - async shutdown()
    - lifecycle event logging
    - command surface wiring
    """

    def __init__(self, config: BotConfig):
        token = config.get("DiscordBot:Token")
        if not token:
            raise RuntimeError(
                "Discord token is missing! Set DiscordBot:Token in appsettings.json "
                "or DiscordBot__Token in the environment."
            )

        log.debug(f"Token loaded (ends with: ...{token[-4:]})")

        self._token: str = token
        self._bot: Optional[commands.Bot] = None
        self._ready_event = asyncio.Event()

        # --------------------------------------------------
        # Shared services (singletons, stateless)
        # --------------------------------------------------
        self.logger = DiscordLogAdapter()
        self.transport = HttpTransport(
            timeout=config.get_float("Http:TimeoutSeconds", DEFAULT_TIMEOUT_SECONDS),
        )
        self.openai = OpenAIService(transport=self.transport, config=config)
        self.weather = OpenWeatherMapService(transport=self.transport, config=config)
        self.prices = CryptoPriceService(transport=self.transport, config=config)
        self.rooms = Watch2GetherService(transport=self.transport, config=config)

        excuses_path = config.get("Bot:ExcusesPath")
        self.excuses = ExcuseProvider(Path(excuses_path) if excuses_path else None)

        self.handler = PublicCommandHandler(
            logger=self.logger,
            chat=self.openai,
            images=self.openai,
            weather=self.weather,
            prices=self.prices,
            rooms=self.rooms,
            latency_probe=measure_latency,
        )

    # --------------------------------------------------

    def _build_bot(self) -> commands.Bot:
        """
        Construct the discord.py Bot instance.
        """

        intents = discord.Intents.default()
        intents.guilds = True
        intents.messages = True
        intents.message_content = False  # slash-command focused

        bot = commands.Bot(
            command_prefix="!",
            intents=intents,
        )

        command_surfaces.setup(bot, handler=self.handler)

        # --------------------------------------------------
        # Lifecycle Events
        # --------------------------------------------------

        @bot.event
        async def on_ready():
            log.info(
                f"Discord connected as {bot.user} "
                f"(id={bot.user.id}) "
                f"guilds={len(bot.guilds)}"
            )

            try:
                synced = await bot.tree.sync()
                log.info(f"Discord command tree synced ({len(synced)} commands)")
            except Exception as e:
                log.error(f"Failed to sync Discord commands: {e}")

            self.logger.log_startup()
            self._ready_event.set()

        @bot.event
        async def on_resumed():
            log.info("Discord connection resumed")

        @bot.event
        async def on_disconnect():
            log.warning("Discord connection lost")

        @bot.event
        async def on_guild_available(guild: discord.Guild):
            log.debug(
                f"Connected to guild: {guild.name} "
                f"({guild.member_count} members)"
            )

        @bot.event
        async def on_guild_join(guild: discord.Guild):
            log.info(
                f"Joined guild: {guild.name} "
                f"(id={guild.id}, members={guild.member_count})"
            )

        @bot.event
        async def on_guild_remove(guild: discord.Guild):
            log.info(
                f"Removed from guild: {guild.name} "
                f"(id={guild.id})"
            )

        return bot

    # --------------------------------------------------

    async def run(self):
        """
        Start the Discord client and block until shutdown.
        """
        if self._bot is not None:
            raise RuntimeError("Discord client already running")

        log.info("Connecting to Discord...")

        self._bot = self._build_bot()

        try:
            await self._bot.start(self._token)
        except asyncio.CancelledError:
            log.info("Discord client task cancelled")
            raise
        except Exception as e:
            log.error(f"Discord client crashed: {e}")
            raise
        finally:
            log.info("Discord client stopped")

    async def wait_until_ready(self):
        await self._ready_event.wait()

    # --------------------------------------------------

    async def shutdown(self):
        """
        Gracefully close the Discord connection.
        """
        if not self._bot:
            return

        log.info("Closing Discord connection")

        try:
            await self._bot.close()
        except Exception as e:
            log.warning(f"Discord close error ignored: {e}")

        self.logger.log_shutdown()

        self._bot = None
        self._ready_event.clear()

    # --------------------------------------------------

    @property
    def bot(self) -> Optional[commands.Bot]:
        """
        Expose bot instance (read-only) for supervisor hooks.
        """
        return self._bot
