"""
Discord Runtime Supervisor

Owns the lifecycle of the Discord bot runtime.

Responsibilities:
- start the Discord client
- start the status rotation once the client is ready
- perform graceful shutdown

IMPORTANT:
- MUST be started by core.discord_app
- MUST NOT create its own event loop
- MUST NOT install signal handlers
"""

from __future__ import annotations

import asyncio
from typing import Optional, List

from shared.config.settings import BotConfig
from shared.logging.logger import get_logger
from services.discord.client import DiscordClient
from services.discord.status import DEFAULT_INTERVAL_SECONDS, StatusRotator

log = get_logger("discord.supervisor", runtime="discord")


class DiscordSupervisor:
    """
    Owns the Discord runtime lifecycle.

    Contract:
    - start() is awaitable
    - shutdown() is idempotent
    """

    def __init__(self, config: BotConfig):
        self._config = config
        self._client: Optional[DiscordClient] = None
        self._rotator: Optional[StatusRotator] = None
        self._tasks: List[asyncio.Task] = []
        self._running: bool = False

    # --------------------------------------------------
    # Lifecycle
    # --------------------------------------------------

    async def start(self):
        """
        Start the Discord runtime.

        Raises RuntimeError when the client cannot be configured
        (e.g. missing bot token).
        """
        if self._running:
            log.warning("Discord supervisor already running")
            return

        log.info("Starting Discord supervisor")

        self._client = DiscordClient(self._config)

        # --------------------------------------------------
        # Discord client main loop
        # --------------------------------------------------
        client_task = asyncio.create_task(self._client.run())
        self._tasks.append(client_task)

        # --------------------------------------------------
        # Post-ready initialization (status rotation)
        # --------------------------------------------------
        async def _post_ready_init():
            try:
                await self._client.wait_until_ready()
                bot = self._client.bot
                if bot is None:
                    return

                self._rotator = StatusRotator(
                    client=bot,
                    prices=self._client.prices,
                    excuses=self._client.excuses,
                    interval=self._config.get_float(
                        "Bot:StatusIntervalSeconds", DEFAULT_INTERVAL_SECONDS
                    ),
                    branding_text=self._config.get("Bot:StatusBranding"),
                )
                self._tasks.append(asyncio.create_task(self._rotator.run()))
                log.info("Bot is online!")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                log.warning(f"Post-ready Discord init failed: {e}")

        self._tasks.append(asyncio.create_task(_post_ready_init()))

        self._running = True
        log.info("Discord supervisor started")

    # --------------------------------------------------
    # Shutdown
    # --------------------------------------------------

    async def shutdown(self):
        """
        Gracefully shut down the Discord runtime.
        """
        if not self._running:
            return

        log.info("Shutting down Discord supervisor")

        # --------------------------------------------------
        # Stop Discord client first
        # --------------------------------------------------
        try:
            if self._client:
                await self._client.shutdown()
        except Exception as e:
            log.warning(f"Discord client shutdown error ignored: {e}")

        # --------------------------------------------------
        # Cancel remaining tasks
        # --------------------------------------------------
        for task in self._tasks:
            if not task.done():
                task.cancel()

        if self._tasks:
            await asyncio.gather(
                *self._tasks,
                return_exceptions=True
            )

        self._tasks.clear()
        self._client = None
        self._rotator = None
        self._running = False

        log.info("Discord supervisor shutdown complete")

    # --------------------------------------------------
    # Read-only Introspection
    # --------------------------------------------------

    @property
    def client_task(self) -> Optional[asyncio.Task]:
        return self._tasks[0] if self._tasks else None
