"""
Discord Status Rotation

Responsibilities:
- Cycle the bot presence through a fixed set of status slots
- Compute exactly one slot per tick and push it to the Discord client
- Survive any failure inside a tick (logged as a warning)

IMPORTANT:
- This module does NOT own the Discord client
- The rotation counter is private to StatusRotator
- The supervisor owns the task running StatusRotator.run()
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import discord

from runtime.version import branding
from shared.integrations.contracts import ExcuseSource, PriceProvider
from shared.logging.logger import get_logger

log = get_logger("discord.status", runtime="discord")

PROCESS_STARTED_AT = datetime.now(timezone.utc)

DEFAULT_INTERVAL_SECONDS = 20.0
MAX_DYNAMIC_LENGTH = 110
SLOT_COUNT = 7

WATCHING = "watching"
LISTENING = "listening"

_ACTIVITY_TYPES = {
    WATCHING: discord.ActivityType.watching,
    LISTENING: discord.ActivityType.listening,
}


def _truncate(text: str, limit: int = MAX_DYNAMIC_LENGTH) -> str:
    return text if len(text) <= limit else text[:limit]


def format_uptime(started_at: datetime, now: datetime) -> str:
    elapsed = now - started_at
    hours, remainder = divmod(elapsed.seconds, 3600)
    minutes = remainder // 60
    return f"{elapsed.days}d {hours}h {minutes}m"


@dataclass(frozen=True)
class StatusEntry:
    text: str
    kind: str = WATCHING

    def to_activity(self) -> discord.Activity:
        return discord.Activity(type=_ACTIVITY_TYPES[self.kind], name=self.text)


class StatusRotator:
    """
    Periodic presence rotation.

    Slots (index mod 7):
    0 crypto price, 1 date, 2 time, 3 uptime, 4 member count,
    5 developer excuse, 6 branding
    """

    def __init__(
        self,
        *,
        client,
        prices: Optional[PriceProvider],
        excuses: Optional[ExcuseSource],
        interval: float = DEFAULT_INTERVAL_SECONDS,
        branding_text: Optional[str] = None,
        started_at: datetime = PROCESS_STARTED_AT,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._client = client
        self._prices = prices
        self._excuses = excuses
        self._interval = interval
        self._branding = branding_text or branding()
        self._started_at = started_at
        self._clock = clock
        self._index = 0

    # --------------------------------------------------
    # Slots
    # --------------------------------------------------

    async def _crypto_status(self) -> StatusEntry:
        if self._prices is None:
            return StatusEntry("CryptoService not available")

        result = await self._prices.get_price("BTC", "USDT")
        if result.success:
            return StatusEntry(f"BTC: ${_truncate(result.message)}")
        return StatusEntry("Failed to fetch BTC Price...")

    def _excuse_status(self) -> StatusEntry:
        if self._excuses is None:
            return StatusEntry("No excuse available", LISTENING)
        excuse = self._excuses.random_excuse()
        return StatusEntry(f"Excuse: {_truncate(excuse)}", LISTENING)

    def _member_count(self) -> int:
        guilds = getattr(self._client, "guilds", None) or []
        return sum(guild.member_count or 0 for guild in guilds)

    async def compute(self, index: int) -> StatusEntry:
        """
        Build the status entry for one slot.
        """
        slot = index % SLOT_COUNT
        now = self._clock()

        if slot == 0:
            return await self._crypto_status()
        if slot == 1:
            return StatusEntry(f"Date: {now:%d.%m.%Y %H:%M}")
        if slot == 2:
            return StatusEntry(f"Time: {now:%H:%M} UTC")
        if slot == 3:
            return StatusEntry(f"Uptime: {format_uptime(self._started_at, now)}")
        if slot == 4:
            return StatusEntry(f"Available to '{self._member_count()}' Users")
        if slot == 5:
            return self._excuse_status()
        return StatusEntry(self._branding)

    # --------------------------------------------------
    # Rotation
    # --------------------------------------------------

    @property
    def index(self) -> int:
        return self._index

    async def tick(self):
        """
        Compute and push the current slot, then advance.

        Failures are logged and swallowed so the next tick still runs.
        """
        index = self._index
        self._index = (index + 1) % SLOT_COUNT

        try:
            entry = await self.compute(index)
            await self._client.change_presence(activity=entry.to_activity())
            log.debug(f"Presence updated (slot {index}): {entry.text!r}")
        except Exception as e:
            log.warning(f"Status update error: {e}")

    async def run(self):
        """
        Tick forever until cancelled. Ticks never overlap.
        """
        log.info(f"Status rotation started (interval={self._interval}s)")
        try:
            while True:
                await self.tick()
                await asyncio.sleep(self._interval)
        except asyncio.CancelledError:
            log.info("Status rotation stopped")
            raise
