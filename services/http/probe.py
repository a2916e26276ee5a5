"""Network latency probe used by the ping command."""
from __future__ import annotations

import time
from typing import Optional

import httpx

from shared.logging.logger import get_logger

log = get_logger("http.probe", runtime="discord")

DEFAULT_PROBE_URL = "https://www.google.com"


async def measure_latency(
    url: str = DEFAULT_PROBE_URL,
    *,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[int]:
    """Send one HEAD request and return the round-trip time in milliseconds.

    Returns ``None`` when the probe fails for any reason.
    """

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        started = time.perf_counter()
        try:
            await client.head(url)
        except Exception as e:
            log.warning(f"Latency probe to {url} failed: {e}")
            return None

    return int(round((time.perf_counter() - started) * 1000))
