"""ByBit ticker price adapter."""

from __future__ import annotations

import json

from services.http.transport import HttpTransport
from shared.config.settings import BotConfig
from shared.integrations.contracts import CommandResult
from shared.logging.logger import get_logger
from shared.utils.json_path import dig

log = get_logger("crypto.price", runtime="discord")

CONFIG_ERROR = (
    "No ByBit API URL configured. Please contact the developer to add a valid API URL."
)


def _price_text(value) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError(f"lastPrice has unexpected type {type(value).__name__}")
    return str(value)


class CryptoPriceService:
    """
    Looks up the last traded price of a symbol/currency pair.

    The configured ApiUrl ends with the ticker query parameter, e.g.
    "https://api.bybit.com/v5/market/tickers?category=spot&symbol=".
    """

    def __init__(self, *, transport: HttpTransport, config: BotConfig):
        self._transport = transport
        self._config = config

    async def get_price(
        self,
        symbol: str = "BTC",
        currency: str = "USDT",
    ) -> CommandResult:
        symbol = symbol.upper()
        base_url = self._config.get("ByBit:ApiUrl")

        if not base_url:
            log.error(f"get_price: {CONFIG_ERROR}")
            return CommandResult.fail(CONFIG_ERROR)

        request_url = f"{base_url}{symbol}{currency}"
        log.debug(f"Requesting: {request_url}")

        response = await self._transport.send(request_url)
        if not response.succeeded:
            return CommandResult.fail(response.content or "API error (no content).")

        try:
            payload = json.loads(response.content or "{}")
            raw_price = dig(payload, "result", "list", 0, "lastPrice")
            if raw_price is None:
                message = f"Could not fetch price for {symbol}."
                log.info(f"get_price: {message} (success=False)")
                return CommandResult.fail(message)

            price = _price_text(raw_price)
        except json.JSONDecodeError as e:
            log.error(f"get_price: JSON parse error: {e}")
            return CommandResult.fail(
                f"Could not fetch price for {symbol} (invalid API response)."
            )
        except Exception as e:
            log.error(f"get_price: Unexpected error: {e}")
            return CommandResult.fail(
                f"Could not fetch price for {symbol} (unexpected error)."
            )

        log.info(f"get_price: {price} (success=True)")
        return CommandResult.ok(price)
