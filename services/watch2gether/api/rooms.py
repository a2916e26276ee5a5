"""
Watch2Gether room creation adapter.

NOTE:
- The returned success flag mirrors the HTTP outcome only. When the
  request succeeds but the body cannot be read, success stays True and
  only the message reports the problem.
"""

from __future__ import annotations

import json

from services.http.transport import HttpTransport
from shared.config.settings import BotConfig
from shared.integrations.contracts import CommandResult
from shared.logging.logger import get_logger

log = get_logger("watch2gether.rooms", runtime="discord")

CONFIG_ERROR = (
    "Could not load necessary configuration, please provide a valid configuration."
)
PAYLOAD_ERROR = "Failed to deserialize response from Watch2Gether"

JSON_HEADERS = [
    ("Content-Type", "application/json"),
    ("Accept", "application/json"),
]


def _stream_key(content: str) -> str:
    payload = json.loads(content)
    if not isinstance(payload, dict):
        raise ValueError("response root is not an object")
    key = payload.get("streamkey")
    if not key:
        raise KeyError("streamkey")
    return str(key)


class Watch2GetherService:
    def __init__(self, *, transport: HttpTransport, config: BotConfig):
        self._transport = transport
        self._config = config

    async def create_room(self, video_url: str = "") -> CommandResult:
        api_key = self._config.get("Watch2Gether:ApiKey")
        create_url = self._config.get("Watch2Gether:CreateRoomUrl")
        show_url = self._config.get("Watch2Gether:ShowRoomUrl")

        if not (api_key and create_url and show_url):
            log.error(f"create_room: {CONFIG_ERROR}")
            return CommandResult.fail(CONFIG_ERROR)

        response = await self._transport.send(
            create_url,
            "POST",
            "create_room: No response from Watch2Gether",
            JSON_HEADERS,
            {"w2g_api_key": api_key, "share": video_url},
        )

        if not response.succeeded:
            message = response.content or "Error creating room."
            log.error(f"create_room: Failed to create Watch2Gether room. Error: {message}")
            return CommandResult.fail(message)

        try:
            message = show_url + _stream_key(response.content or "")
        except Exception as e:
            message = PAYLOAD_ERROR
            log.error(f"create_room: {message} Error: {e}")
        else:
            log.info(f"create_room: Successfully created Watch2Gether room: {message}")

        return CommandResult(True, message)
