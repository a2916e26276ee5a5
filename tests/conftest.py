import os

os.environ.setdefault("BOT_LOG_TO_FILE", "0")

from typing import Optional
from unittest.mock import AsyncMock

import discord
import pytest

from services.http.transport import TransportResult
from shared.config.settings import BotConfig


class FakeContext:
    """Records acknowledge/finalize calls in order."""

    def __init__(self, user_name: str = "tester", user_id: int = 42, guild_id: int = 7):
        self.user_name = user_name
        self.user_id = user_id
        self.user_avatar_url = "https://cdn.example.com/avatar.png"
        self.guild_id = guild_id
        self.events = []

    async def acknowledge(self, placeholder: str) -> None:
        self.events.append(("ack", placeholder))

    async def finalize(
        self,
        *,
        content: Optional[str] = None,
        embed: Optional[discord.Embed] = None,
    ) -> None:
        self.events.append(("final", content, embed))

    @property
    def final(self):
        return self.events[-1]


@pytest.fixture
def fake_context():
    return FakeContext()


@pytest.fixture
def transport():
    mock = AsyncMock()
    mock.send.return_value = TransportResult(True, "{}")
    return mock


@pytest.fixture
def full_config():
    return BotConfig(
        {
            "OpenAi:ApiKey": "test-api-key",
            "OpenAi:ChatGPTApiUrl": "https://api.openai.com/v1/chat/completions",
            "OpenAi:DallEApiUrl": "https://api.openai.com/v1/images/generations",
            "OpenWeatherMap:ApiKey": "test-api-key",
            "OpenWeatherMap:ApiUrl": "https://api.openweathermap.org/data/2.5/weather?q=",
            "ByBit:ApiUrl": "https://api.bybit.com/v5/market/tickers?symbol=",
            "Watch2Gether:ApiKey": "w2g-key",
            "Watch2Gether:CreateRoomUrl": "https://api.w2g.tv/rooms/create.json",
            "Watch2Gether:ShowRoomUrl": "https://w2g.tv/rooms/",
        }
    )


@pytest.fixture
def empty_config():
    return BotConfig({})
