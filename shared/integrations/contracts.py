"""
Integration contracts shared by provider adapters and command surfaces.

Every adapter operation returns a CommandResult. Command handlers depend on
the capability protocols below rather than on concrete adapter classes, so
fakes can stand in for providers in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class CommandResult:
    """Normalized outcome of one adapter operation."""

    success: bool
    message: str
    data: Optional[Any] = None

    @classmethod
    def ok(cls, message: str, data: Optional[Any] = None) -> "CommandResult":
        return cls(True, message, data)

    @classmethod
    def fail(cls, message: str) -> "CommandResult":
        return cls(False, message)


class ChatCompletionProvider(Protocol):
    async def chat_complete(self, prompt: str) -> CommandResult: ...


class ImageGenerationProvider(Protocol):
    async def generate_image(self, prompt: str) -> CommandResult: ...


class WeatherProvider(Protocol):
    async def get_weather(self, city: str) -> CommandResult: ...


class PriceProvider(Protocol):
    async def get_price(
        self,
        symbol: str = "BTC",
        currency: str = "USDT",
    ) -> CommandResult: ...


class RoomProvider(Protocol):
    async def create_room(self, video_url: str = "") -> CommandResult: ...


class ExcuseSource(Protocol):
    def random_excuse(self) -> str: ...
