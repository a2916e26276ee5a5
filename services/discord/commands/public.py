"""
Discord Public Commands

This module implements the user-facing slash command behavior.

Every command follows the same sequence:
- acknowledge the interaction with a provisional placeholder
- await exactly one provider call
- replace the placeholder (embed on success, plain text on failure)
- log one completion line, even when the reply could not be delivered

IMPORTANT CONSTRAINTS:
- This module MUST NOT register commands on import
- This module MUST NOT own a Discord client
- Providers are injected as capabilities, never constructed here
"""

from __future__ import annotations

import re
from typing import Awaitable, Callable, Optional

import discord

from runtime.version import REPOSITORY_URL, branding
from services.discord.commands.context import CommandContext
from services.discord.embeds import MAX_CONTENT_LENGTH, clip, command_embed
from services.discord.logging import DiscordLogAdapter
from shared.integrations.contracts import (
    ChatCompletionProvider,
    ImageGenerationProvider,
    PriceProvider,
    RoomProvider,
    WeatherProvider,
)
from shared.logging.logger import get_logger

log = get_logger("discord.commands.public", runtime="discord")

LatencyProbe = Callable[[], Awaitable[Optional[int]]]

OPENAI_ICON = "https://seeklogo.com/images/O/open-ai-logo-8B9BFEDC26-seeklogo.com.png"
W2G_ICON = "https://w2g.tv/assets/256.f5817612.png"
OWM_ICON = "https://openweathermap.org/themes/openweathermap/assets/img/logo_white_cropped.png"
BYBIT_ICON = "https://seeklogo.com/images/B/bybit-logo-4C31FD6A08-seeklogo.com.png"

DELIVERY_FAILED_MESSAGE = "The response could not be delivered. Please try again."

_URL_PATTERN = re.compile(r"https?://\S+")


class PublicCommandHandler:
    """
    Declarative handler for public Discord commands.

    This class does NOT register commands.
    It provides callable handlers to be wired by the command frontend.
    """

    def __init__(
        self,
        *,
        logger: DiscordLogAdapter,
        chat: ChatCompletionProvider,
        images: ImageGenerationProvider,
        weather: WeatherProvider,
        prices: PriceProvider,
        rooms: RoomProvider,
        latency_probe: LatencyProbe,
    ):
        self._logger = logger
        self._chat = chat
        self._images = images
        self._weather = weather
        self._prices = prices
        self._rooms = rooms
        self._latency_probe = latency_probe

    def _log_completion(
        self,
        ctx: CommandContext,
        command: str,
        success: bool,
        argument: Optional[str] = None,
    ):
        self._logger.log_command(
            command=command,
            guild_id=ctx.guild_id,
            user_id=ctx.user_id,
            user_name=ctx.user_name,
            success=success,
            argument=argument,
        )

    async def _finalize(
        self,
        ctx: CommandContext,
        *,
        content: Optional[str] = None,
        embed: Optional[discord.Embed] = None,
    ):
        """
        Replace the placeholder, falling back to a short plain-text notice
        when Discord rejects the reply.
        """
        try:
            await ctx.finalize(content=clip(content, MAX_CONTENT_LENGTH), embed=embed)
        except Exception as e:
            log.error(f"Failed to deliver command response: {e}")
            try:
                await ctx.finalize(content=DELIVERY_FAILED_MESSAGE, embed=None)
            except Exception as fallback_error:
                log.error(f"Failed to deliver fallback response: {fallback_error}")

    # --------------------------------------------------
    # /ping
    # --------------------------------------------------

    async def cmd_ping(self, ctx: CommandContext):
        latency: Optional[int] = None
        try:
            await ctx.acknowledge("Pinging...")

            latency = await self._latency_probe()

            if latency is not None:
                title, description = "🏓 Pong!", f"Latency is: {latency} ms"
            else:
                title, description = "❓ Pong?", "Failed to measure latency (network error?)"

            embed = command_embed(
                title=title,
                description=description,
                url=REPOSITORY_URL,
                footer=branding(),
            )
            await self._finalize(ctx, embed=embed)
        finally:
            self._log_completion(ctx, "ping", latency is not None)

    # --------------------------------------------------
    # /ai-chat
    # --------------------------------------------------

    async def cmd_chat(self, ctx: CommandContext, prompt: str):
        success = False
        try:
            await ctx.acknowledge("Sending request to ChatGPT API...")

            result = await self._chat.chat_complete(prompt)
            success = result.success

            if result.success:
                embed = command_embed(
                    title="ChatGPT",
                    description=result.message,
                    author_name=ctx.user_name,
                    author_icon=ctx.user_avatar_url,
                    footer="Powered by OpenAI",
                    footer_icon=OPENAI_ICON,
                )
                await self._finalize(ctx, embed=embed)
            else:
                await self._finalize(ctx, content=result.message)
        finally:
            self._log_completion(ctx, "ai-chat", success, prompt)

    # --------------------------------------------------
    # /ai-image
    # --------------------------------------------------

    async def cmd_image(self, ctx: CommandContext, prompt: str):
        success = False
        try:
            await ctx.acknowledge("Sending request to DALL-E API...")

            result = await self._images.generate_image(prompt)
            success = result.success

            if result.success:
                image_url = result.data if isinstance(result.data, str) else None
                if not image_url:
                    match = _URL_PATTERN.search(result.message)
                    image_url = match.group(0) if match else None

                embed = command_embed(
                    title="DALL-E",
                    description=result.message,
                    image_url=image_url,
                    author_name=ctx.user_name,
                    author_icon=ctx.user_avatar_url,
                    footer="Powered by OpenAI",
                    footer_icon=OPENAI_ICON,
                )
                await self._finalize(ctx, embed=embed)
            else:
                await self._finalize(ctx, content=result.message)
        finally:
            self._log_completion(ctx, "ai-image", success, prompt)

    # --------------------------------------------------
    # /room
    # --------------------------------------------------

    async def cmd_room(self, ctx: CommandContext, video_url: str = ""):
        success = False
        try:
            await ctx.acknowledge("Requesting Watch2Gether room...")

            result = await self._rooms.create_room(video_url)
            success = result.success

            if result.success:
                embed = command_embed(
                    title="Watch2Gether Room!",
                    description=f"Your room is ready: {result.message}",
                    author_name=ctx.user_name,
                    author_icon=ctx.user_avatar_url,
                    footer="Watch2Gether",
                    footer_icon=W2G_ICON,
                )
                await self._finalize(ctx, embed=embed)
            else:
                await self._finalize(ctx, content=result.message or "Error creating room.")
        finally:
            self._log_completion(ctx, "room", success, video_url)

    # --------------------------------------------------
    # /weather
    # --------------------------------------------------

    async def cmd_weather(self, ctx: CommandContext, city: str):
        success = False
        try:
            await ctx.acknowledge("Fetching weather data...")

            result = await self._weather.get_weather(city)
            success = result.success
            weather = result.data

            if result.success and weather is not None:
                temperature = (
                    f"{weather.temperature:.2f}" if weather.temperature is not None else "?"
                )
                embed = command_embed(
                    title=f"Weather in {weather.city or city} - {temperature}°C",
                    description=result.message,
                    author_name=ctx.user_name,
                    author_icon=ctx.user_avatar_url,
                    footer="Weather data by OpenWeatherMap",
                    footer_icon=OWM_ICON,
                )
                await self._finalize(ctx, embed=embed)
            else:
                await self._finalize(ctx, content=result.message)
        finally:
            self._log_completion(ctx, "weather", success, city)

    # --------------------------------------------------
    # /crypto
    # --------------------------------------------------

    async def cmd_crypto(
        self,
        ctx: CommandContext,
        symbol: str = "BTC",
        currency: str = "USDT",
    ):
        symbol = symbol.upper()
        success = False
        try:
            await ctx.acknowledge(f"Requesting {symbol} from ByBit API...")

            result = await self._prices.get_price(symbol, currency)
            success = result.success

            if result.success:
                embed = command_embed(
                    title=f"{symbol} - {currency} | ${result.message}",
                    description=f"Price of {symbol} in {currency}: ${result.message}",
                    author_name=ctx.user_name,
                    author_icon=ctx.user_avatar_url,
                    footer="Data provided by ByBit",
                    footer_icon=BYBIT_ICON,
                )
                await self._finalize(ctx, embed=embed)
            else:
                await self._finalize(ctx, content=result.message)
        finally:
            self._log_completion(ctx, "crypto", success, f"{symbol}/{currency}")
