"""
Discord Public Slash Command Registration

This module is the thin registration layer that exposes the public slash
commands to Discord and delegates ALL logic to PublicCommandHandler.

Responsibilities:
- Register slash commands and their options
- Wrap each interaction in an InteractionContext
- Delegate execution to handler methods

IMPORTANT DESIGN RULES:
- NO business logic
- NO provider calls
- NO Discord client creation
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from shared.logging.logger import get_logger

from services.discord.commands.context import InteractionContext
from services.discord.commands.public import PublicCommandHandler

log = get_logger("discord.commands.public.register", runtime="discord")


# ==================================================
# Registration Entry Point
# ==================================================

def build_commands(handler: PublicCommandHandler) -> list[app_commands.Command]:
    """
    Build the public slash commands bound to handler.
    """

    # --------------------------------------------------
    # /ping
    # --------------------------------------------------

    @app_commands.command(
        name="ping",
        description="Check if the bot is online and view the latency.",
    )
    async def ping(interaction: discord.Interaction):
        await handler.cmd_ping(InteractionContext(interaction))

    # --------------------------------------------------
    # /ai-chat
    # --------------------------------------------------

    @app_commands.command(
        name="ai-chat",
        description="Send a prompt to ChatGPT and get an AI-powered reply.",
    )
    @app_commands.describe(prompt="Your question or prompt for the ChatGPT AI.")
    async def ai_chat(interaction: discord.Interaction, prompt: str):
        await handler.cmd_chat(InteractionContext(interaction), prompt)

    # --------------------------------------------------
    # /ai-image
    # --------------------------------------------------

    @app_commands.command(
        name="ai-image",
        description="Generate an image with DALL-E from your description.",
    )
    @app_commands.describe(prompt="Describe how the generated image should look.")
    async def ai_image(interaction: discord.Interaction, prompt: str):
        await handler.cmd_image(InteractionContext(interaction), prompt)

    # --------------------------------------------------
    # /room
    # --------------------------------------------------

    @app_commands.command(
        name="room",
        description="Create a Watch2Gether room for you and your friends.",
    )
    @app_commands.rename(video_url="video-url")
    @app_commands.describe(video_url="An optional video URL to start playing immediately.")
    async def room(interaction: discord.Interaction, video_url: str = ""):
        await handler.cmd_room(InteractionContext(interaction), video_url)

    # --------------------------------------------------
    # /weather
    # --------------------------------------------------

    @app_commands.command(
        name="weather",
        description="Get the current weather for a specified city.",
    )
    @app_commands.describe(city="The city to retrieve weather data for.")
    async def weather(interaction: discord.Interaction, city: str):
        await handler.cmd_weather(InteractionContext(interaction), city)

    # --------------------------------------------------
    # /crypto
    # --------------------------------------------------

    @app_commands.command(
        name="crypto",
        description="Get the price for a specific cryptocurrency symbol.",
    )
    @app_commands.describe(
        symbol="The cryptocurrency symbol, e.g. BTC (default: BTC).",
        currency="The comparison currency, e.g. USDT (default: USDT).",
    )
    async def crypto(
        interaction: discord.Interaction,
        symbol: str = "BTC",
        currency: str = "USDT",
    ):
        await handler.cmd_crypto(InteractionContext(interaction), symbol, currency)

    return [ping, ai_chat, ai_image, room, weather, crypto]


def setup(bot: commands.Bot, *, handler: PublicCommandHandler):
    """
    Register all public slash commands on the bot's command tree.

    Called exactly once by the Discord client during startup.
    """

    for command in build_commands(handler):
        bot.tree.add_command(command)

    log.info("Discord public slash commands registered")
