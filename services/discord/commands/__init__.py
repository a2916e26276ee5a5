"""
Discord Command Package

This package centralizes registration for the bot's command surfaces.

Command categories:
- public → user-facing provider commands (ping, AI, weather, crypto, rooms)

IMPORTANT DESIGN RULES:
- No command registration on import
- No Discord client ownership
- Explicit setup() calls only
"""

from __future__ import annotations

from discord.ext import commands

from shared.logging.logger import get_logger

from services.discord.commands import public_commands
from services.discord.commands.public import PublicCommandHandler

log = get_logger("discord.commands", runtime="discord")


def setup(bot: commands.Bot, *, handler: PublicCommandHandler):
    """
    Register all Discord command surfaces.

    This function is called exactly once by the Discord client
    during startup.
    """

    public_commands.setup(bot, handler=handler)

    log.info("Discord command surfaces initialized")
