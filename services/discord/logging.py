"""
Discord Logging Adapter

Turns bot lifecycle events and command completions into one structured
line each on the shared runtime logger.

IMPORTANT:
- This module MUST NOT send network requests
- This module MUST NOT depend on discord.py objects directly
"""

from __future__ import annotations

from typing import Optional, Dict, Any

from shared.logging.logger import get_logger

log = get_logger("discord.logging", runtime="discord")

_LEVELS = ("debug", "info", "warning", "error")


class DiscordLogAdapter:
    """
    Structured logging for Discord runtime events.
    """

    def log_event(
        self,
        *,
        event: str,
        level: str = "info",
        guild_id: Optional[int] = None,
        user_id: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        payload = {
            "event": event,
            "guild_id": guild_id,
            "user_id": user_id,
            "data": data or {},
        }

        emit = getattr(log, level if level in _LEVELS else "info")
        emit(f"Discord event: {payload}")

    # --------------------------------------------------
    # Convenience Helpers
    # --------------------------------------------------

    def log_startup(self):
        self.log_event(event="bot_online")

    def log_shutdown(self):
        self.log_event(event="bot_offline")

    def log_command(
        self,
        *,
        command: str,
        guild_id: Optional[int],
        user_id: Optional[int],
        user_name: Optional[str] = None,
        success: bool,
        argument: Optional[str] = None,
    ):
        """
        Log one completed slash command.

        Successful commands log at info, failed ones at warning. The user
        input is included when the command takes one.
        """
        data: Dict[str, Any] = {
            "command": command,
            "user": user_name,
            "success": success,
        }
        if argument is not None:
            data["input"] = argument

        self.log_event(
            event="slash_command",
            level="info" if success else "warning",
            data=data,
            guild_id=guild_id,
            user_id=user_id,
        )
