"""
Interaction context wrapper.

Command handlers talk to Discord only through CommandContext, which keeps
them free of discord.py interaction objects and lets tests supply a fake.
"""

from __future__ import annotations

from typing import Optional, Protocol

import discord


class CommandContext(Protocol):
    user_id: Optional[int]
    user_name: str
    user_avatar_url: Optional[str]
    guild_id: Optional[int]

    async def acknowledge(self, placeholder: str) -> None: ...

    async def finalize(
        self,
        *,
        content: Optional[str] = None,
        embed: Optional[discord.Embed] = None,
    ) -> None: ...


class InteractionContext:
    """
    CommandContext backed by a live discord.Interaction.

    acknowledge() sends the provisional reply; finalize() edits that same
    reply in place, replacing both its text and embed.
    """

    def __init__(self, interaction: discord.Interaction):
        self._interaction = interaction

        user = interaction.user
        self.user_id: Optional[int] = user.id if user else None
        self.user_name: str = user.name if user else "unknown"
        self.user_avatar_url: Optional[str] = (
            user.display_avatar.url if user else None
        )
        self.guild_id: Optional[int] = interaction.guild_id

    async def acknowledge(self, placeholder: str) -> None:
        await self._interaction.response.send_message(placeholder)

    async def finalize(
        self,
        *,
        content: Optional[str] = None,
        embed: Optional[discord.Embed] = None,
    ) -> None:
        await self._interaction.edit_original_response(
            content=content,
            embed=embed,
        )
