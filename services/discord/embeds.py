from __future__ import annotations

from datetime import datetime, timezone

import discord

# Discord API limits
MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 4096
MAX_CONTENT_LENGTH = 2000

_ELLIPSIS = "..."


def clip(text: str | None, limit: int) -> str | None:
    """
    Shorten text to at most limit characters, marking the cut with "...".
    """
    if text is None or len(text) <= limit:
        return text
    return text[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def success_embed(title: str, description: str | None = None) -> discord.Embed:
    return discord.Embed(
        title=title,
        description=description,
        color=discord.Color.green(),
    )


def command_embed(
    *,
    title: str,
    description: str | None,
    footer: str,
    footer_icon: str | None = None,
    author_name: str | None = None,
    author_icon: str | None = None,
    url: str | None = None,
    image_url: str | None = None,
) -> discord.Embed:
    """
    Standard command reply: title, description, author, footer and a UTC
    timestamp.
    """
    embed = success_embed(
        clip(title, MAX_TITLE_LENGTH),
        clip(description, MAX_DESCRIPTION_LENGTH),
    )
    embed.timestamp = datetime.now(timezone.utc)

    if url:
        embed.url = url
    if author_name:
        embed.set_author(name=author_name, icon_url=author_icon)
    if image_url:
        embed.set_image(url=image_url)

    embed.set_footer(text=footer, icon_url=footer_icon)
    return embed
