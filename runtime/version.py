"""Runtime version metadata for DiscordBotAI.

This module is import-safe and exposes version identifiers used in embeds,
the rotating presence and startup logs.
"""

from __future__ import annotations

PROJECT_NAME = "DiscordBotAI"
VERSION = "v1.4.0"
BUILD = "2026.10"
REPOSITORY_URL = "https://github.com/omgitsjan/DiscordBotAI"

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "BUILD",
    "REPOSITORY_URL",
    "as_string",
    "branding",
]


def as_string() -> str:
    """Return a concise version string."""

    return f"{PROJECT_NAME} {VERSION} (Build {BUILD})"


def branding() -> str:
    """Return the short branding line shown in presence and embed footers."""

    return f"{PROJECT_NAME} {VERSION}"
