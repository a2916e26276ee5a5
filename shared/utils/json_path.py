"""Tolerant accessors for loosely-shaped JSON payloads."""
from __future__ import annotations

from typing import Any, Optional, Union

PathPart = Union[str, int]


def dig(payload: Any, *path: PathPart) -> Optional[Any]:
    """Walk ``payload`` along ``path`` and return the value found.

    String parts index into objects, integer parts into arrays. Any missing
    key, out-of-range index or shape mismatch yields ``None`` instead of
    raising, so callers can treat an absent field as a payload error.
    """

    current = payload
    for part in path:
        if isinstance(part, int):
            if not isinstance(current, list) or not -len(current) <= part < len(current):
                return None
            current = current[part]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        if current is None:
            return None
    return current
