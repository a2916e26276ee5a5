"""
Developer excuse provider for the status rotation.

The excuse list is loaded once at construction and never mutated
afterwards, so concurrent draws need no locking.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional, Tuple

from shared.logging.logger import get_logger

log = get_logger("discord.excuses", runtime="discord")

DEFAULT_EXCUSES_PATH = Path(__file__).resolve().parents[2] / "shared" / "data" / "excuses.json"

FALLBACK_EXCUSE = (
    "Could not fetch a developer excuse. Please check the configuration or file content."
)


class ExcuseProvider:
    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else DEFAULT_EXCUSES_PATH
        self._excuses: Tuple[str, ...] = self._load()

    def _load(self) -> Tuple[str, ...]:
        if not self._path.exists():
            log.error(f"Developer excuses file not found at: {self._path}")
            return ()

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except Exception as e:
            log.error(f"Error loading developer excuses from file {self._path}: {e}")
            return ()

        raw = data.get("en") if isinstance(data, dict) else None
        excuses = tuple(str(e) for e in raw) if isinstance(raw, list) else ()

        if not excuses:
            log.warning("Developer excuses file loaded, but no excuses found in 'en' array.")
        else:
            log.info(f"Loaded {len(excuses)} developer excuse(s)")

        return excuses

    @property
    def count(self) -> int:
        return len(self._excuses)

    def random_excuse(self) -> str:
        if not self._excuses:
            return FALLBACK_EXCUSE
        return random.choice(self._excuses)
