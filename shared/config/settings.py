"""
Bot configuration loader.

This module resolves the process-wide configuration consumed by the
provider adapters and the Discord client.

Sources (later wins):
- appsettings.json (nested sections flattened to "Section:Key")
- environment variables, where "Section__Key" maps to "Section:Key"

Design rules:
- Import-safe (no side effects)
- Values are looked up fresh on every call; nothing is cached by adapters
- Missing and blank values are both treated as "not configured"
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from shared.logging.logger import get_logger

log = get_logger("shared.config.settings")


DEFAULT_CONFIG_PATH = Path("appsettings.json")

# Keys consumed by the runtime, listed for diagnostics.
KNOWN_KEYS = (
    "DiscordBot:Token",
    "OpenAi:ApiKey",
    "OpenAi:ChatGPTApiUrl",
    "OpenAi:DallEApiUrl",
    "OpenAi:ChatModel",
    "OpenAi:ImageModel",
    "OpenWeatherMap:ApiKey",
    "OpenWeatherMap:ApiUrl",
    "ByBit:ApiUrl",
    "Watch2Gether:ApiKey",
    "Watch2Gether:CreateRoomUrl",
    "Watch2Gether:ShowRoomUrl",
    "Http:TimeoutSeconds",
    "Bot:StatusIntervalSeconds",
    "Bot:StatusBranding",
    "Bot:ExcusesPath",
)


class BotConfig:
    """
    Read-only key/value view over the merged configuration.

    Keys use the "Section:Key" form (e.g. "OpenAi:ApiKey").
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, str] = {
            str(k): str(v) for k, v in (values or {}).items() if v is not None
        }

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Return the value for key, or default when missing or blank.
        """
        value = self._values.get(key)
        if value is None or not value.strip():
            return default
        return value

    def get_float(self, key: str, default: float) -> float:
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return float(raw)
        except ValueError:
            log.warning(f"Config value {key}={raw!r} is not a number; using {default}")
            return default

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def snapshot(self) -> Dict[str, bool]:
        """
        Return which known keys are configured, without exposing values.
        """
        return {key: key in self for key in KNOWN_KEYS}


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------

def _flatten(payload: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in payload.items():
        name = f"{prefix}:{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        log.debug(f"{path} not found; relying on environment only")
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception as e:
        log.warning(f"Failed to load {path}; ignoring file: {e}")
        return {}

    if not isinstance(data, dict):
        log.warning(f"{path} root is not an object; ignoring file")
        return {}

    return _flatten(data)


def _from_environ(environ: Mapping[str, str]) -> Dict[str, str]:
    return {
        key.replace("__", ":"): value
        for key, value in environ.items()
        if "__" in key
    }


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------

def load_config(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> BotConfig:
    """
    Load .env, then merge appsettings.json with environment overrides.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    config_path = Path(path or environ.get("BOT_CONFIG_PATH") or DEFAULT_CONFIG_PATH)

    values: Dict[str, Any] = {}
    values.update(_load_json(config_path))
    values.update(_from_environ(environ))

    config = BotConfig(values)
    configured = sum(1 for present in config.snapshot().values() if present)
    log.info(f"Configuration loaded: {configured}/{len(KNOWN_KEYS)} known keys set")
    return config
