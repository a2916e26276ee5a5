from dataclasses import dataclass
from typing import Any, Dict, Optional

from shared.utils.json_path import dig


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _format(value: Any, fmt: str = "") -> str:
    if value is None:
        return ""
    return format(value, fmt)


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


@dataclass
class WeatherData:
    """
    Current conditions for one city.

    Every field is optional: OpenWeatherMap omits blocks freely and an
    absent field is not an error.
    """

    city: Optional[str] = None
    description: Optional[str] = None
    temperature: Optional[float] = None
    humidity: Optional[int] = None
    wind_speed: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "WeatherData":
        if not isinstance(payload, dict):
            raise ValueError("weather payload root is not an object")

        name = dig(payload, "name")
        description = dig(payload, "weather", 0, "description")

        return cls(
            city=str(name) if name is not None else None,
            description=str(description) if description is not None else None,
            temperature=_as_float(dig(payload, "main", "temp")),
            humidity=_as_int(dig(payload, "main", "humidity")),
            wind_speed=_as_float(dig(payload, "wind", "speed")),
        )

    def describe(self) -> str:
        return (
            f"In {_format(self.city)}, the current weather: {_format(self.description)}. "
            f"Temperature: {_format(self.temperature, '.2f')}°C, "
            f"Humidity: {_format(self.humidity)}%, "
            f"Wind speed: {_format_number(self.wind_speed)} m/s."
        )
