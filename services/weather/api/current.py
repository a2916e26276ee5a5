import json
from urllib.parse import quote

from services.http.transport import HttpTransport
from services.weather.models.weather import WeatherData
from shared.config.settings import BotConfig
from shared.integrations.contracts import CommandResult
from shared.logging.logger import get_logger

log = get_logger("weather.current", runtime="discord")

CONFIG_ERROR = (
    "No OpenWeatherMap API key or URL configured. Please update your configuration."
)


class OpenWeatherMapService:
    """
    Current-weather lookup against OpenWeatherMap.

    The configured ApiUrl is a template ending in the city query parameter,
    e.g. "https://api.openweathermap.org/data/2.5/weather?q=".
    """

    def __init__(self, *, transport: HttpTransport, config: BotConfig):
        self._transport = transport
        self._config = config

    def _endpoint(self, base_url: str, api_key: str, city: str) -> str:
        return f"{base_url}{quote(city, safe='')}&units=metric&appid={api_key}"

    async def get_weather(self, city: str) -> CommandResult:
        """
        Fetch current conditions for city.

        On success, result.data is a WeatherData.
        """
        api_key = self._config.get("OpenWeatherMap:ApiKey")
        base_url = self._config.get("OpenWeatherMap:ApiUrl")

        if not api_key or not base_url:
            log.error(f"get_weather: {CONFIG_ERROR}")
            return CommandResult.fail(CONFIG_ERROR)

        response = await self._transport.send(
            self._endpoint(base_url, api_key, city),
            "GET",
            f"get_weather: Failed to fetch weather data for city '{city}'.",
        )

        if not response.succeeded:
            return CommandResult.fail(response.content or "API call failed.")

        try:
            weather = WeatherData.from_payload(json.loads(response.content or ""))
        except Exception as e:
            error = f"Failed to parse weather data: {e}"
            log.error(f"get_weather: {error}")
            return CommandResult.fail(error)

        message = weather.describe()
        log.info(f"get_weather: Weather data fetched successfully. Response: {message}")
        return CommandResult.ok(message, data=weather)
