"""Unit tests for the OpenWeatherMap adapter."""

import pytest

from services.http.transport import TransportResult
from services.weather.api.current import OpenWeatherMapService
from services.weather.models.weather import WeatherData

BERLIN = (
    '{"name": "Berlin",'
    '"weather": [{"description": "light rain"}],'
    '"main": {"temp": 10.55, "humidity": 76},'
    '"wind": {"speed": 5.5}}'
)


@pytest.fixture
def service(transport, full_config):
    return OpenWeatherMapService(transport=transport, config=full_config)


@pytest.mark.asyncio
async def test_full_payload(service, transport):
    transport.send.return_value = TransportResult(True, BERLIN)

    result = await service.get_weather("Berlin")

    assert result.success is True
    assert result.data == WeatherData(
        city="Berlin",
        description="light rain",
        temperature=10.55,
        humidity=76,
        wind_speed=5.5,
    )
    assert "Berlin" in result.message
    assert "light rain" in result.message
    assert result.message == (
        "In Berlin, the current weather: light rain. "
        "Temperature: 10.55°C, Humidity: 76%, Wind speed: 5.5 m/s."
    )


@pytest.mark.asyncio
async def test_partial_payload_leaves_fields_unset(service, transport):
    transport.send.return_value = TransportResult(
        True,
        '{"name": "Berlin", "weather": [{"description": "clear sky"}], "main": {"temp": 15.0}}',
    )

    result = await service.get_weather("Berlin")

    assert result.success is True
    assert result.data.city == "Berlin"
    assert result.data.description == "clear sky"
    assert result.data.temperature == 15.0
    assert result.data.humidity is None
    assert result.data.wind_speed is None


@pytest.mark.asyncio
async def test_endpoint_encodes_city(service, transport):
    transport.send.return_value = TransportResult(True, BERLIN)

    await service.get_weather("New York")

    url, method = transport.send.call_args.args[:2]
    assert url == (
        "https://api.openweathermap.org/data/2.5/weather?q="
        "New%20York&units=metric&appid=test-api-key"
    )
    assert method == "GET"


@pytest.mark.asyncio
async def test_missing_configuration(transport, empty_config):
    service = OpenWeatherMapService(transport=transport, config=empty_config)

    result = await service.get_weather("Berlin")

    assert result.success is False
    assert "No OpenWeatherMap API key or URL configured" in result.message
    assert result.data is None
    transport.send.assert_not_called()


@pytest.mark.asyncio
async def test_transport_failure(service, transport):
    transport.send.return_value = TransportResult(False, "StatusCode: 404 | city not found")

    result = await service.get_weather("Atlantis")

    assert result.success is False
    assert result.message == "StatusCode: 404 | city not found"
    assert result.data is None


@pytest.mark.asyncio
async def test_malformed_body(service, transport):
    transport.send.return_value = TransportResult(True, "not json")

    result = await service.get_weather("Berlin")

    assert result.success is False
    assert result.message.startswith("Failed to parse weather data: ")
    assert result.data is None


@pytest.mark.asyncio
async def test_repeated_calls_are_identical(service, transport):
    transport.send.return_value = TransportResult(True, BERLIN)

    first = await service.get_weather("Berlin")
    second = await service.get_weather("Berlin")

    assert first == second


@pytest.mark.parametrize(
    "speed, rendered",
    [(5.123456789, "5.123456789"), (4.0, "4"), (12.25, "12.25")],
)
def test_wind_speed_keeps_full_precision(speed, rendered):
    text = WeatherData(city="Oslo", wind_speed=speed).describe()

    assert text.endswith(f"Wind speed: {rendered} m/s.")
