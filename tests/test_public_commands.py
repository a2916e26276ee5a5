"""Unit tests for the public command handler."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from services.discord.commands.public import DELIVERY_FAILED_MESSAGE, PublicCommandHandler
from services.discord.logging import DiscordLogAdapter
from services.weather.models.weather import WeatherData
from shared.integrations.contracts import CommandResult


@pytest.fixture
def providers():
    return {
        "chat": MagicMock(chat_complete=AsyncMock()),
        "images": MagicMock(generate_image=AsyncMock()),
        "weather": MagicMock(get_weather=AsyncMock()),
        "prices": MagicMock(get_price=AsyncMock()),
        "rooms": MagicMock(create_room=AsyncMock()),
        "latency_probe": AsyncMock(return_value=23),
    }


@pytest.fixture
def audit():
    return MagicMock(spec=DiscordLogAdapter)


@pytest.fixture
def handler(providers, audit):
    return PublicCommandHandler(logger=audit, **providers)


def _assert_ack_then_final(ctx, placeholder):
    assert len(ctx.events) == 2
    assert ctx.events[0] == ("ack", placeholder)
    assert ctx.events[1][0] == "final"


class TestPing:
    @pytest.mark.asyncio
    async def test_reports_latency(self, handler, fake_context, audit):
        await handler.cmd_ping(fake_context)

        _assert_ack_then_final(fake_context, "Pinging...")
        embed = fake_context.final[2]
        assert embed.title == "🏓 Pong!"
        assert embed.description == "Latency is: 23 ms"
        assert embed.timestamp is not None
        audit.log_command.assert_called_once()

    @pytest.mark.asyncio
    async def test_probe_failure(self, handler, providers, fake_context):
        providers["latency_probe"].return_value = None

        await handler.cmd_ping(fake_context)

        embed = fake_context.final[2]
        assert embed.title == "❓ Pong?"
        assert embed.description == "Failed to measure latency (network error?)"


class TestChat:
    @pytest.mark.asyncio
    async def test_success_renders_embed(self, handler, providers, fake_context, audit):
        providers["chat"].chat_complete.return_value = CommandResult(True, "Hello there!")

        await handler.cmd_chat(fake_context, "Hi")

        _assert_ack_then_final(fake_context, "Sending request to ChatGPT API...")
        _, content, embed = fake_context.final
        assert content is None
        assert embed.title == "ChatGPT"
        assert embed.description == "Hello there!"
        assert embed.author.name == "tester"
        assert embed.footer.text == "Powered by OpenAI"
        providers["chat"].chat_complete.assert_awaited_once_with("Hi")
        audit.log_command.assert_called_once_with(
            command="ai-chat",
            guild_id=7,
            user_id=42,
            user_name="tester",
            success=True,
            argument="Hi",
        )

    @pytest.mark.asyncio
    async def test_failure_renders_plain_text(self, handler, providers, fake_context, audit):
        providers["chat"].chat_complete.return_value = CommandResult(
            False, "No OpenAI API key or ChatGPT API URL provided. Please update configuration."
        )

        await handler.cmd_chat(fake_context, "Hi")

        _, content, embed = fake_context.final
        assert embed is None
        assert content.startswith("No OpenAI API key")
        assert audit.log_command.call_args.kwargs["success"] is False


class TestImage:
    @pytest.mark.asyncio
    async def test_success_embeds_image(self, handler, providers, fake_context):
        url = "https://example.com/generated-image.png"
        providers["images"].generate_image.return_value = CommandResult(
            True, f"Here is your generated image: {url}", url
        )

        await handler.cmd_image(fake_context, "a cat")

        _assert_ack_then_final(fake_context, "Sending request to DALL-E API...")
        embed = fake_context.final[2]
        assert embed.title == "DALL-E"
        assert embed.image.url == url

    @pytest.mark.asyncio
    async def test_image_url_recovered_from_message(self, handler, providers, fake_context):
        url = "https://example.com/other.png"
        providers["images"].generate_image.return_value = CommandResult(
            True, f"Here is your generated image: {url}"
        )

        await handler.cmd_image(fake_context, "a dog")

        assert fake_context.final[2].image.url == url


class TestRoom:
    @pytest.mark.asyncio
    async def test_success(self, handler, providers, fake_context):
        providers["rooms"].create_room.return_value = CommandResult(True, "https://w2g.tv/rooms/K")

        await handler.cmd_room(fake_context)

        _assert_ack_then_final(fake_context, "Requesting Watch2Gether room...")
        assert fake_context.final[2].description == "Your room is ready: https://w2g.tv/rooms/K"
        providers["rooms"].create_room.assert_awaited_once_with("")

    @pytest.mark.asyncio
    async def test_failure(self, handler, providers, fake_context):
        providers["rooms"].create_room.return_value = CommandResult(False, "StatusCode: 500 | down")

        await handler.cmd_room(fake_context, "https://youtube.com/watch?v=abc")

        assert fake_context.final[1:] == ("StatusCode: 500 | down", None)


class TestWeather:
    @pytest.mark.asyncio
    async def test_success(self, handler, providers, fake_context, audit):
        weather = WeatherData(city="Berlin", description="light rain", temperature=10.55)
        providers["weather"].get_weather.return_value = CommandResult(True, "In Berlin...", weather)

        await handler.cmd_weather(fake_context, "Berlin")

        _assert_ack_then_final(fake_context, "Fetching weather data...")
        embed = fake_context.final[2]
        assert embed.title == "Weather in Berlin - 10.55°C"
        assert embed.description == "In Berlin..."
        assert audit.log_command.call_args.kwargs["argument"] == "Berlin"

    @pytest.mark.asyncio
    async def test_failure(self, handler, providers, fake_context):
        providers["weather"].get_weather.return_value = CommandResult(False, "Failed to parse weather data: x")

        await handler.cmd_weather(fake_context, "Berlin")

        assert fake_context.final[1:] == ("Failed to parse weather data: x", None)


class TestCrypto:
    @pytest.mark.asyncio
    async def test_success(self, handler, providers, fake_context):
        providers["prices"].get_price.return_value = CommandResult(True, "50000.00")

        await handler.cmd_crypto(fake_context, "btc", "USDT")

        _assert_ack_then_final(fake_context, "Requesting BTC from ByBit API...")
        embed = fake_context.final[2]
        assert embed.title == "BTC - USDT | $50000.00"
        assert embed.description == "Price of BTC in USDT: $50000.00"
        providers["prices"].get_price.assert_awaited_once_with("BTC", "USDT")

    @pytest.mark.asyncio
    async def test_failure(self, handler, providers, fake_context):
        providers["prices"].get_price.return_value = CommandResult(False, "Could not fetch price for BTC.")

        await handler.cmd_crypto(fake_context)

        assert fake_context.final[1:] == ("Could not fetch price for BTC.", None)


class TestDiscordLimits:
    @pytest.mark.asyncio
    async def test_long_chat_reply_is_clipped_to_embed_limit(self, handler, providers, fake_context):
        providers["chat"].chat_complete.return_value = CommandResult(True, "x" * 5000)

        await handler.cmd_chat(fake_context, "Write a novel")

        description = fake_context.final[2].description
        assert len(description) == 4096
        assert description.endswith("...")

    @pytest.mark.asyncio
    async def test_long_failure_message_is_clipped_to_content_limit(self, handler, providers, fake_context):
        providers["prices"].get_price.return_value = CommandResult(
            False, "StatusCode: 502 | " + "y" * 3000
        )

        await handler.cmd_crypto(fake_context)

        content = fake_context.final[1]
        assert len(content) == 2000
        assert content.startswith("StatusCode: 502 | ")


class TestDeliveryFailures:
    @pytest.mark.asyncio
    async def test_rejected_reply_falls_back_to_plain_text(self, handler, providers, fake_context, audit):
        providers["chat"].chat_complete.return_value = CommandResult(True, "Hello there!")
        original_finalize = fake_context.finalize
        attempts = []

        async def finalize(*, content=None, embed=None):
            attempts.append((content, embed))
            if len(attempts) == 1:
                raise RuntimeError("400 Bad Request (invalid form body)")
            await original_finalize(content=content, embed=embed)

        fake_context.finalize = finalize

        await handler.cmd_chat(fake_context, "Hi")

        assert len(attempts) == 2
        assert fake_context.final == ("final", DELIVERY_FAILED_MESSAGE, None)
        audit.log_command.assert_called_once()
        assert audit.log_command.call_args.kwargs["success"] is True

    @pytest.mark.asyncio
    async def test_completion_is_logged_when_provider_raises(self, handler, providers, fake_context, audit):
        providers["weather"].get_weather.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await handler.cmd_weather(fake_context, "Berlin")

        audit.log_command.assert_called_once()
        assert audit.log_command.call_args.kwargs["success"] is False
