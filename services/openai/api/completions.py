"""
OpenAI chat completion + image generation adapter.

Responsibilities:
- Resolve OpenAI configuration on every call
- Build ChatGPT / DALL-E request bodies
- Extract the first completion text / image URL from the response

This module is stateless and safe to call concurrently.
"""

from __future__ import annotations

import json

from services.http.transport import HttpTransport
from shared.config.settings import BotConfig
from shared.integrations.contracts import CommandResult
from shared.logging.logger import get_logger
from shared.utils.json_path import dig

log = get_logger("openai.completions", runtime="discord")

DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_IMAGE_MODEL = "dall-e-2"
IMAGE_SIZE = "1024x1024"

CHAT_CONFIG_ERROR = (
    "No OpenAI API key or ChatGPT API URL provided. Please update configuration."
)
IMAGE_CONFIG_ERROR = (
    "No OpenAI API key or DALL-E API URL provided. Please update configuration."
)
CHAT_PAYLOAD_ERROR = "Could not deserialize response from ChatGPT API!"
IMAGE_PAYLOAD_ERROR = "Could not deserialize image URL from DALL-E API!"


def _auth_headers(api_key: str) -> list[tuple[str, str]]:
    return [
        ("Content-Type", "application/json"),
        ("Authorization", f"Bearer {api_key}"),
    ]


def _extract(content: str, *path) -> str:
    try:
        payload = json.loads(content)
    except ValueError:
        return ""
    value = dig(payload, *path)
    return str(value) if value is not None else ""


class OpenAIService:
    """
    Adapter for the OpenAI ChatGPT and DALL-E endpoints.
    """

    def __init__(self, *, transport: HttpTransport, config: BotConfig):
        self._transport = transport
        self._config = config

    # ------------------------------------------------------------
    # Chat completion
    # ------------------------------------------------------------

    async def chat_complete(self, prompt: str) -> CommandResult:
        api_key = self._config.get("OpenAi:ApiKey")
        chat_url = self._config.get("OpenAi:ChatGPTApiUrl")

        if not api_key or not chat_url:
            log.error(f"chat_complete: {CHAT_CONFIG_ERROR}")
            return CommandResult.fail(CHAT_CONFIG_ERROR)

        body = {
            "model": self._config.get("OpenAi:ChatModel", DEFAULT_CHAT_MODEL),
            "messages": [{"role": "user", "content": prompt}],
        }

        response = await self._transport.send(
            chat_url,
            "POST",
            "Unknown error occurred in chat_complete",
            _auth_headers(api_key),
            body,
        )

        if not response.succeeded or response.content is None:
            return CommandResult.fail(
                (response.content or "").lstrip("\n") or "Unknown error."
            )

        text = _extract(response.content, "choices", 0, "message", "content")
        if not text:
            log.error(f"chat_complete: {CHAT_PAYLOAD_ERROR}")
            return CommandResult.fail(CHAT_PAYLOAD_ERROR)

        return CommandResult.ok(text)

    # ------------------------------------------------------------
    # Image generation
    # ------------------------------------------------------------

    async def generate_image(self, prompt: str) -> CommandResult:
        api_key = self._config.get("OpenAi:ApiKey")
        image_url = self._config.get("OpenAi:DallEApiUrl")

        if not api_key or not image_url:
            log.error(f"generate_image: {IMAGE_CONFIG_ERROR}")
            return CommandResult.fail(IMAGE_CONFIG_ERROR)

        body = {
            "model": self._config.get("OpenAi:ImageModel", DEFAULT_IMAGE_MODEL),
            "prompt": prompt,
            "n": 1,
            "size": IMAGE_SIZE,
        }

        response = await self._transport.send(
            image_url,
            "POST",
            "Received a failed response from the DALL-E API.",
            _auth_headers(api_key),
            body,
        )

        if not response.succeeded or response.content is None:
            return CommandResult.fail(response.content or "Unknown error.")

        url = _extract(response.content, "data", 0, "url")
        if not url:
            log.error(f"generate_image: {IMAGE_PAYLOAD_ERROR}")
            return CommandResult.fail(IMAGE_PAYLOAD_ERROR)

        log.info(f"generate_image: Generated image URL: {url}")
        return CommandResult.ok(f"Here is your generated image: {url}", data=url)
