"""
HTTP transport shared by every provider adapter.

Responsibilities:
- Build exactly one outbound request (headers + optional JSON body)
- Normalize the outcome into a TransportResult
- Log every failure path with the operation name

IMPORTANT:
- send() MUST NOT raise to its caller
- No retries, no caching (one attempt per call)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

import httpx

from shared.logging.logger import get_logger

log = get_logger("http.transport", runtime="discord")

DEFAULT_TIMEOUT_SECONDS = 30.0

Header = Tuple[str, str]


@dataclass(frozen=True)
class TransportRequest:
    url: str
    method: str = "GET"
    headers: Tuple[Header, ...] = ()
    json_body: Optional[Any] = None


@dataclass(frozen=True)
class TransportResult:
    """
    Outcome of one HTTP call.

    When succeeded is False, content always holds a diagnostic string.
    When succeeded is True, content is the raw body (possibly empty).
    """

    succeeded: bool
    content: Optional[str] = None


def _provider_error(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except Exception:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error

    return response.reason_phrase or "Request failed"


class HttpTransport:
    """
    Single chokepoint for outbound HTTP.

    A fresh httpx.AsyncClient is opened per call so the transport holds no
    connection state between commands.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout
        self._transport = transport

    async def send(
        self,
        resource: str,
        method: str = "GET",
        error_message: Optional[str] = None,
        headers: Optional[Iterable[Header]] = None,
        json_body: Optional[Any] = None,
    ) -> TransportResult:
        """
        Send one request and return a normalized result.
        """
        request = TransportRequest(
            url=resource,
            method=method.upper(),
            headers=tuple(headers or ()),
            json_body=json_body,
        )

        try:
            response = await self._execute(request)
        except Exception as e:
            fail_message = f"Unknown error: {str(e) or type(e).__name__}"
            log.error(f"(send) {request.method} {request.url}: {fail_message}")
            return TransportResult(False, fail_message)

        if response.is_success:
            return TransportResult(True, response.text)

        content = (
            f"StatusCode: {response.status_code} | "
            f"{error_message or _provider_error(response)}"
        )
        log.error(f"(send) {request.method} {request.url}: {content}")
        return TransportResult(False, content)

    async def _execute(self, request: TransportRequest) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            outbound = client.build_request(
                request.method,
                request.url,
                headers=list(request.headers),
                json=request.json_body,
            )
            return await client.send(outbound)
