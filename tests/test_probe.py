"""Unit tests for the latency probe."""

import httpx
import pytest

from services.http import probe as probe_module
from services.http.probe import measure_latency


@pytest.mark.asyncio
async def test_reports_milliseconds():
    seen = []

    def handler(request):
        seen.append(request.method)
        return httpx.Response(200)

    latency = await measure_latency("https://probe.test", transport=httpx.MockTransport(handler))

    assert isinstance(latency, int)
    assert latency >= 0
    assert seen == ["HEAD"]


@pytest.mark.asyncio
async def test_network_error_returns_none(monkeypatch):
    warnings = []
    monkeypatch.setattr(probe_module.log, "warning", warnings.append)

    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    latency = await measure_latency("https://probe.test", transport=httpx.MockTransport(handler))

    assert latency is None
    assert len(warnings) == 1
