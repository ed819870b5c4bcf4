"""예보 클라이언트 테스트입니다. / Forecast client tests."""

from __future__ import annotations

import asyncio
import logging
from typing import List

import httpx
import pytest
import respx

from meteo_alerts.weather.client import FetchClient
from meteo_alerts.weather.errors import (
    IncompleteResponseError,
    ProviderConnectionError,
    ProviderHttpError,
    ProviderTimeoutError,
)
from meteo_alerts.weather.request import build_query


def _client(settings, delays: List[float]) -> FetchClient:
    """지연을 기록하는 클라이언트입니다. / Client recording backoff delays."""

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    return FetchClient(settings, sleep=fake_sleep)


@pytest.mark.asyncio
async def test_fetch_returns_payload(provider_settings, sample_payload) -> None:
    """정상 응답을 반환합니다. / Returns the JSON payload on success."""

    delays: List[float] = []
    client = _client(provider_settings, delays)
    query = build_query(40.4168, -3.7038, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        route = mock.get(provider_settings.base_url).respond(json=sample_payload)
        payload = await client.fetch(query)
    assert payload == sample_payload
    assert route.call_count == 1
    request = route.calls.last.request
    assert request.url.params["timezone"] == "auto"
    assert request.headers["user-agent"] == provider_settings.user_agent
    assert delays == []


@pytest.mark.asyncio
async def test_timeout_is_retried_then_surfaced(provider_settings, caplog) -> None:
    """시간 초과는 재시도 후 전파됩니다. / Timeouts retry twice then surface."""

    delays: List[float] = []
    client = _client(provider_settings, delays)
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    caplog.set_level(logging.WARNING, logger="weather.client")
    with respx.mock() as mock:
        route = mock.get(provider_settings.base_url).mock(
            side_effect=httpx.ReadTimeout("The user aborted a request.")
        )
        with pytest.raises(ProviderTimeoutError, match="The user aborted a request.") as excinfo:
            await client.fetch(query)
    assert route.call_count == 3
    assert excinfo.value.attempts == 3
    assert delays == [1.0, 2.0]
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["Retrying (1/2)...", "Retrying (2/2)..."]


@pytest.mark.asyncio
async def test_connection_refused_recovers(provider_settings, sample_payload) -> None:
    """연결 실패 후 복구합니다. / Recovers after a refused connection."""

    delays: List[float] = []
    client = _client(provider_settings, delays)
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        route = mock.get(provider_settings.base_url).mock(
            side_effect=[
                httpx.ConnectError("connect ECONNREFUSED 127.0.0.1:443"),
                httpx.Response(200, json=sample_payload),
            ]
        )
        payload = await client.fetch(query)
    assert payload["timezone"] == "Europe/Madrid"
    assert route.call_count == 2
    assert delays == [1.0]


@pytest.mark.asyncio
async def test_connection_error_keeps_message(provider_settings) -> None:
    """연결 오류 메시지를 유지합니다. / Connection errors keep their message."""

    client = _client(provider_settings, [])
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        mock.get(provider_settings.base_url).mock(side_effect=httpx.ConnectError("connect ECONNREFUSED"))
        with pytest.raises(ProviderConnectionError, match="ECONNREFUSED") as excinfo:
            await client.fetch(query)
    assert excinfo.value.attempts == 3


@pytest.mark.asyncio
async def test_http_error_is_not_retried(provider_settings) -> None:
    """HTTP 오류는 재시도하지 않습니다. / HTTP errors are not retried."""

    delays: List[float] = []
    client = _client(provider_settings, delays)
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        route = mock.get(provider_settings.base_url).respond(status_code=503)
        with pytest.raises(ProviderHttpError) as excinfo:
            await client.fetch(query)
    assert route.call_count == 1
    assert delays == []
    assert excinfo.value.status == 503
    assert "503" in str(excinfo.value)
    assert str(excinfo.value) == "API Error: 503 Service Unavailable"


@pytest.mark.asyncio
async def test_missing_current_weather_is_incomplete(provider_settings) -> None:
    """current_weather 누락은 오류입니다. / Missing current_weather fails once."""

    client = _client(provider_settings, [])
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        route = mock.get(provider_settings.base_url).respond(json={"daily": {"time": []}})
        with pytest.raises(IncompleteResponseError, match="current_weather"):
            await client.fetch(query)
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_invalid_json_is_incomplete(provider_settings) -> None:
    """잘못된 JSON은 오류입니다. / Non-JSON bodies are rejected."""

    client = _client(provider_settings, [])
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        mock.get(provider_settings.base_url).respond(text="<html>oops</html>")
        with pytest.raises(IncompleteResponseError, match="Invalid JSON"):
            await client.fetch(query)


@pytest.mark.asyncio
async def test_zero_retries_makes_single_attempt(provider_settings) -> None:
    """재시도 0회 설정입니다. / max_retries=0 means one attempt."""

    settings = provider_settings.model_copy(update={"max_retries": 0})
    delays: List[float] = []
    client = _client(settings, delays)
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        route = mock.get(provider_settings.base_url).mock(side_effect=httpx.ConnectTimeout("timed out"))
        with pytest.raises(ProviderTimeoutError):
            await client.fetch(query)
    assert route.call_count == 1
    assert delays == []


@pytest.mark.asyncio
async def test_slow_provider_hits_hard_timeout(provider_settings, sample_payload) -> None:
    """느린 응답은 강제 취소됩니다. / Slow responses are cancelled and retried."""

    settings = provider_settings.model_copy(update={"timeout_seconds": 0.05})
    delays: List[float] = []
    client = _client(settings, delays)
    query = build_query(0.0, 0.0, base_url=settings.base_url)

    async def slow_response(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1.0)
        return httpx.Response(200, json=sample_payload)

    with respx.mock(assert_all_called=False) as mock:
        mock.get(settings.base_url).mock(side_effect=slow_response)
        with pytest.raises(ProviderTimeoutError, match="timed out after 0.05s") as excinfo:
            await client.fetch(query)
    assert excinfo.value.attempts == 3
    assert delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_empty_current_weather_is_accepted(provider_settings) -> None:
    """빈 current_weather는 허용됩니다. / An empty current_weather mapping passes."""

    client = _client(provider_settings, [])
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        mock.get(provider_settings.base_url).respond(json={"current_weather": {}})
        payload = await client.fetch(query)
    assert payload == {"current_weather": {}}


@pytest.mark.asyncio
async def test_undecodable_body_is_incomplete(provider_settings) -> None:
    """UTF-8이 아닌 본문은 오류입니다. / Non-UTF-8 bodies are rejected."""

    client = _client(provider_settings, [])
    query = build_query(0.0, 0.0, base_url=provider_settings.base_url)
    with respx.mock() as mock:
        mock.get(provider_settings.base_url).respond(
            content=b'{"temperature": "\x80"}',
            headers={"content-type": "application/json"},
        )
        with pytest.raises(IncompleteResponseError, match="Invalid JSON"):
            await client.fetch(query)


@pytest.mark.asyncio
async def test_attempts_are_counted_per_call(provider_settings, sample_payload) -> None:
    """동시 호출의 시도 횟수는 분리됩니다. / Concurrent calls count their own attempts."""

    client = _client(provider_settings, [])
    broken = build_query(10.0, 10.0, base_url=provider_settings.base_url)
    healthy = build_query(20.0, 20.0, base_url=provider_settings.base_url)

    def respond(request: httpx.Request) -> httpx.Response:
        if request.url.params["latitude"] == "10.0":
            raise httpx.ConnectError("connect ECONNREFUSED")
        return httpx.Response(200, json=sample_payload)

    with respx.mock() as mock:
        mock.get(provider_settings.base_url).mock(side_effect=respond)
        failed, payload = await asyncio.gather(
            client.fetch(broken), client.fetch(healthy), return_exceptions=True
        )
    assert isinstance(failed, ProviderConnectionError)
    assert failed.attempts == 3
    assert payload["timezone"] == "Europe/Madrid"
