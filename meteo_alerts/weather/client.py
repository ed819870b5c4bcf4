"""예보 HTTP 클라이언트입니다. / Forecast HTTP client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import ProviderSettings
from .errors import (
    IncompleteResponseError,
    ProviderConnectionError,
    ProviderHttpError,
    ProviderRequestError,
    ProviderTimeoutError,
    TransientNetworkError,
    WeatherServiceError,
)
from .request import QueryDescriptor

LOGGER = logging.getLogger("weather.client")

SleepFunc = Callable[[float], Awaitable[Any]]


class FetchClient:
    """재시도 가능한 예보 클라이언트입니다. / Forecast client with retry.

    Each attempt is cancelled after ``timeout_seconds``. Timeouts and
    connection failures are retried with ``backoff * 2**attempt`` second
    delays, up to ``max_retries`` times; every other failure surfaces on the
    first attempt.
    """

    def __init__(
        self,
        settings: ProviderSettings | None = None,
        sleep: SleepFunc = asyncio.sleep,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ProviderSettings()
        self._sleep = sleep
        self._transport = transport

    async def fetch(self, query: QueryDescriptor) -> Dict[str, Any]:
        """예보 JSON을 가져옵니다. / Fetch forecast JSON.

        The attempt count belongs to the call: it is logged on success and
        stored on the raised error as ``attempts`` on failure.
        """

        max_retries = self.settings.max_retries
        retryer = AsyncRetrying(
            wait=wait_exponential(
                multiplier=self.settings.backoff_base_seconds, exp_base=2, min=0
            ),
            stop=stop_after_attempt(max_retries + 1),
            retry=retry_if_exception_type(TransientNetworkError),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        attempts = 0
        payload: Dict[str, Any] | None = None
        try:
            async for attempt in retryer:
                with attempt:
                    attempts += 1
                    payload = await self._fetch_once(query)
        except WeatherServiceError as exc:
            exc.attempts = attempts
            raise
        if payload is None:  # pragma: no cover - safety net
            raise IncompleteResponseError("Retry loop produced no result")
        LOGGER.debug(
            "provider_fetch",
            extra={"event": "provider_fetch", "attempts": attempts},
        )
        return payload

    def _log_retry(self, retry_state: RetryCallState) -> None:
        """재시도를 기록합니다. / Log a retry."""

        error = retry_state.outcome.exception() if retry_state.outcome else None
        LOGGER.warning(
            "Retrying (%d/%d)...",
            retry_state.attempt_number,
            self.settings.max_retries,
            extra={
                "event": "provider_retry",
                "retry": retry_state.attempt_number,
                "max_retries": self.settings.max_retries,
                "error": str(error),
            },
        )

    async def _fetch_once(self, query: QueryDescriptor) -> Dict[str, Any]:
        """단일 요청을 실행합니다. / Execute a single attempt."""

        timeout = self.settings.timeout_seconds
        try:
            response = await asyncio.wait_for(self._get(query), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"Request timed out after {timeout:g}s"
            ) from exc
        except httpx.TimeoutException as exc:
            raise ProviderTimeoutError(str(exc)) from exc
        except httpx.ConnectError as exc:
            raise ProviderConnectionError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise ProviderRequestError(str(exc)) from exc
        if not response.is_success:
            raise ProviderHttpError(response.status_code, response.reason_phrase)
        return _parse_payload(response)

    async def _get(self, query: QueryDescriptor) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout_seconds),
            transport=self._transport,
        ) as client:
            return await client.get(
                query.base_url,
                params=query.params,
                headers={
                    "accept": "application/json",
                    "user-agent": self.settings.user_agent,
                },
            )


def _parse_payload(response: httpx.Response) -> Dict[str, Any]:
    """응답 본문을 검증합니다. / Parse and validate the response body."""

    try:
        payload = response.json()
    except ValueError as exc:
        raise IncompleteResponseError("Invalid JSON response") from exc
    if not isinstance(payload, dict) or payload.get("current_weather") is None:
        raise IncompleteResponseError("Incomplete response: missing current_weather")
    return payload
