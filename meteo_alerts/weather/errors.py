"""날씨 파이프라인 오류입니다. / Weather pipeline errors."""

from __future__ import annotations


class WeatherServiceError(Exception):
    """날씨 서비스 오류입니다. / Base weather service error."""

    attempts: int = 0


class ValidationError(WeatherServiceError, ValueError):
    """입력 좌표 오류입니다. / Invalid input error, never retried."""


class ProviderHttpError(WeatherServiceError):
    """제공자 HTTP 오류입니다. / Non-success HTTP status from the provider."""

    def __init__(self, status: int, status_text: str) -> None:
        self.status = status
        self.status_text = status_text
        super().__init__(f"API Error: {status} {status_text}".rstrip())


class IncompleteResponseError(WeatherServiceError):
    """불완전한 응답 오류입니다. / Malformed success response."""


class ProviderRequestError(WeatherServiceError):
    """재시도하지 않는 전송 오류입니다. / Non-retryable transport failure."""


class TransientNetworkError(WeatherServiceError):
    """일시적 네트워크 오류입니다. / Retryable network failure."""


class ProviderTimeoutError(TransientNetworkError):
    """요청 시간 초과입니다. / Request cancelled after the hard timeout."""


class ProviderConnectionError(TransientNetworkError):
    """연결 실패입니다. / Connection refused or unreachable provider."""
