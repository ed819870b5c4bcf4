"""요청 메트릭 수집기입니다. / Request metrics collector."""

from __future__ import annotations

from pydantic import Field

from ..base import MeteoBaseModel


class MetricsSnapshot(MeteoBaseModel):
    """메트릭 스냅샷입니다. / Metrics snapshot."""

    request_count: int = Field(alias="requestCount")
    success_count: int = Field(alias="successCount")
    error_count: int = Field(alias="errorCount")
    average_response_time: float = Field(alias="averageResponseTime")
    total_response_time: float = Field(alias="totalResponseTime")
    success_rate: float = Field(alias="successRate")


class MetricsCollector:
    """요청 메트릭 수집기입니다. / Request metrics collector."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """메트릭을 초기화합니다. / Reset all counters."""

        self.request_count = 0
        self.success_count = 0
        self.error_count = 0
        self.total_response_time = 0.0

    def record_request(self, response_time_ms: float, success: bool = True) -> None:
        """요청을 기록합니다. / Record one request outcome."""

        self.request_count += 1
        self.total_response_time += response_time_ms
        if success:
            self.success_count += 1
        else:
            self.error_count += 1

    def snapshot(self) -> MetricsSnapshot:
        """현재 메트릭을 반환합니다. / Return current metrics."""

        count = self.request_count
        return MetricsSnapshot(
            request_count=count,
            success_count=self.success_count,
            error_count=self.error_count,
            average_response_time=self.total_response_time / count if count else 0.0,
            total_response_time=self.total_response_time,
            success_rate=self.success_count / count * 100 if count else 0.0,
        )
