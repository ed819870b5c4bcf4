"""날씨 조회 파이프라인입니다. / Weather lookup pipeline."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..config import AlertThresholds
from ..reporting.summary import generate_weather_summary
from ..risk.alerts import check_weather_alerts
from .client import FetchClient
from .models import WeatherData, WeatherResult
from .normalizer import parse_weather_response
from .request import MetricSelection, build_query_for, coerce_coordinate

LOGGER = logging.getLogger("weather.pipeline")


async def get_weather(
    location: Any,
    options: MetricSelection | Mapping[str, Any] | None = None,
    *,
    client: FetchClient | None = None,
    thresholds: AlertThresholds | Mapping[str, Any] | None = None,
) -> WeatherResult:
    """좌표의 날씨를 조회합니다. / Fetch, normalize and assess a location.

    This is the single error boundary of the pipeline: any failure becomes
    ``WeatherResult(success=False, error=<message>)`` and nothing is raised.
    The cache is deliberately not consulted here; see ``WeatherService``.
    """

    fetcher = client or FetchClient()
    try:
        coordinate = coerce_coordinate(location)
        query = build_query_for(coordinate, options, fetcher.settings.base_url)
        raw = await fetcher.fetch(query)
        weather = parse_weather_response(raw)
        alerts = check_weather_alerts(weather, thresholds)
        data = WeatherData(
            current=weather.current,
            forecast=weather.forecast,
            hourly=weather.hourly,
            alerts=alerts,
        )
        return WeatherResult(
            success=True,
            data=data,
            summary=generate_weather_summary(weather),
        )
    except Exception as exc:
        LOGGER.warning(
            "weather_lookup_failed",
            extra={"error_type": type(exc).__name__, "error": str(exc)},
        )
        return WeatherResult(success=False, error=str(exc), data=None)
