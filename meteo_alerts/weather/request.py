"""예보 요청 빌더입니다. / Forecast request builder."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Tuple

import httpx
from pydantic import Field, field_validator

from ..base import MeteoBaseModel
from ..config import DEFAULT_BASE_URL
from .errors import ValidationError

HOURLY_WINDOW_HOURS = 24

DEFAULT_DAILY_METRICS: Dict[str, bool] = {
    "temperature_2m_max": True,
    "temperature_2m_min": True,
    "precipitation_sum": True,
    "weathercode": True,
}

DEFAULT_HOURLY_METRICS: Dict[str, bool] = {
    "precipitation": True,
    "windspeed_10m": True,
    "relativehumidity_2m": True,
    "temperature_2m": True,
    "weathercode": True,
}


class Coordinate(MeteoBaseModel):
    """지리 좌표입니다. / Geographic coordinate."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @property
    def key(self) -> Tuple[float, float]:
        """정확 일치 키입니다. / Exact-match key."""

        return (self.latitude, self.longitude)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_coordinate(latitude: Any, longitude: Any) -> Coordinate:
    """좌표를 검증합니다. / Validate and build a coordinate.

    Raises:
        ValidationError: when either value is not a number or lies outside
            the valid latitude/longitude range.
    """

    if not (_is_number(latitude) and _is_number(longitude)):
        raise ValidationError("Latitude and longitude must be numbers")
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValidationError("Coordinates out of valid range")
    if abs(latitude) > 90 or abs(longitude) > 180:
        raise ValidationError("Coordinates out of valid range")
    return Coordinate(latitude=latitude, longitude=longitude)


def coerce_coordinate(location: Any) -> Coordinate:
    """위치 입력을 좌표로 변환합니다. / Coerce a location input to a coordinate."""

    if isinstance(location, Coordinate):
        return location
    if isinstance(location, Mapping):
        return parse_coordinate(location.get("latitude"), location.get("longitude"))
    return parse_coordinate(
        getattr(location, "latitude", None),
        getattr(location, "longitude", None),
    )


class MetricSelection(MeteoBaseModel):
    """일별/시간별 메트릭 선택입니다. / Daily and hourly metric selection."""

    daily: Dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_DAILY_METRICS)
    )
    hourly: Dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_HOURLY_METRICS)
    )

    @field_validator("daily")
    @classmethod
    def check_daily(cls, value: Dict[str, bool]) -> Dict[str, bool]:
        return _check_known("daily", value, DEFAULT_DAILY_METRICS)

    @field_validator("hourly")
    @classmethod
    def check_hourly(cls, value: Dict[str, bool]) -> Dict[str, bool]:
        return _check_known("hourly", value, DEFAULT_HOURLY_METRICS)

    def enabled_daily(self) -> list[str]:
        """활성 일별 메트릭입니다. / Enabled daily metric names."""

        return [name for name, enabled in self.daily.items() if enabled]

    def enabled_hourly(self) -> list[str]:
        """활성 시간별 메트릭입니다. / Enabled hourly metric names."""

        return [name for name, enabled in self.hourly.items() if enabled]


def _check_known(
    block: str, value: Dict[str, bool], known: Dict[str, bool]
) -> Dict[str, bool]:
    unknown = sorted(set(value) - set(known))
    if unknown:
        raise ValueError(f"Unknown {block} metrics: {', '.join(unknown)}")
    return value


def resolve_metrics(
    options: MetricSelection | Mapping[str, Any] | None,
) -> MetricSelection:
    """메트릭 덮어쓰기를 해석합니다. / Resolve metric overrides.

    A block that is supplied replaces the default mapping for that block;
    the other block keeps its defaults.
    """

    if options is None:
        return MetricSelection()
    if isinstance(options, MetricSelection):
        return options
    payload = {
        block: options[block]
        for block in ("daily", "hourly")
        if options.get(block) is not None
    }
    try:
        return MetricSelection.model_validate(payload)
    except ValueError as exc:
        raise ValidationError(f"Invalid metric selection: {exc}") from exc


class QueryDescriptor(MeteoBaseModel):
    """완성된 요청 설명자입니다. / Fully formed outbound request."""

    base_url: str
    params: Dict[str, str]

    @property
    def url(self) -> str:
        """요청 URL입니다. / Rendered request URL."""

        return str(httpx.URL(self.base_url, params=self.params))


def build_query(
    latitude: Any,
    longitude: Any,
    metrics: MetricSelection | Mapping[str, Any] | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> QueryDescriptor:
    """요청 설명자를 구성합니다. / Build a query descriptor."""

    coordinate = parse_coordinate(latitude, longitude)
    selection = resolve_metrics(metrics)
    params: Dict[str, str] = {
        "latitude": str(coordinate.latitude),
        "longitude": str(coordinate.longitude),
        "current_weather": "true",
        "timezone": "auto",
    }
    daily = selection.enabled_daily()
    if daily:
        params["daily"] = ",".join(daily)
    hourly = selection.enabled_hourly()
    if hourly:
        params["hourly"] = ",".join(hourly)
        params["forecast_hours"] = str(HOURLY_WINDOW_HOURS)
    return QueryDescriptor(base_url=base_url, params=params)


def build_query_for(
    coordinate: Coordinate,
    metrics: MetricSelection | Mapping[str, Any] | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> QueryDescriptor:
    """좌표 객체로 요청을 구성합니다. / Build a query from a coordinate."""

    return build_query(coordinate.latitude, coordinate.longitude, metrics, base_url)

