"""제공자 응답 정규화입니다. / Provider response normalization."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from .errors import IncompleteResponseError
from .models import CurrentConditions, DayForecast, HourPoint, NormalizedWeather


def _value_at(series: Any, index: int) -> Optional[Any]:
    """범위 안전 접근자입니다. / Out-of-bounds-safe accessor."""

    if not isinstance(series, Sequence) or isinstance(series, str):
        return None
    if 0 <= index < len(series):
        return series[index]
    return None


def _time_axis(block: Any) -> Sequence[Any]:
    if not isinstance(block, Mapping):
        return []
    axis = block.get("time")
    if not isinstance(axis, Sequence) or isinstance(axis, str):
        return []
    return axis


def _parse_current(raw: Mapping[str, Any]) -> CurrentConditions:
    current = raw.get("current_weather")
    if not isinstance(current, Mapping):
        raise IncompleteResponseError("Incomplete response: missing current_weather")
    return CurrentConditions(
        timestamp=current.get("time"),
        temperature=current.get("temperature"),
        wind_speed=current.get("windspeed"),
        wind_direction=current.get("winddirection"),
        weather_code=current.get("weathercode"),
        timezone=raw.get("timezone"),
    )


def _parse_daily(block: Any) -> List[DayForecast]:
    axis = _time_axis(block)
    return [
        DayForecast(
            date=axis[index],
            temp_max=_value_at(block.get("temperature_2m_max"), index),
            temp_min=_value_at(block.get("temperature_2m_min"), index),
            precipitation=_value_at(block.get("precipitation_sum"), index),
            weather_code=_value_at(block.get("weathercode"), index),
        )
        for index in range(len(axis))
    ]


def _parse_hourly(block: Any) -> List[HourPoint]:
    axis = _time_axis(block)
    return [
        HourPoint(
            timestamp=axis[index],
            precipitation=_value_at(block.get("precipitation"), index),
            wind_speed=_value_at(block.get("windspeed_10m"), index),
            humidity=_value_at(block.get("relativehumidity_2m"), index),
            temperature=_value_at(block.get("temperature_2m"), index),
            weather_code=_value_at(block.get("weathercode"), index),
        )
        for index in range(len(axis))
    ]


def parse_weather_response(raw: Mapping[str, Any]) -> NormalizedWeather:
    """제공자 JSON을 정규화합니다. / Normalize provider JSON.

    Absent ``daily``/``hourly`` blocks and short parallel arrays degrade to
    empty sequences and ``None`` fields respectively.
    """

    return NormalizedWeather(
        current=_parse_current(raw),
        forecast=_parse_daily(raw.get("daily")),
        hourly=_parse_hourly(raw.get("hourly")),
    )
