"""자연어 날씨 요약입니다. / Natural-language weather summary."""

from __future__ import annotations

from typing import Optional

from ..base import format_number
from ..weather.models import NormalizedWeather


def format_value(value: Optional[float]) -> str:
    """값을 그대로 표시합니다. / Render a reading as given."""

    if value is None:
        return "n/a"
    return format_number(value)


def generate_weather_summary(weather: NormalizedWeather) -> str:
    """한 줄 요약을 만듭니다. / Build a one-line summary."""

    current = weather.current
    summary = (
        f"Current temperature: {format_value(current.temperature)}°C, "
        f"Wind: {format_value(current.wind_speed)} km/h."
    )
    if weather.forecast:
        tomorrow = weather.forecast[0]
        summary += (
            f" Tomorrow: max {format_value(tomorrow.temp_max)}°C, "
            f"min {format_value(tomorrow.temp_min)}°C."
        )
        if tomorrow.precipitation is not None and tomorrow.precipitation > 0:
            summary += (
                f" Expected precipitation: {format_value(tomorrow.precipitation)} mm."
            )
    return summary
