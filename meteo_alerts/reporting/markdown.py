"""마크다운 리포트 빌더입니다. / Markdown report builder."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..base import MeteoBaseModel
from ..config import AlertThresholds
from ..risk.comfort import (
    activity_recommendations,
    calculate_heat_index,
    calculate_wind_chill,
)
from ..weather.codes import describe_weather_code
from ..weather.models import Alert, WeatherData
from .summary import format_value, generate_weather_summary

DEFAULT_HUMIDITY = 50.0
FORECAST_DAYS = 5


class FeelsLike(MeteoBaseModel):
    """체감 온도 지수입니다. / Feels-like indices."""

    wind_chill: Optional[float] = None
    heat_index: Optional[float] = None


class ReportDay(MeteoBaseModel):
    """리포트 일별 행입니다. / Report forecast row."""

    date: Optional[str] = None
    temp_range: str
    precipitation: str
    description: str


class DetailedReport(MeteoBaseModel):
    """상세 날씨 리포트입니다. / Detailed weather report."""

    timestamp: Optional[str] = None
    summary: str
    description: str
    temperature: Optional[float] = None
    feels_like: FeelsLike
    wind_speed: Optional[float] = None
    wind_direction: Optional[float] = None
    humidity: Optional[float] = None
    forecast: List[ReportDay]
    alerts: List[Alert]
    recommendations: List[str]


class MarkdownReport(MeteoBaseModel):
    """마크다운 리포트 데이터입니다. / Markdown report data."""

    content: str
    path: Path


def build_detailed_report(data: WeatherData) -> DetailedReport:
    """상세 리포트를 구성합니다. / Build a detailed report."""

    current = data.current
    humidity = data.hourly[0].humidity if data.hourly else None
    feels_like = FeelsLike()
    if current.temperature is not None:
        feels_like = FeelsLike(
            wind_chill=(
                calculate_wind_chill(current.temperature, current.wind_speed)
                if current.wind_speed is not None
                else None
            ),
            heat_index=calculate_heat_index(
                current.temperature,
                humidity if humidity is not None else DEFAULT_HUMIDITY,
            ),
        )
    forecast = [
        ReportDay(
            date=day.date,
            temp_range=f"{format_value(day.temp_min)}°C - {format_value(day.temp_max)}°C",
            precipitation=f"{format_value(day.precipitation)} mm",
            description=describe_weather_code(day.weather_code),
        )
        for day in data.forecast[:FORECAST_DAYS]
    ]
    return DetailedReport(
        timestamp=current.timestamp,
        summary=generate_weather_summary(data),
        description=describe_weather_code(current.weather_code),
        temperature=current.temperature,
        feels_like=feels_like,
        wind_speed=current.wind_speed,
        wind_direction=current.wind_direction,
        humidity=humidity,
        forecast=forecast,
        alerts=data.alerts,
        recommendations=activity_recommendations(data),
    )


def format_markdown(
    report: DetailedReport,
    thresholds: AlertThresholds,
    location_name: str = "Location",
) -> str:
    """마크다운 문자열을 만듭니다. / Build markdown string."""

    lines = [
        f"# Weather Report: {location_name}",
        "",
        report.summary,
        "",
        "## Current Conditions",
        f"- Observed: {report.timestamp or 'n/a'}",
        f"- Conditions: {report.description}",
        f"- Temperature: {format_value(report.temperature)}°C",
        f"- Wind Chill: {format_value(report.feels_like.wind_chill)}°C",
        f"- Heat Index: {format_value(report.feels_like.heat_index)}°C",
        (
            f"- Wind: {format_value(report.wind_speed)} km/h "
            f"from {format_value(report.wind_direction)}°"
        ),
        f"- Humidity: {format_value(report.humidity)}%",
        "",
        "## Forecast",
        "| Date | Temperature | Precipitation | Conditions |",
        "|------|-------------|---------------|------------|",
    ]
    for day in report.forecast:
        lines.append(
            f"| {day.date or 'n/a'} | {day.temp_range} | "
            f"{day.precipitation} | {day.description} |"
        )
    lines.extend(["", "## Alerts"])
    if report.alerts:
        for alert in report.alerts:
            status = "🔴" if alert.severity == "critical" else "⚠️"
            lines.append(f"- {status} {alert.type}: {alert.message}")
    else:
        lines.append("- None")
    lines.extend(["", "## Recommendations"])
    lines.extend(f"- {item}" for item in report.recommendations or ["None"])
    lines.extend(
        [
            "",
            "## Thresholds",
            f"- Max Wind: {format_value(thresholds.max_wind)} km/h",
            f"- Min Temperature: {format_value(thresholds.min_temperature)}°C",
            f"- Max Temperature: {format_value(thresholds.max_temperature)}°C",
            f"- Min Precipitation: {format_value(thresholds.min_precipitation)} mm",
        ]
    )
    return "\n".join(lines).strip() + "\n"


def build_report(
    data: WeatherData,
    thresholds: AlertThresholds,
    directory: Path,
    location_name: str = "Location",
) -> MarkdownReport:
    """리포트를 생성합니다. / Build markdown report file."""

    directory.mkdir(parents=True, exist_ok=True)
    report = build_detailed_report(data)
    stamp = (report.timestamp or "latest").replace(":", "").replace("-", "")
    slug = "_".join(location_name.split()) or "location"
    path = directory / f"{slug}_{stamp}.md"
    content = format_markdown(report, thresholds, location_name)
    path.write_text(content, encoding="utf-8")
    return MarkdownReport(content=content, path=path)
