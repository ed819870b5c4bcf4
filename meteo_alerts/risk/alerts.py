"""임계치 기반 경보 엔진입니다. / Threshold-based alert engine."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..base import MeteoBaseModel, format_number
from ..config import AlertThresholds
from ..weather.models import (
    Alert,
    AlertSeverity,
    AlertType,
    DayForecast,
    NormalizedWeather,
)


def _above(value: Optional[float], limit: float) -> bool:
    return value is not None and value > limit


def _below(value: Optional[float], limit: float) -> bool:
    return value is not None and value < limit


def resolve_thresholds(
    thresholds: AlertThresholds | Mapping[str, Any] | None,
) -> AlertThresholds:
    """임계치 덮어쓰기를 해석합니다. / Resolve partial threshold overrides."""

    if thresholds is None:
        return AlertThresholds()
    if isinstance(thresholds, AlertThresholds):
        return thresholds
    return AlertThresholds.model_validate(dict(thresholds))


class AlertEvaluator(MeteoBaseModel):
    """경보 평가기입니다. / Alert evaluator.

    Rules run in a fixed order and are independent of each other: current
    wind, current cold, current heat, then heavy rain for each forecast day
    in forecast order. Missing readings never trigger.
    """

    thresholds: AlertThresholds

    def evaluate(self, weather: NormalizedWeather) -> List[Alert]:
        """경보 목록을 생성합니다. / Produce the ordered alert list."""

        alerts: List[Alert] = []
        alerts.extend(self._current_alerts(weather))
        for day in weather.forecast:
            alert = self._rain_alert(day)
            if alert is not None:
                alerts.append(alert)
        return alerts

    def _current_alerts(self, weather: NormalizedWeather) -> List[Alert]:
        limits = self.thresholds
        current = weather.current
        alerts: List[Alert] = []
        if _above(current.wind_speed, limits.max_wind):
            alerts.append(
                Alert(
                    type=AlertType.HIGH_WIND,
                    severity=AlertSeverity.WARNING,
                    message=(
                        f"High wind: {format_number(current.wind_speed)} km/h "
                        f"(threshold: {format_number(limits.max_wind)})"
                    ),
                    value=current.wind_speed,
                )
            )
        if _below(current.temperature, limits.min_temperature):
            alerts.append(
                Alert(
                    type=AlertType.EXTREME_COLD,
                    severity=AlertSeverity.CRITICAL,
                    message=f"Very low temperature: {format_number(current.temperature)}°C",
                    value=current.temperature,
                )
            )
        if _above(current.temperature, limits.max_temperature):
            alerts.append(
                Alert(
                    type=AlertType.EXTREME_HEAT,
                    severity=AlertSeverity.CRITICAL,
                    message=f"Very high temperature: {format_number(current.temperature)}°C",
                    value=current.temperature,
                )
            )
        return alerts

    def _rain_alert(self, day: DayForecast) -> Optional[Alert]:
        if not _above(day.precipitation, self.thresholds.min_precipitation):
            return None
        return Alert(
            type=AlertType.HEAVY_RAIN,
            severity=AlertSeverity.WARNING,
            message=f"Heavy rain expected: {format_number(day.precipitation)} mm",
            value=day.precipitation,
            date=day.date,
        )


def check_weather_alerts(
    weather: NormalizedWeather,
    thresholds: AlertThresholds | Mapping[str, Any] | None = None,
) -> List[Alert]:
    """날씨 경보를 확인합니다. / Check weather against alert thresholds."""

    evaluator = AlertEvaluator(thresholds=resolve_thresholds(thresholds))
    return evaluator.evaluate(weather)
