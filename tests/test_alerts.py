"""경보 엔진 테스트입니다. / Alert engine tests."""

from __future__ import annotations

from typing import List, Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from meteo_alerts.config import AlertThresholds
from meteo_alerts.risk.alerts import AlertEvaluator, check_weather_alerts
from meteo_alerts.weather.models import CurrentConditions, DayForecast, NormalizedWeather


def _weather(
    temperature: Optional[float] = 20.0,
    wind_speed: Optional[float] = 10.0,
    rain: Optional[List[Optional[float]]] = None,
) -> NormalizedWeather:
    """테스트 날씨를 만듭니다. / Build test weather."""

    forecast = [
        DayForecast(date=f"2023-01-0{index + 1}", precipitation=value)
        for index, value in enumerate(rain or [])
    ]
    return NormalizedWeather(
        current=CurrentConditions(temperature=temperature, wind_speed=wind_speed),
        forecast=forecast,
    )


def test_calm_weather_has_no_alerts() -> None:
    """평온한 날씨는 경보가 없습니다. / Calm weather yields no alerts."""

    assert check_weather_alerts(_weather(rain=[0.0])) == []


def test_extreme_heat_is_critical() -> None:
    """폭염은 심각입니다. / 42°C yields one critical heat alert."""

    alerts = check_weather_alerts(_weather(temperature=42.0))
    assert len(alerts) == 1
    assert alerts[0].type == "EXTREME_HEAT"
    assert alerts[0].severity == "critical"
    assert alerts[0].value == pytest.approx(42.0)


def test_extreme_cold_is_critical() -> None:
    """한파는 심각입니다. / Extreme cold is critical."""

    alerts = check_weather_alerts(_weather(temperature=-15.0))
    assert [(alert.type, alert.severity) for alert in alerts] == [
        ("EXTREME_COLD", "critical")
    ]


def test_high_wind_message_includes_threshold() -> None:
    """강풍 메시지에 임계치가 있습니다. / Wind message includes the threshold."""

    alerts = check_weather_alerts(_weather(wind_speed=100.0))
    assert len(alerts) == 1
    assert alerts[0].type == "HIGH_WIND"
    assert alerts[0].severity == "warning"
    assert alerts[0].message == "High wind: 100 km/h (threshold: 50)"


def test_heavy_rain_uses_partial_override() -> None:
    """부분 임계치 덮어쓰기입니다. / Partial override applies per field."""

    alerts = check_weather_alerts(_weather(rain=[50.0]), {"minPrecipitation": 20})
    assert len(alerts) == 1
    assert alerts[0].type == "HEAVY_RAIN"
    assert alerts[0].severity == "warning"
    assert alerts[0].date == "2023-01-01"


def test_rules_fire_independently_in_order() -> None:
    """규칙은 순서대로 독립 발생합니다. / Rules are ordered and independent."""

    weather = _weather(temperature=45.0, wind_speed=80.0, rain=[12.0, 3.0, 30.0])
    alerts = check_weather_alerts(weather)
    assert [alert.type for alert in alerts] == [
        "HIGH_WIND",
        "EXTREME_HEAT",
        "HEAVY_RAIN",
        "HEAVY_RAIN",
    ]
    assert [alert.date for alert in alerts[2:]] == ["2023-01-01", "2023-01-03"]


def test_missing_readings_never_trigger() -> None:
    """누락 값은 경보를 만들지 않습니다. / Missing readings never trigger."""

    weather = _weather(temperature=None, wind_speed=None, rain=[None])
    assert check_weather_alerts(weather) == []


def test_threshold_boundaries_are_exclusive() -> None:
    """경계값은 발생하지 않습니다. / Values equal to limits do not fire."""

    weather = _weather(temperature=40.0, wind_speed=50.0, rain=[10.0])
    assert check_weather_alerts(weather) == []
    weather = _weather(temperature=-10.0)
    assert check_weather_alerts(weather) == []


@given(
    temperature=st.floats(min_value=-60, max_value=60),
    wind=st.floats(min_value=0, max_value=200),
    max_wind=st.floats(min_value=0, max_value=200),
)
def test_alert_count_matches_rules(temperature: float, wind: float, max_wind: float) -> None:
    """경보 수가 규칙과 일치합니다. / Alert count matches rule predicates."""

    thresholds = AlertThresholds(max_wind=max_wind)
    evaluator = AlertEvaluator(thresholds=thresholds)
    alerts = evaluator.evaluate(_weather(temperature=temperature, wind_speed=wind))
    expected = sum(
        [
            wind > max_wind,
            temperature < thresholds.min_temperature,
            temperature > thresholds.max_temperature,
        ]
    )
    assert len(alerts) == expected


def test_alert_messages_keep_full_precision() -> None:
    """경보 값은 반올림하지 않습니다. / Alert values are not rounded."""

    alerts = check_weather_alerts(
        _weather(temperature=-20.123456, wind_speed=1234567.0, rain=[10.000001])
    )
    assert [alert.message for alert in alerts] == [
        "High wind: 1234567 km/h (threshold: 50)",
        "Very low temperature: -20.123456°C",
        "Heavy rain expected: 10.000001 mm",
    ]
