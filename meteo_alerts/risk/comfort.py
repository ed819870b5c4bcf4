"""체감 지수와 활동 권고입니다. / Comfort indices and activity advice."""

from __future__ import annotations

from typing import List

from ..weather.models import NormalizedWeather

HEAT_INDEX_COEFFICIENTS = (
    -42.379,
    2.04901523,
    10.14333127,
    -0.22475541,
    -0.00683783,
    -0.05481717,
    0.00122874,
    0.00085282,
    -0.00000199,
)


def calculate_heat_index(temp_c: float, humidity: float) -> float:
    """열지수를 계산합니다. / Compute the heat index in °C.

    Uses the Rothfusz regression in °F. Below 68 °F the regression does not
    apply and the air temperature is returned unchanged.
    """

    temp_f = temp_c * 9 / 5 + 32
    if temp_f < 68:
        return temp_c
    c1, c2, c3, c4, c5, c6, c7, c8, c9 = HEAT_INDEX_COEFFICIENTS
    rh = humidity
    index_f = (
        c1
        + c2 * temp_f
        + c3 * rh
        + c4 * temp_f * rh
        + c5 * temp_f * temp_f
        + c6 * rh * rh
        + c7 * temp_f * temp_f * rh
        + c8 * temp_f * rh * rh
        + c9 * temp_f * temp_f * rh * rh
    )
    return round((index_f - 32) * 5 / 9, 1)


def calculate_wind_chill(temp_c: float, wind_speed_kmh: float) -> float:
    """풍속 냉각을 계산합니다. / Compute wind chill in °C.

    Only defined at or below 10 °C; warmer readings are returned unchanged.
    """

    if temp_c > 10:
        return temp_c
    factor = wind_speed_kmh**0.16
    return round(13.12 + 0.6215 * temp_c - 11.37 * factor + 0.3965 * temp_c * factor, 1)


def estimate_air_quality(
    humidity: float, precipitation: float, wind_speed: float
) -> int:
    """대기질 점수를 추정합니다. / Estimate a 0-100 dispersion score."""

    score = 100
    if humidity > 80 and precipitation == 0:
        score -= 20
    if wind_speed < 5:
        score -= 15
    if precipitation > 0:
        score += 10
    return max(0, min(100, score))


def activity_recommendations(weather: NormalizedWeather) -> List[str]:
    """활동 권고를 만듭니다. / Build outdoor activity recommendations."""

    current = weather.current
    temperature = current.temperature
    wind = current.wind_speed
    recommendations: List[str] = []
    if (
        temperature is not None
        and wind is not None
        and 15 < temperature < 25
        and wind < 30
    ):
        recommendations.append("Great conditions for outdoor activities")
    if temperature is not None and temperature < 0:
        recommendations.append("Ice risk: drive carefully")
    if wind is not None and wind > 50:
        recommendations.append("Very strong wind: avoid going out")
    if weather.forecast:
        rain = weather.forecast[0].precipitation
        if rain is not None and rain > 10:
            recommendations.append("Significant rain expected: bring an umbrella")
    return recommendations
