"""정규화된 날씨 모델입니다. / Normalized weather models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..base import MeteoBaseModel


class CurrentConditions(MeteoBaseModel):
    """현재 기상 조건입니다. / Current weather conditions."""

    timestamp: Optional[str] = None
    temperature: Optional[float] = None
    wind_speed: Optional[float] = Field(default=None, alias="windSpeed")
    wind_direction: Optional[float] = Field(default=None, alias="windDirection")
    weather_code: Optional[int] = Field(default=None, alias="weatherCode")
    timezone: Optional[str] = None


class DayForecast(MeteoBaseModel):
    """일별 예보 항목입니다. / Daily forecast entry."""

    date: Optional[str] = None
    temp_max: Optional[float] = Field(default=None, alias="tempMax")
    temp_min: Optional[float] = Field(default=None, alias="tempMin")
    precipitation: Optional[float] = None
    weather_code: Optional[int] = Field(default=None, alias="weatherCode")


class HourPoint(MeteoBaseModel):
    """시간별 예보 지점입니다. / Hourly forecast point."""

    timestamp: Optional[str] = None
    precipitation: Optional[float] = None
    wind_speed: Optional[float] = Field(default=None, alias="windSpeed")
    humidity: Optional[float] = None
    temperature: Optional[float] = None
    weather_code: Optional[int] = Field(default=None, alias="weatherCode")


class NormalizedWeather(MeteoBaseModel):
    """정규화된 날씨 레코드입니다. / Normalized weather record."""

    current: CurrentConditions
    forecast: List[DayForecast] = Field(default_factory=list)
    hourly: List[HourPoint] = Field(default_factory=list)


class AlertType(str, Enum):
    """경보 유형입니다. / Alert type."""

    HIGH_WIND = "HIGH_WIND"
    EXTREME_COLD = "EXTREME_COLD"
    EXTREME_HEAT = "EXTREME_HEAT"
    HEAVY_RAIN = "HEAVY_RAIN"


class AlertSeverity(str, Enum):
    """경보 심각도입니다. / Alert severity."""

    WARNING = "warning"
    CRITICAL = "critical"


class Alert(MeteoBaseModel):
    """단일 경보입니다. / Single alert event."""

    type: AlertType
    severity: AlertSeverity
    message: str
    value: float
    date: Optional[str] = None


class WeatherData(NormalizedWeather):
    """경보가 포함된 날씨 데이터입니다. / Normalized weather with alerts."""

    alerts: List[Alert] = Field(default_factory=list)
    city_name: Optional[str] = Field(default=None, alias="cityName")


class WeatherResult(MeteoBaseModel):
    """파이프라인 결과입니다. / Discriminated pipeline result."""

    success: bool
    data: Optional[WeatherData] = None
    summary: Optional[str] = None
    error: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """응답 페이로드를 만듭니다. / Build response payload.

        Failures always carry an explicit ``data: null``.
        """

        if not self.success:
            return {"success": False, "error": self.error, "data": None}
        return self.model_dump_jsonable()
