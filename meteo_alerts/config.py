"""환경 및 설정 로더입니다. / Environment and configuration loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import Field, ValidationError

from .base import MeteoBaseModel

DEFAULT_BASE_URL = "https://api.open-meteo.com/v1/forecast"

ENV_OVERRIDES: Dict[str, tuple[str, str]] = {
    "METEO_ALERTS_BASE_URL": ("provider", "base_url"),
    "METEO_ALERTS_TIMEOUT_SECONDS": ("provider", "timeout_seconds"),
    "METEO_ALERTS_CACHE_TTL_SECONDS": ("cache", "ttl_seconds"),
}


class CacheSettings(MeteoBaseModel):
    """캐시 관련 설정입니다. / Cache settings definition."""

    ttl_seconds: int = Field(default=600, ge=0)


class ProviderSettings(MeteoBaseModel):
    """예보 제공자 설정입니다. / Forecast provider settings."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=2, ge=0)
    backoff_base_seconds: float = Field(default=1.0, ge=0)
    user_agent: str = "meteo-alerts/1.0 (Python)"


class AlertThresholds(MeteoBaseModel):
    """경보 임계치입니다. / Alert threshold settings.

    Units are km/h for wind, °C for temperature and mm for daily
    precipitation. Every field falls back to its default on its own, so a
    partial mapping such as ``{"minPrecipitation": 20}`` is a valid override.
    """

    max_wind: float = Field(default=50.0, alias="maxWind")
    min_temperature: float = Field(default=-10.0, alias="minTemperature")
    max_temperature: float = Field(default=40.0, alias="maxTemperature")
    min_precipitation: float = Field(default=10.0, alias="minPrecipitation")


class ServerSettings(MeteoBaseModel):
    """HTTP 서버 설정입니다. / HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)
    default_city_name: str = "Location"


class AppConfig(MeteoBaseModel):
    """애플리케이션 전체 설정입니다. / Application wide configuration."""

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    alert_thresholds: AlertThresholds = Field(default_factory=AlertThresholds)
    server: ServerSettings = Field(default_factory=ServerSettings)


def load_yaml_config(path: Path) -> Dict[str, Any]:
    """YAML 설정을 읽습니다. / Load YAML configuration."""

    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


def load_overrides_from_env() -> Dict[str, Dict[str, str]]:
    """환경 변수 덮어쓰기를 적재합니다. / Load overrides from environment."""

    overrides: Dict[str, Dict[str, str]] = {}
    for env_key, (section, field) in ENV_OVERRIDES.items():
        raw_value = os.getenv(env_key)
        if raw_value:
            overrides.setdefault(section, {})[field] = raw_value
    return overrides


def merge_config(
    raw: Dict[str, Any], overrides: Dict[str, Dict[str, str]]
) -> Dict[str, Any]:
    """파일 설정과 환경 값을 병합합니다. / Merge file config with env values."""

    merged = dict(raw)
    for section, values in overrides.items():
        current = merged.get(section) or {}
        if not isinstance(current, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
        merged[section] = {**current, **values}
    return merged


def load_app_config(path: Path | None = None) -> AppConfig:
    """최종 앱 설정을 반환합니다. / Return final app configuration."""

    config_path = path or Path("config.yaml")
    raw = load_yaml_config(config_path)
    overrides = load_overrides_from_env()
    merged = merge_config(raw, overrides)
    try:
        return AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
