"""공용 테스트 픽스처입니다. / Shared test fixtures."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from meteo_alerts.config import ProviderSettings

BASE_URL = "https://forecast.test/v1/forecast"


@pytest.fixture
def provider_settings() -> ProviderSettings:
    """테스트 제공자 설정입니다. / Provider settings pointing at a mock host."""

    return ProviderSettings(base_url=BASE_URL, timeout_seconds=1.0, max_retries=2)


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """샘플 제공자 응답입니다. / Sample provider response."""

    return {
        "timezone": "Europe/Madrid",
        "current_weather": {
            "time": "2025-09-29T12:00",
            "temperature": 20.5,
            "windspeed": 15,
            "winddirection": 180,
            "weathercode": 2,
        },
        "daily": {
            "time": ["2025-09-30"],
            "temperature_2m_max": [24.0],
            "temperature_2m_min": [15.5],
            "precipitation_sum": [0.0],
            "weathercode": [3],
        },
        "hourly": {
            "time": ["2025-09-29T12:00", "2025-09-29T13:00"],
            "precipitation": [0.0, 0.1],
            "windspeed_10m": [15.0, 16.2],
            "relativehumidity_2m": [60, 58],
            "temperature_2m": [20.5, 21.0],
            "weathercode": [2, 3],
        },
    }
