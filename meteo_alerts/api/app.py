"""날씨 HTTP API입니다. / Weather HTTP API.

Endpoints:
- ``GET /api/health``
- ``GET /api/cities/search?q=madrid``
- ``GET /api/weather?lat=40.4&lon=-3.7&city=Madrid``
- ``GET /api/stats``

Example:
    >>> from meteo_alerts.api.app import create_app
    >>> app = create_app()
    >>> # Run with: meteo-alerts serve
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from fastapi import APIRouter, FastAPI, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import AppConfig
from ..weather.errors import ValidationError
from ..weather.request import parse_coordinate
from ..weather.service import WeatherService
from .cities import search_cities

LOGGER = logging.getLogger("api.app")

SEARCH_LIMIT = 10

router = APIRouter(prefix="/api")


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


def _parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return None if math.isnan(value) else value


def _service(request: Request) -> WeatherService:
    return request.app.state.weather_service


@router.get("/health")
async def health() -> dict[str, Any]:
    """상태 확인입니다. / Liveness check."""

    return {
        "success": True,
        "message": "Weather API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/cities/search")
async def cities_search(q: str = Query("")) -> dict[str, Any]:
    """도시를 검색합니다. / Search cities by name."""

    results = search_cities(q, SEARCH_LIMIT)
    return {
        "success": True,
        "data": [city.model_dump_jsonable() for city in results],
        "query": q,
    }


@router.get("/weather")
async def weather(
    request: Request,
    lat: Optional[str] = Query(None),
    lon: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
) -> JSONResponse:
    """좌표의 날씨를 조회합니다. / Weather lookup for a coordinate."""

    latitude = _parse_float(lat)
    longitude = _parse_float(lon)
    if latitude is None or longitude is None:
        return _error(400, "Parameters lat and lon are required")
    try:
        parse_coordinate(latitude, longitude)
    except ValidationError as exc:
        return _error(400, str(exc))
    result = await _service(request).lookup(latitude, longitude)
    if not result.success or result.data is None:
        return _error(500, result.error or "Error fetching weather data")
    city_name = city or request.app.state.config.server.default_city_name
    data = result.data.model_copy(update={"city_name": city_name})
    return JSONResponse(
        content={
            "success": True,
            "data": data.model_dump_jsonable(),
            "summary": result.summary,
        }
    )


@router.get("/stats")
async def stats(request: Request) -> dict[str, Any]:
    """서비스 통계입니다. / Service statistics."""

    return {"success": True, "data": _service(request).stats().model_dump_jsonable()}


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 404:
        return _error(404, "Route not found", path=request.url.path)
    return _error(exc.status_code, str(exc.detail))


async def _log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    LOGGER.info(
        "http_request",
        extra={
            "method": request.method,
            "path": request.url.path,
            "query": dict(request.query_params),
        },
    )
    return await call_next(request)


def create_app(
    service: WeatherService | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """앱을 생성합니다. / Build the FastAPI application."""

    app_config = config or AppConfig()
    app = FastAPI(title="meteo-alerts", version="1.0.0")
    app.state.config = app_config
    app.state.weather_service = service or WeatherService.from_config(app_config)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.middleware("http")(_log_requests)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.include_router(router)
    return app
