"""운영자용 CLI입니다. / Operator-facing CLI."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from .api.cities import search_cities
from .config import AppConfig, load_app_config
from .reporting.markdown import build_report
from .weather.client import FetchClient
from .weather.models import WeatherData, WeatherResult
from .weather.pipeline import get_weather

app = typer.Typer(help="Weather alerts CLI")

CONFIG_OPTION = typer.Option(None, "--config", help="Path to config.yaml")


@app.callback()
def configure(
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """로깅을 설정합니다. / Configure logging."""

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _lookup(config: AppConfig, lat: float, lon: float) -> WeatherResult:
    """파이프라인을 실행합니다. / Run the pipeline once."""

    client = FetchClient(config.provider)
    return asyncio.run(
        get_weather(
            {"latitude": lat, "longitude": lon},
            client=client,
            thresholds=config.alert_thresholds,
        )
    )


def _print_weather(data: WeatherData, summary: Optional[str]) -> None:
    """날씨를 출력합니다. / Print weather data."""

    current = data.current
    lines = [
        "Observed | Temp (°C) | Wind (km/h) | Direction (°) | Code",
        "---------|-----------|-------------|---------------|-----",
        (
            f"{current.timestamp} | {current.temperature} | {current.wind_speed} | "
            f"{current.wind_direction} | {current.weather_code}"
        ),
    ]
    typer.echo("\n".join(lines))
    if summary:
        typer.echo("\n" + summary)
    for alert in data.alerts:
        typer.echo(f"- {alert.type} ({alert.severity}): {alert.message}")


@app.command("fetch-weather")
def fetch_weather(
    lat: float,
    lon: float,
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """날씨를 조회합니다. / Fetch weather data."""

    config = load_app_config(config_path)
    result = _lookup(config, lat, lon)
    if not result.success or result.data is None:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)
    _print_weather(result.data, result.summary)


@app.command("report")
def report(
    lat: float,
    lon: float,
    name: str = typer.Option("Location", help="Location name for the report"),
    output: Path = typer.Option(Path("reports"), help="Report directory"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """마크다운 리포트를 만듭니다. / Write a Markdown weather report."""

    config = load_app_config(config_path)
    result = _lookup(config, lat, lon)
    if not result.success or result.data is None:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)
    markdown = build_report(result.data, config.alert_thresholds, output, name)
    typer.echo(f"Report saved to {markdown.path}")


@app.command("search-city")
def search_city(query: str, limit: int = typer.Option(10, min=1)) -> None:
    """도시를 검색합니다. / Search the static city list."""

    for city in search_cities(query, limit):
        typer.echo(f"{city.name} ({city.country}): {city.lat}, {city.lon}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """HTTP API를 실행합니다. / Run the HTTP API."""

    import uvicorn

    from .api.app import create_app

    config = load_app_config(config_path)
    uvicorn.run(
        create_app(config=config),
        host=host or config.server.host,
        port=port or config.server.port,
    )


def main() -> None:
    """CLI 엔트리 포인트입니다. / CLI entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI guard
    main()
