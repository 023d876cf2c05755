"""
core/weather.py
────────────────────────────────────────────────────────────────────────
Weather aggregation: current conditions + 5-day forecast, fetched
concurrently and reshaped into `WeatherData`.

Rounding mirrors the usual half-up convention (21.5 → 22, 8.5 → 9);
Python's `round()` is banker's rounding and must not be used here.
"""
from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Dict, List

from fastapi import Request
from pydantic import ValidationError

from core.errors import InvalidInput, UpstreamError
from core.models.weather import (
    MAX_FORECAST_DAYS,
    Coordinates,
    CurrentConditions,
    ForecastEntry,
    WeatherData,
)
from services.openweather import OpenWeatherClient

_LOG = logging.getLogger(__name__)

DEFAULT_AQI = 50               # free tier has no air-quality data
ENTRIES_PER_DAY = 8            # 24h / 3h forecast step


class WeatherAggregator:
    def __init__(self, client: OpenWeatherClient) -> None:
        self._client = client

    async def fetch_weather(self, lat: str | None, lon: str | None) -> WeatherData:
        coords = parse_coordinates(lat, lon)

        # both must succeed; the first failure propagates
        current, forecast = await asyncio.gather(
            self._client.current(lat, lon),
            self._client.forecast(lat, lon),
        )
        _LOG.debug("weather fetched for %s,%s", lat, lon)
        try:
            return build_weather(coords, current, forecast)
        except (KeyError, IndexError, TypeError, ValidationError) as exc:
            raise UpstreamError(f"Unexpected weather payload: {exc!r}") from exc


# ──────────────────────────────── Helpers ────────────────────────────────

def parse_coordinates(lat: str | None, lon: str | None) -> Coordinates:
    if not lat or not lon:
        raise InvalidInput("Missing latitude/longitude parameters")
    try:
        lat_f, lon_f = float(lat), float(lon)
    except ValueError as exc:
        raise InvalidInput("Latitude/longitude must be numeric") from exc
    if not (math.isfinite(lat_f) and math.isfinite(lon_f)):
        raise InvalidInput("Latitude/longitude must be finite")
    if not (-90 <= lat_f <= 90 and -180 <= lon_f <= 180):
        raise InvalidInput("Latitude/longitude out of range")
    return Coordinates(lat=lat_f, lon=lon_f)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def build_weather(
    coords: Coordinates,
    current: Dict[str, Any],
    forecast: Dict[str, Any],
) -> WeatherData:
    return WeatherData(
        location=current.get("name", ""),
        coordinates=coords,
        current=_current_conditions(current),
        forecast=daily_forecast(forecast.get("list", [])),
    )


def _current_conditions(data: Dict[str, Any]) -> CurrentConditions:
    main = data["main"]
    return CurrentConditions(
        temp=round_half_up(main["temp"]),
        humidity=main["humidity"],
        conditions=_condition_label(data),
        aqi=DEFAULT_AQI,
        precipitation=_rain(data, "1h"),
        wind_speed=round_half_up(data["wind"]["speed"]),
        pressure=main["pressure"],
        feels_like=round_half_up(main["feels_like"]),
        visibility=round_half_up(data.get("visibility", 0) / 1000),
    )


def daily_forecast(entries: List[Dict[str, Any]]) -> List[ForecastEntry]:
    """Keep one 3-hour entry per day (indices 0, 8, 16, …), at most five days."""
    return [
        ForecastEntry(
            date=item["dt_txt"].split(" ")[0],
            temp=round_half_up(item["main"]["temp"]),
            conditions=_condition_label(item),
            precipitation=_rain(item, "3h"),
            wind_speed=round_half_up(item["wind"]["speed"]),
            humidity=item["main"]["humidity"],
        )
        for item in entries[::ENTRIES_PER_DAY][:MAX_FORECAST_DAYS]
    ]


def _condition_label(data: Dict[str, Any]) -> str:
    return data["weather"][0]["main"].lower()


def _rain(data: Dict[str, Any], window: str) -> float:
    return (data.get("rain") or {}).get(window) or 0


# ───────── dependency helper ─────────────────────────────────────────

def get_weather_aggregator(request: Request) -> WeatherAggregator:
    return request.app.state.weather
