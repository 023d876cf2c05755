# api/v1/weather.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from core.errors import InvalidInput, UpstreamError
from core.models.weather import WeatherData
from core.weather import WeatherAggregator, get_weather_aggregator

_LOG = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=WeatherData,
    status_code=status.HTTP_200_OK,
    summary="Current conditions plus a 5-day outlook for a coordinate pair",
)
async def get_weather(
    lat: str | None = Query(None),
    lon: str | None = Query(None),
    aggregator: WeatherAggregator = Depends(get_weather_aggregator),
) -> WeatherData:
    try:
        return await aggregator.fetch_weather(lat, lon)
    except InvalidInput as exc:
        _LOG.info("rejected weather query lat=%r lon=%r: %s", lat, lon, exc)
        raise HTTPException(400, "Missing or invalid latitude/longitude parameters")
    except UpstreamError as exc:
        _LOG.error("Weather API Error: %s", exc)
        raise HTTPException(500, "Failed to fetch weather data")
