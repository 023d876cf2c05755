from __future__ import annotations

from pydantic import Field

from .base import CamelModel

MAX_FORECAST_DAYS = 5


class Coordinates(CamelModel):
    lat: float
    lon: float


class CurrentConditions(CamelModel):
    temp: int
    humidity: int | float
    conditions: str
    aqi: int
    precipitation: int | float
    wind_speed: int
    pressure: int | float
    feels_like: int
    visibility: int                 # kilometres


class ForecastEntry(CamelModel):
    date: str                       # YYYY-MM-DD
    temp: int
    conditions: str
    precipitation: int | float
    wind_speed: int
    humidity: int | float


class WeatherData(CamelModel):
    location: str
    coordinates: Coordinates
    current: CurrentConditions
    forecast: list[ForecastEntry] = Field(default_factory=list, max_length=MAX_FORECAST_DAYS)


class WeatherContext(CamelModel):
    """The slice of current weather a caller hands to the advisor."""
    temperature: int | float
    conditions: str
    humidity: int | float
