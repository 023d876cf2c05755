from __future__ import annotations
from enum import Enum

from pydantic import Field

from .base import CamelModel


class TemperatureUnit(str, Enum):
    celsius = "celsius"
    fahrenheit = "fahrenheit"


class UserPreferences(CamelModel):
    temperature_unit: TemperatureUnit = Field(..., examples=["celsius", "fahrenheit"])
    health_conditions: list[str]
    dietary_restrictions: list[str]


class UserCreate(CamelModel):
    location: str
    preferences: UserPreferences


class User(UserCreate):
    """A stored user; `id` is assigned by the store, never by the caller."""
    id: int
