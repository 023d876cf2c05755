from __future__ import annotations
from typing import Literal

from .base import CamelModel

Severity = Literal["low", "medium", "high"]


class HealthRecommendation(CamelModel):
    type: str
    title: str
    description: str
    severity: Severity
    actions: list[str]


class DietarySuggestions(CamelModel):
    meals: list[str]
    hydration: str
    supplements: list[str] | None = None


class AIResponse(CamelModel):
    recommendations: list[HealthRecommendation]
    # optional: the model is not required to produce it
    dietary_suggestions: DietarySuggestions | None = None
