# api/v1/schemas/advice.py
from __future__ import annotations

from pydantic import Field

from core.models.advice import AIResponse
from core.models.base import CamelModel
from core.models.weather import WeatherContext


class ChatContext(CamelModel):
    weather: WeatherContext


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1)
    context: ChatContext


class ChatResponse(CamelModel):
    response: str


class RecommendationsOut(AIResponse):
    pass
