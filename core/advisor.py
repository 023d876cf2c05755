"""
core/advisor.py
────────────────────────────────────────────────────────────────────────
Weather-aware health advice on top of a chat-completion client.

  • get_health_recommendations() → structured `AIResponse`
                                   (static fallback on quota exhaustion)
  • chat()                       → free-text reply (quota → RateLimited)

The asymmetry is deliberate: only the recommendations path degrades to
canned content; chat surfaces the rate limit to the caller.
"""
from __future__ import annotations

import json
import logging
from typing import List, Protocol

from fastapi import Request
from pydantic import ValidationError

from core.errors import EmptyResponse, MalformedResponse, RateLimited
from core.models.advice import AIResponse, HealthRecommendation
from core.models.user import UserPreferences
from core.models.weather import WeatherContext

_LOG = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def generate(
        self, prompt: str, *, system: str, json_output: bool = False
    ) -> str | None: ...


RECOMMENDATIONS_SYSTEM = (
    "Generate health recommendations based on current weather conditions. "
    "Respond with a JSON object of the form "
    '{"recommendations": [{"type": str, "title": str, "description": str, '
    '"severity": "low" | "medium" | "high", "actions": [str, ...]}], '
    '"dietarySuggestions": {"meals": [str], "hydration": str, "supplements": [str]}}. '
    '"dietarySuggestions" is optional.'
)

FALLBACK_RECOMMENDATIONS: List[HealthRecommendation] = [
    HealthRecommendation(
        type="general",
        title="Stay Hydrated",
        description="Maintain proper hydration throughout the day",
        severity="medium",
        actions=[
            "Drink water regularly",
            "Monitor urine color",
            "Increase intake during physical activity",
        ],
    ),
    HealthRecommendation(
        type="activity",
        title="Weather-Appropriate Exercise",
        description="Adjust your activities based on current weather conditions",
        severity="low",
        actions=[
            "Choose indoor activities during extreme weather",
            "Wear appropriate clothing",
            "Listen to your body's signals",
        ],
    ),
    HealthRecommendation(
        type="protection",
        title="Weather Protection",
        description="Protect yourself from current weather conditions",
        severity="medium",
        actions=[
            "Use appropriate sun protection",
            "Wear weather-appropriate clothing",
            "Stay informed about weather changes",
        ],
    ),
]


class AdvisorService:
    def __init__(self, llm: CompletionClient) -> None:
        self._llm = llm

    async def get_health_recommendations(
        self,
        weather: WeatherContext | None = None,
        preferences: UserPreferences | None = None,
    ) -> AIResponse:
        prompt = _recommendations_prompt(weather, preferences)
        try:
            raw = await self._llm.generate(
                prompt, system=RECOMMENDATIONS_SYSTEM, json_output=True
            )
        except RateLimited:
            _LOG.warning("completion quota exhausted → serving fallback recommendations")
            return fallback_response()

        if not raw:
            raise EmptyResponse("Empty response from completion API")
        return _parse_recommendations(raw)

    async def chat(self, message: str, context: WeatherContext) -> str:
        reply = await self._llm.generate(message, system=_chat_system(context))
        if not reply:
            raise EmptyResponse("Empty response from completion API")
        return reply


def fallback_response() -> AIResponse:
    return AIResponse(
        recommendations=[r.model_copy(deep=True) for r in FALLBACK_RECOMMENDATIONS]
    )


# ──────────────────────────────── Helpers ────────────────────────────────

def _chat_system(ctx: WeatherContext) -> str:
    return (
        "You are a helpful weather and health advisor. Current weather context:\n"
        f"Temperature: {ctx.temperature}°C\n"
        f"Conditions: {ctx.conditions}\n"
        f"Humidity: {ctx.humidity}%\n\n"
        "Provide relevant health and weather-related advice based on these conditions."
    )


def _recommendations_prompt(
    weather: WeatherContext | None,
    prefs: UserPreferences | None,
) -> str:
    lines = []
    if weather is not None:
        lines += [
            "Current weather:",
            f"- Temperature: {weather.temperature}°C",
            f"- Conditions: {weather.conditions}",
            f"- Humidity: {weather.humidity}%",
        ]
    if prefs is not None:
        lines += [
            f"Health conditions: {', '.join(prefs.health_conditions) or 'none'}",
            f"Dietary restrictions: {', '.join(prefs.dietary_restrictions) or 'none'}",
        ]
    if not lines:
        return "Give general health recommendations for today's weather."
    return "\n".join(lines)


def _parse_recommendations(raw: str) -> AIResponse:
    try:
        data = json.loads(raw)
        return AIResponse.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        _LOG.error("unparseable recommendations payload: %s", exc)
        raise MalformedResponse(str(exc)) from exc


# ───────── dependency helper ─────────────────────────────────────────

def get_advisor(request: Request) -> AdvisorService:
    return request.app.state.advisor
