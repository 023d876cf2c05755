# api/v1/advice.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from core.advisor import AdvisorService, get_advisor
from core.errors import EmptyResponse, RateLimited, UpstreamError
from core.models.weather import WeatherContext
from services.store import PreferenceStore, get_store
from api.v1.schemas import ChatRequest, ChatResponse, RecommendationsOut

_LOG = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/health-recommendations",
    response_model=RecommendationsOut,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def health_recommendations(
    temperature: int | float | None = Query(None),
    conditions: str | None = Query(None),
    humidity: int | float | None = Query(None),
    user_id: int | None = Query(None, alias="userId"),
    advisor: AdvisorService = Depends(get_advisor),
    store: PreferenceStore = Depends(get_store),
) -> RecommendationsOut:
    """
    Weather-conditioned health advice.  Falls back to a fixed set of three
    recommendations when the completion provider is out of quota.
    """
    weather = None
    if temperature is not None and conditions and humidity is not None:
        weather = WeatherContext(
            temperature=temperature, conditions=conditions, humidity=humidity
        )

    prefs = None
    if user_id is not None:
        user = await store.get_user(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        prefs = user.preferences

    try:
        result = await advisor.get_health_recommendations(weather, prefs)
    except (EmptyResponse, UpstreamError) as exc:
        _LOG.error("recommendations failed: %s", exc)
        raise HTTPException(500, "Failed to generate recommendations")
    return RecommendationsOut.model_validate(result.model_dump())


@router.post("/chat", response_model=ChatResponse, status_code=status.HTTP_200_OK)
async def chat(
    body: ChatRequest,
    advisor: AdvisorService = Depends(get_advisor),
) -> ChatResponse:
    try:
        reply = await advisor.chat(body.message, body.context.weather)
    except RateLimited as exc:
        _LOG.warning("chat rate limited: %s", exc)
        raise HTTPException(429, "Service temporarily unavailable. Please try again later.")
    except (EmptyResponse, UpstreamError) as exc:
        _LOG.error("chat failed: %s", exc)
        raise HTTPException(500, "Failed to process chat message")
    return ChatResponse(response=reply)
