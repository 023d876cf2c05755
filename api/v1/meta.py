# api/v1/meta.py
from __future__ import annotations

from fastapi import APIRouter

from config import settings
from api.v1.schemas import ConfigOut

router = APIRouter()


@router.get("/config", response_model=ConfigOut, summary="Client-side configuration")
async def get_config() -> ConfigOut:
    return ConfigOut(openweather_api_key=settings.openweather_api_key or "")
