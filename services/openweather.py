# services/openweather.py
from __future__ import annotations

import logging
from typing import Any

import httpx

from core.errors import UpstreamError

_LOG = logging.getLogger(__name__)

CURRENT_PATH = "/weather"
FORECAST_PATH = "/forecast"       # 5 days at 3-hour steps


class OpenWeatherClient:
    """Thin async wrapper over the two OpenWeather endpoints we use."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str | None,
        base_url: str = "https://api.openweathermap.org/data/2.5",
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def current(self, lat: str, lon: str) -> dict[str, Any]:
        return await self._get(CURRENT_PATH, lat, lon)

    async def forecast(self, lat: str, lon: str) -> dict[str, Any]:
        return await self._get(FORECAST_PATH, lat, lon)

    async def _get(self, path: str, lat: str, lon: str) -> dict[str, Any]:
        params = {"lat": lat, "lon": lon, "appid": self._api_key or "", "units": "metric"}
        try:
            resp = await self._http.get(f"{self._base_url}{path}", params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Weather API unreachable: {exc}") from exc

        if not resp.is_success:
            _LOG.error("OpenWeather %s → %d %s", path, resp.status_code, resp.reason_phrase)
            raise UpstreamError(
                f"Weather API error: {resp.reason_phrase}",
                status_text=resp.reason_phrase,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"Weather API returned invalid JSON: {exc}") from exc
