"""
HTTP surface: status codes and `{"error": ...}` bodies for every route.
"""
from __future__ import annotations

import json

import httpx

from core.errors import RateLimited, UpstreamError
from upstreams import FakeLLM, StubGenAI, WeatherUpstream, gemini_with

CHAT_BODY = {
    "message": "Should I go for a run?",
    "context": {"weather": {"temperature": 18, "conditions": "rain", "humidity": 90}},
}

PREFS = {
    "temperatureUnit": "celsius",
    "healthConditions": ["asthma"],
    "dietaryRestrictions": [],
}


class TestMeta:
    def test_health(self, make_client):
        r = make_client().get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_config_has_single_key(self, make_client, monkeypatch):
        from config import settings

        monkeypatch.setattr(settings, "openweather_api_key", "from-env")
        r = make_client().get("/api/config")
        assert r.status_code == 200
        assert r.json() == {"OPENWEATHER_API_KEY": "from-env"}


class TestWeather:
    def test_ok_uses_camel_case(self, make_client):
        r = make_client().get("/api/weather", params={"lat": "38.7", "lon": "-9.1"})
        assert r.status_code == 200
        body = r.json()
        assert body["current"]["temp"] == 22
        assert body["current"]["visibility"] == 9
        assert body["current"]["feelsLike"] == 21
        assert body["current"]["windSpeed"] == 3
        assert len(body["forecast"]) == 5
        assert body["forecast"][0]["date"] == "2024-05-01"
        assert "\"humidity\":64," in r.text
        assert "\"pressure\":1015," in r.text

    def test_missing_param_is_400_without_upstream_calls(self, make_client):
        upstream = WeatherUpstream()
        r = make_client(upstream=upstream).get("/api/weather", params={"lat": "38.7"})
        assert r.status_code == 400
        assert "error" in r.json()
        assert upstream.requests == []

    def test_malformed_param_is_400(self, make_client):
        r = make_client().get("/api/weather", params={"lat": "north", "lon": "1"})
        assert r.status_code == 400

    def test_upstream_failure_is_500_without_partial_data(self, make_client):
        upstream = WeatherUpstream(forecast_status=401)
        r = make_client(upstream=upstream).get("/api/weather", params={"lat": "1", "lon": "2"})
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch weather data"}

    def test_non_json_upstream_is_500(self, make_client):
        upstream = WeatherUpstream(forecast_text="not json")
        r = make_client(upstream=upstream).get("/api/weather", params={"lat": "1", "lon": "2"})
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch weather data"}


class TestRecommendations:
    def test_ai_recommendations(self, make_client):
        payload = {
            "recommendations": [
                {"type": "uv", "title": "High UV", "description": "Peak UV at noon",
                 "severity": "high", "actions": ["Wear a hat"]}
            ]
        }
        llm = FakeLLM(reply=json.dumps(payload))
        r = make_client(llm=llm).get("/api/health-recommendations")
        assert r.status_code == 200
        assert r.json() == payload

    def test_weather_query_reaches_prompt(self, make_client):
        llm = FakeLLM(reply=json.dumps({"recommendations": []}))
        r = make_client(llm=llm).get(
            "/api/health-recommendations",
            params={"temperature": 35, "conditions": "clear", "humidity": 20},
        )
        assert r.status_code == 200
        assert "35°C" in llm.calls[0]["prompt"]

    def test_quota_fallback(self, make_client):
        llm = FakeLLM(error=RateLimited("insufficient_quota"))
        r = make_client(llm=llm).get("/api/health-recommendations")
        assert r.status_code == 200
        recs = r.json()["recommendations"]
        assert [x["severity"] for x in recs] == ["medium", "low", "medium"]
        assert all(x["actions"] for x in recs)

    def test_empty_reply_is_500(self, make_client):
        r = make_client(llm=FakeLLM(reply="")).get("/api/health-recommendations")
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to generate recommendations"}

    def test_upstream_error_is_500(self, make_client):
        llm = FakeLLM(error=UpstreamError("bad key"))
        r = make_client(llm=llm).get("/api/health-recommendations")
        assert r.status_code == 500
        assert "bad key" not in r.text

    def test_unreachable_provider_is_500(self, make_client):
        llm = gemini_with(StubGenAI(error=httpx.ConnectError("down")))
        r = make_client(llm=llm).get("/api/health-recommendations")
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to generate recommendations"}

    def test_user_preferences_personalise_prompt(self, make_client):
        llm = FakeLLM(reply=json.dumps({"recommendations": []}))
        client = make_client(llm=llm)
        uid = client.post("/api/users", json={"location": "Oslo", "preferences": PREFS}).json()["id"]

        r = client.get("/api/health-recommendations", params={"userId": uid})
        assert r.status_code == 200
        assert "asthma" in llm.calls[0]["prompt"]

    def test_unknown_user_is_404(self, make_client):
        llm = FakeLLM(reply=json.dumps({"recommendations": []}))
        r = make_client(llm=llm).get("/api/health-recommendations", params={"userId": 7})
        assert r.status_code == 404
        assert llm.calls == []


class TestChat:
    def test_reply(self, make_client):
        llm = FakeLLM(reply="Bring a raincoat.")
        r = make_client(llm=llm).post("/api/chat", json=CHAT_BODY)
        assert r.status_code == 200
        assert r.json() == {"response": "Bring a raincoat."}

    def test_rate_limit_is_429_not_fallback(self, make_client):
        llm = FakeLLM(error=RateLimited("429"))
        r = make_client(llm=llm).post("/api/chat", json=CHAT_BODY)
        assert r.status_code == 429
        body = r.json()
        assert "error" in body
        assert "recommendations" not in body

    def test_empty_reply_is_500(self, make_client):
        r = make_client(llm=FakeLLM(reply=None)).post("/api/chat", json=CHAT_BODY)
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to process chat message"}

    def test_unreachable_provider_is_500(self, make_client):
        llm = gemini_with(StubGenAI(error=httpx.ConnectError("down")))
        r = make_client(llm=llm).post("/api/chat", json=CHAT_BODY)
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to process chat message"}

    def test_missing_context_is_400(self, make_client):
        r = make_client().post("/api/chat", json={"message": "hi"})
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid request body"}


class TestUsers:
    def test_create_fetch_update(self, make_client):
        client = make_client()
        a = client.post("/api/users", json={"location": "Oslo", "preferences": PREFS})
        b = client.post("/api/users", json={"location": "Rome", "preferences": PREFS})
        assert (a.status_code, b.status_code) == (201, 201)
        assert (a.json()["id"], b.json()["id"]) == (1, 2)

        new_prefs = {
            "temperatureUnit": "fahrenheit",
            "healthConditions": [],
            "dietaryRestrictions": ["kosher"],
        }
        r = client.put("/api/users/1/preferences", json=new_prefs)
        assert r.status_code == 200
        assert r.json()["preferences"] == new_prefs
        assert client.get("/api/users/1").json()["preferences"]["temperatureUnit"] == "fahrenheit"

    def test_fetch_unknown_is_404(self, make_client):
        r = make_client().get("/api/users/99")
        assert r.status_code == 404
        assert r.json() == {"error": "User not found"}

    def test_update_unknown_is_404(self, make_client):
        r = make_client().put("/api/users/99/preferences", json=PREFS)
        assert r.status_code == 404

    def test_invalid_preferences_rejected(self, make_client):
        client = make_client()
        client.post("/api/users", json={"location": "Oslo", "preferences": PREFS})
        r = client.put("/api/users/1/preferences", json={"temperatureUnit": "kelvin"})
        assert r.status_code == 400
        assert client.get("/api/users/1").json()["preferences"]["healthConditions"] == ["asthma"]

    def test_partial_preferences_rejected(self, make_client):
        client = make_client()
        client.post("/api/users", json={"location": "Oslo", "preferences": PREFS})
        r = client.put("/api/users/1/preferences", json={"temperatureUnit": "fahrenheit"})
        assert r.status_code == 400
        assert "error" in r.json()
        assert client.get("/api/users/1").json()["preferences"] == PREFS
