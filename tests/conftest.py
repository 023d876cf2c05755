"""
Pytest configuration: a fresh store per test and a TestClient wired
through `app.dependency_overrides` (the lifespan never runs, so no
real upstream is ever contacted).
"""
from __future__ import annotations

from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from core.advisor import AdvisorService, get_advisor
from core.weather import get_weather_aggregator
from main import app
from services.store import PreferenceStore, get_store
from upstreams import FakeLLM, WeatherUpstream


@pytest.fixture
def store() -> PreferenceStore:
    return PreferenceStore()


@pytest.fixture
def make_client(store: PreferenceStore) -> Iterator[Callable[..., TestClient]]:
    def _make(
        upstream: WeatherUpstream | None = None,
        llm: FakeLLM | None = None,
    ) -> TestClient:
        upstream = upstream or WeatherUpstream()
        llm = llm or FakeLLM(reply="ok")
        app.dependency_overrides[get_store] = lambda: store
        app.dependency_overrides[get_weather_aggregator] = upstream.aggregator
        app.dependency_overrides[get_advisor] = lambda: AdvisorService(llm)
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
