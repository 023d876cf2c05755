import logging
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from config import settings
from api.v1.router import api_router
from core.advisor import AdvisorService
from core.weather import WeatherAggregator
from services.gemini import GeminiClient
from services.openweather import OpenWeatherClient
from services.store import PreferenceStore

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
_LOG = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with httpx.AsyncClient() as http:
        app.state.store = PreferenceStore()
        app.state.weather = WeatherAggregator(
            OpenWeatherClient(
                http,
                settings.openweather_api_key,
                settings.openweather_base_url,
            )
        )
        app.state.advisor = AdvisorService(
            GeminiClient(settings.gemini_api_key, settings.gemini_model)
        )
        yield


app = FastAPI(title="Weather Health Advisor API", version="1.0.0", lifespan=lifespan)

# CORS (public demo only – lock down in prod)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        took = (time.perf_counter() - start) * 1000
        _LOG.info(
            "%s %s %d in %.0fms",
            request.method, request.url.path, response.status_code, took,
        )
    return response


# ───────── error bodies are always {"error": "..."} ──────────────────

@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    _LOG.info("invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    _LOG.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(api_router, prefix="/api")


@app.get("/health", tags=["meta"])
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.env_name}
