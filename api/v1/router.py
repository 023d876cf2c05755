# api/v1/router.py
from fastapi import APIRouter

from . import advice, meta, prefs, users, weather

api_router = APIRouter()

api_router.include_router(meta.router, tags=["Meta"])
api_router.include_router(weather.router, prefix="/weather", tags=["Weather"])
api_router.include_router(advice.router, tags=["Advisor"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])

# preferences live *under* the user resource
api_router.include_router(
    prefs.router,
    prefix="/users",          # results in /users/{user_id}/preferences
    tags=["Preferences"],
)
