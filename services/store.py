"""
services/store.py
────────────────────────────────────────────────────────────────────────
* In-memory user / preference store (lost on restart)
* FastAPI dependency that hands the app-wide instance to routers

The interface is async so a durable backend can replace it later
without touching call sites.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from pydantic import BaseModel, ValidationError

from core.errors import InvalidInput, NotFound
from core.models.user import User, UserCreate, UserPreferences

_LOG = logging.getLogger(__name__)


class PreferenceStore:
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._next_id = 1

    async def get_user(self, user_id: int) -> User | None:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def create_user(self, body: UserCreate | dict[str, Any]) -> User:
        data = _validate(UserCreate, body)
        user = User(id=self._next_id, **data.model_dump())
        self._next_id += 1
        self._users[user.id] = user
        _LOG.debug("created user id=%d", user.id)
        return user.model_copy(deep=True)

    async def update_user_preferences(
        self,
        user_id: int,
        preferences: UserPreferences | dict[str, Any],
    ) -> User:
        current = self._users.get(user_id)
        if current is None:
            raise NotFound(f"user {user_id} not found")

        prefs = _validate(UserPreferences, preferences)
        # full overwrite, never a merge
        updated = current.model_copy(update={"preferences": prefs})
        self._users[user_id] = updated
        return updated.model_copy(deep=True)


def _validate(model, value):
    if isinstance(value, BaseModel):
        value = value.model_dump()
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise InvalidInput(str(exc)) from exc


# ───────── dependency helper ─────────────────────────────────────────

def get_store(request: Request) -> PreferenceStore:
    return request.app.state.store
