from __future__ import annotations

from core.models.user import User, UserCreate, UserPreferences


class UserIn(UserCreate):
    pass


class UserOut(User):
    """Same fields as the stored record; `id` is server-assigned."""
    pass


class UserPrefsIn(UserPreferences):
    pass
