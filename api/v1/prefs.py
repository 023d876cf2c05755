from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from core.errors import InvalidInput, NotFound
from services.store import PreferenceStore, get_store
from api.v1.schemas import UserOut, UserPrefsIn

router = APIRouter()


# ───────────────────────── replace ──────────────────────────
@router.put(
    "/{user_id}/preferences",
    response_model=UserOut,
    status_code=status.HTTP_200_OK,
)
async def replace_preferences(
    user_id: int,
    body: UserPrefsIn,
    store: PreferenceStore = Depends(get_store),
) -> UserOut:
    """Overwrite the whole preferences value; nothing is merged."""
    try:
        user = await store.update_user_preferences(user_id, body)
    except NotFound:
        raise HTTPException(404, "User not found")
    except InvalidInput:
        raise HTTPException(400, "Invalid preferences")
    return UserOut.model_validate(user.model_dump())
