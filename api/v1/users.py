from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from services.store import PreferenceStore, get_store
from api.v1.schemas import UserIn, UserOut

router = APIRouter()


# ───────────────────────── create ──────────────────────────
@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserIn,
    store: PreferenceStore = Depends(get_store),
) -> UserOut:
    user = await store.create_user(body)
    return UserOut.model_validate(user.model_dump())


# ───────────────────────── fetch one ────────────────────────
@router.get("/{user_id}", response_model=UserOut)
async def fetch_user(
    user_id: int,
    store: PreferenceStore = Depends(get_store),
) -> UserOut:
    usr = await store.get_user(user_id)
    if usr is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(usr.model_dump())
