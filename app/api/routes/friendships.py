from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http_errors import value_error
from app.api.presenters.friendships import build_friendship_out
from app.db.session import get_db_session
from app.schemas.friendships import (
    FriendshipCreateRequest,
    FriendshipDeleteResponse,
    FriendshipOut,
)
from app.services import friendships as friendship_collection

router = APIRouter(tags=["friendships"])

_USER_ERROR_STATUSES = {"user_not_found": 404}
_USER_ERROR_DETAILS = {"user_not_found": "User not found"}


@router.post("/friendships", response_model=FriendshipOut, status_code=201)
async def create_friendship(
    payload: FriendshipCreateRequest,
    db: AsyncSession = Depends(get_db_session),
):
    try:
        friendship = await friendship_collection.add_one(db, payload.user_one_id, payload.user_two_id)
        await db.commit()
    except IntegrityError as e:
        # Only the user foreign keys can fail on insert.
        await db.rollback()
        raise HTTPException(status_code=404, detail="User not found") from e
    return build_friendship_out(friendship, include_users=True)


@router.get("/friendships", response_model=list[FriendshipOut])
async def get_friendships(db: AsyncSession = Depends(get_db_session)):
    friendships = await friendship_collection.find_all(db)
    return [build_friendship_out(f) for f in friendships]


@router.get("/friendships/{friendship_id}", response_model=FriendshipOut)
async def get_friendship(friendship_id: uuid.UUID, db: AsyncSession = Depends(get_db_session)):
    friendship = await friendship_collection.find_one(db, friendship_id)
    if friendship is None:
        raise HTTPException(status_code=404, detail="Friendship not found")
    return build_friendship_out(friendship)


@router.delete("/friendships/{friendship_id}", response_model=FriendshipDeleteResponse)
async def delete_friendship(friendship_id: uuid.UUID, db: AsyncSession = Depends(get_db_session)):
    deleted = await friendship_collection.delete_one(db, friendship_id)
    if not deleted:
        await db.rollback()
        raise HTTPException(status_code=404, detail="Friendship not found")
    await db.commit()
    return FriendshipDeleteResponse(ok=True, removed=1)


@router.get("/users/{username}/friendships", response_model=list[FriendshipOut])
async def get_user_friendships(username: str, db: AsyncSession = Depends(get_db_session)):
    try:
        friendships = await friendship_collection.find_all_friendships_of_user(db, username)
    except ValueError as e:
        raise value_error(
            e,
            code_statuses=_USER_ERROR_STATUSES,
            detail_overrides=_USER_ERROR_DETAILS,
        ) from e
    return [build_friendship_out(f) for f in friendships]


@router.delete("/users/{username}/friendships", response_model=FriendshipDeleteResponse)
async def delete_user_friendships(username: str, db: AsyncSession = Depends(get_db_session)):
    try:
        removed = await friendship_collection.delete_all_friendships_of_user(db, username)
        await db.commit()
        return FriendshipDeleteResponse(ok=True, removed=removed)
    except ValueError as e:
        await db.rollback()
        raise value_error(
            e,
            code_statuses=_USER_ERROR_STATUSES,
            detail_overrides=_USER_ERROR_DETAILS,
            default_detail="Could not remove friendships",
        ) from e
