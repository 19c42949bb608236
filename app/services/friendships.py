"""Data access for friendships between two user accounts.

Every function is a direct query against the store; nothing here validates
pairs, checks for duplicates or locks rows. Callers own the transaction.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.friendship import Friendship
from app.services import users as user_collection

logger = logging.getLogger(__name__)


def _as_uuid(value: uuid.UUID | str) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _require_uuid(value: uuid.UUID | str) -> uuid.UUID:
    fid = _as_uuid(value)
    if fid is None:
        raise ValueError("invalid_user_id")
    return fid


def _involves(user_id: uuid.UUID):
    return or_(Friendship.user_one_id == user_id, Friendship.user_two_id == user_id)


async def add_one(
    db: AsyncSession,
    user_one_id: uuid.UUID | str,
    user_two_id: uuid.UUID | str,
) -> Friendship:
    """Establish a friendship once both users have confirmed it elsewhere.

    Returns the new row with ``user_one`` and ``user_two`` loaded. Raises
    ``ValueError("invalid_user_id")`` before touching the session when either
    id is not a UUID.
    """
    one_id = _require_uuid(user_one_id)
    two_id = _require_uuid(user_two_id)
    friendship = Friendship(
        user_one_id=one_id,
        user_two_id=two_id,
        date_created=datetime.now(timezone.utc),
    )
    db.add(friendship)
    await db.flush()

    q = (
        select(Friendship)
        .options(selectinload(Friendship.user_one), selectinload(Friendship.user_two))
        .where(Friendship.id == friendship.id)
        .execution_options(populate_existing=True)
    )
    return (await db.execute(q)).scalar_one()


async def find_one(db: AsyncSession, friendship_id: uuid.UUID | str) -> Friendship | None:
    fid = _as_uuid(friendship_id)
    if fid is None:
        return None
    return (
        await db.execute(select(Friendship).where(Friendship.id == fid))
    ).scalar_one_or_none()


async def find_all(db: AsyncSession) -> list[Friendship]:
    q = select(Friendship).order_by(Friendship.date_created.desc())
    return list((await db.execute(q)).scalars())


async def find_all_friendships_of_user(db: AsyncSession, username: str) -> list[Friendship]:
    """All friendships where the user is either party (can be none).

    Raises ``ValueError("user_not_found")`` if the username does not resolve.
    """
    user = await user_collection.find_one_by_username(db, username)
    q = (
        select(Friendship)
        .where(_involves(user.id))
        .order_by(Friendship.date_created.desc())
    )
    return list((await db.execute(q)).scalars())


async def delete_one(db: AsyncSession, friendship_id: uuid.UUID | str) -> bool:
    fid = _as_uuid(friendship_id)
    if fid is None:
        return False
    result = await db.execute(delete(Friendship).where(Friendship.id == fid))
    return result.rowcount > 0


async def delete_all_friendships_of_user(db: AsyncSession, username: str) -> int:
    """Remove every friendship the user is part of; used when deleting the account.

    Both roles are matched by a single delete statement. Returns the row count.
    """
    user = await user_collection.find_one_by_username(db, username)
    result = await db.execute(delete(Friendship).where(_involves(user.id)))
    removed = result.rowcount or 0
    logger.info("removed friendships user_id=%s count=%s", user.id, removed)
    return removed
