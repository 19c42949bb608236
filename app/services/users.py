from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


async def find_one_by_username(db: AsyncSession, username: str) -> User:
    user = (
        await db.execute(select(User).where(User.username == username))
    ).scalar_one_or_none()

    if not user:
        raise ValueError("user_not_found")

    return user


async def add_one(
    db: AsyncSession,
    *,
    email: str,
    username: str,
    display_name: str,
    avatar_url: str | None = None,
) -> User:
    user = User(
        email=email.strip().lower(),
        username=username,
        display_name=display_name,
        avatar_url=avatar_url,
    )
    db.add(user)
    await db.flush()  # get id
    return user
