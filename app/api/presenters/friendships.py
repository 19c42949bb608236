from __future__ import annotations

from typing import Any

from app.schemas.friendships import FriendshipOut, FriendshipUser


def _user_out(user: Any) -> FriendshipUser | None:
    if user is None:
        return None
    return FriendshipUser(
        id=str(user.id),
        email=user.email,
        username=user.username,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
    )


def build_friendship_out(friendship: Any, *, include_users: bool = False) -> FriendshipOut:
    # user_one/user_two are only loaded by add_one; touching them otherwise
    # would lazy load outside the async context.
    return FriendshipOut(
        id=str(friendship.id),
        user_one_id=str(friendship.user_one_id),
        user_two_id=str(friendship.user_two_id),
        date_created=friendship.date_created,
        user_one=_user_out(friendship.user_one) if include_users else None,
        user_two=_user_out(friendship.user_two) if include_users else None,
    )
