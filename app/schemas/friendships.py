from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel


class FriendshipCreateRequest(BaseModel):
    user_one_id: uuid.UUID
    user_two_id: uuid.UUID


class FriendshipUser(BaseModel):
    id: str
    email: str
    username: str
    display_name: str
    avatar_url: str | None = None


class FriendshipOut(BaseModel):
    id: str
    user_one_id: str
    user_two_id: str
    date_created: datetime
    user_one: FriendshipUser | None = None
    user_two: FriendshipUser | None = None


class FriendshipDeleteResponse(BaseModel):
    ok: bool
    removed: int
