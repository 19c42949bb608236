from app.models.user import User
from app.models.friendship import Friendship

__all__ = ["User", "Friendship"]
