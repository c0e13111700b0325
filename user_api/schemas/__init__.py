"""Request/response schemas."""

from .user import UserCreate, UserRead, UserUpdate

__all__ = ["UserCreate", "UserRead", "UserUpdate"]
