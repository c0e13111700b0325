"""Domain helpers for user ids and lookups."""
from __future__ import annotations

import re
from typing import Any, Optional, Sequence

USER_ID_PATTERN = re.compile(r"-?\d+")


def user_id_from_path(path: str | None) -> Optional[int]:
    """Parse the id segment of ``/user/<id>``; None when missing or non-numeric."""
    parts = (path or "").split("/")
    if len(parts) < 3:
        return None
    segment = parts[2]
    if not USER_ID_PATTERN.fullmatch(segment):
        return None
    return int(segment)


def next_user_id(users: Sequence[dict[str, Any]]) -> int:
    """Max existing id + 1, or 1 for an empty store."""
    if not users:
        return 1
    return max(int(user.get("id") or 0) for user in users) + 1


def find_user_index(users: Sequence[dict[str, Any]], user_id: int) -> int:
    """Index of the first user with ``user_id``, or -1."""
    for index, user in enumerate(users):
        if user.get("id") == user_id:
            return index
    return -1


def email_in_use(users: Sequence[dict[str, Any]], email: str | None, *, exclude_id: int | None = None) -> bool:
    """Check if any user (other than ``exclude_id``) already owns ``email``."""
    if not email:
        return False
    return any(user.get("email") == email and user.get("id") != exclude_id for user in users)
