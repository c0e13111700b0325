"""
JSON-file persistence for user records.

The whole store is one JSON array. Every operation reads the full document
and every mutation writes it back; there are no partial updates.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import json
import logging
import threading

logger = logging.getLogger(__name__)

# Guards every read-modify-write cycle in the process.
_STORE_LOCK = threading.RLock()


class StorageError(Exception):
    """Raised when the store file cannot be read, parsed or written."""


def _is_user_record(item) -> bool:
    # bool is an int subclass; true/false are not valid ids.
    if not isinstance(item, dict):
        return False
    user_id = item.get("id")
    return isinstance(user_id, int) and not isinstance(user_id, bool)


class JsonUserStore:
    """Loads and saves the user list kept in a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    # -------------------------- strict access --------------------------
    def read_users(self) -> list[dict]:
        """Return the stored users, creating an empty store when absent.

        Raises StorageError on I/O failures and on documents that are not
        an array of objects.
        """
        with _STORE_LOCK:
            if not self.path.exists():
                self.write_users([])
                logger.info("Created empty user store at %s", self.path)
                return []
            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as exc:
                raise StorageError(f"Cannot read {self.path}: {exc}") from exc
            try:
                data = json.loads(raw)
            except ValueError as exc:
                raise StorageError(f"Cannot parse {self.path}: {exc}") from exc
            if not isinstance(data, list) or not all(_is_user_record(item) for item in data):
                raise StorageError(f"{self.path} does not hold an array of user objects")
            return data

    def write_users(self, users: list[dict]) -> None:
        with _STORE_LOCK:
            try:
                self.path.write_text(json.dumps(users, ensure_ascii=False, indent=2), encoding="utf-8")
            except OSError as exc:
                raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    # -------------------------- degrading access --------------------------
    def load(self) -> list[dict]:
        """Like read_users, but logs failures and falls back to an empty list."""
        try:
            return self.read_users()
        except StorageError as exc:
            logger.error("Error reading users file: %s", exc)
            return []

    def save(self, users: list[dict]) -> None:
        """Like write_users, but logs failures instead of raising."""
        try:
            self.write_users(users)
        except StorageError as exc:
            logger.error("Error writing to users file: %s", exc)

    @contextmanager
    def transaction(self, *, strict: bool = False) -> Iterator[list[dict]]:
        """Yield the loaded user list and persist it when the block succeeds.

        The store lock is held for the whole block. An exception inside the
        block leaves the file untouched.
        """
        with _STORE_LOCK:
            users = self.read_users() if strict else self.load()
            yield users
            if strict:
                self.write_users(users)
            else:
                self.save(users)
