"""User CRUD use cases (validation, id assignment, partial updates)."""

from __future__ import annotations

from typing import Type, TypeVar
import json
import logging

from pydantic import BaseModel, ValidationError

from user_api.domain.users import email_in_use, find_user_index, next_user_id
from user_api.repositories.json_storage import JsonUserStore
from user_api.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class UserServiceError(Exception):
    """Base exception for the user workflow."""

    default_message = "User request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidPayloadError(UserServiceError):
    """Raised when the body is not a JSON object matching the schema."""

    default_message = "Invalid JSON"


class MissingFieldsError(UserServiceError):
    default_message = "Name and email are required"


class EmailExistsError(UserServiceError):
    """Raised when another user already owns the email."""

    default_message = "Email already exists"


class UserNotFoundError(UserServiceError):
    default_message = "User not found"


def parse_payload(raw: bytes | str | None, model: Type[PayloadT]) -> PayloadT:
    """Decode a request body into ``model``.

    Anything that is not a JSON object fitting the schema raises
    InvalidPayloadError, including an empty body.
    """
    try:
        data = json.loads(raw or "")
    except ValueError as exc:
        raise InvalidPayloadError() from exc
    if not isinstance(data, dict):
        raise InvalidPayloadError()
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidPayloadError() from exc


class UserService:
    """Create, read, update and delete users kept in a JsonUserStore.

    With ``strict_storage`` enabled, StorageError propagates to the caller.
    Otherwise an unreadable store behaves as an empty one and failed writes
    are only logged.
    """

    def __init__(self, store: JsonUserStore, *, strict_storage: bool = False) -> None:
        self.store = store
        self.strict_storage = strict_storage

    def _snapshot(self) -> list[dict]:
        return self.store.read_users() if self.strict_storage else self.store.load()

    def list_users(self) -> list[dict]:
        return self._snapshot()

    def get_user(self, user_id: int) -> dict:
        users = self._snapshot()
        index = find_user_index(users, user_id)
        if index == -1:
            raise UserNotFoundError()
        return users[index]

    def create_user(self, data: UserCreate) -> dict:
        if not data.name or not data.email:
            raise MissingFieldsError()
        with self.store.transaction(strict=self.strict_storage) as users:
            if email_in_use(users, data.email):
                raise EmailExistsError()
            user = UserRead(
                id=next_user_id(users),
                name=data.name,
                email=data.email,
                age=data.age or None,
            ).model_dump()
            users.append(user)
        logger.info("Created user %s", user["id"])
        return user

    def update_user(self, user_id: int, data: UserUpdate) -> dict:
        with self.store.transaction(strict=self.strict_storage) as users:
            index = find_user_index(users, user_id)
            if index == -1:
                raise UserNotFoundError()
            if data.email and email_in_use(users, data.email, exclude_id=user_id):
                raise EmailExistsError()
            user = users[index]
            # Empty strings count as "not provided" for name and email.
            if data.name:
                user["name"] = data.name
            if data.email:
                user["email"] = data.email
            if "age" in data.model_fields_set:
                user["age"] = data.age
        logger.info("Updated user %s", user_id)
        return user

    def delete_user(self, user_id: int) -> dict:
        with self.store.transaction(strict=self.strict_storage) as users:
            index = find_user_index(users, user_id)
            if index == -1:
                raise UserNotFoundError()
            user = users.pop(index)
        logger.info("Deleted user %s", user_id)
        return user
