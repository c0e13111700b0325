"""
Pydantic models for user payloads.

Request bodies keep every field optional so the service, not the schema,
decides which ones are required. Whether a field was sent at all is read
from ``model_fields_set``, which lets an explicit ``"age": null`` differ
from an omitted ``age``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    name: Optional[str] = Field(None, examples=["Ada"])
    email: Optional[str] = Field(None, examples=["ada@x.io"])
    age: Optional[int] = Field(None, examples=[36])

    model_config = {"extra": "ignore"}


class UserCreate(UserBase):
    """Body of ``POST /user``. ``name`` and ``email`` must be non-empty."""


class UserUpdate(UserBase):
    """Body of ``PATCH /user/{id}``.

    Empty ``name``/``email`` values are ignored; ``age`` is applied whenever
    the key is present, including ``null``.
    """


class UserRead(BaseModel):
    """A stored user record."""

    id: int
    name: str
    email: str
    age: Optional[int] = None
