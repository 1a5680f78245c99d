"""Pydantic schemas for book payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookBase(BaseModel):
    """Shared attributes required for book operations."""

    title: str = Field(..., max_length=255)
    author: str = Field(..., max_length=255)
    publication_year: int
    isbn: str = Field(..., description="ISBN-10 or ISBN-13 without hyphens")


class BookCreate(BookBase):
    """Payload for creating a new book record.

    The publisher is referenced by ``publisher_id`` or, when that is absent,
    by its ``publisher`` name.
    """

    publisher_id: int | None = Field(default=None, description="Publisher ID (foreign key to publishers table)")
    publisher: str | None = Field(default=None, max_length=255, description="Publisher name")


class BookUpdate(BaseModel):
    """Payload for updating existing book metadata."""

    title: str | None = Field(default=None, max_length=255)
    author: str | None = Field(default=None, max_length=255)
    publication_year: int | None = None
    isbn: str | None = None
    publisher_id: int | None = None
    publisher: str | None = Field(default=None, max_length=255)


class BookRead(BookBase):
    """Representation returned by the API for persisted book records.

    Note: publisher field is populated via ORM property from publisher_rel relationship.
    """

    id: int
    publisher_id: int
    publisher: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
