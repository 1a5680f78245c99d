"""Pydantic schemas for the librarian role."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class LibrarianBase(BaseModel):
    employment_date: date
    position: str = Field(..., max_length=255)


class LibrarianCreate(LibrarianBase):
    user_id: int


class LibrarianUpdate(BaseModel):
    employment_date: date | None = None
    position: str | None = Field(default=None, max_length=255)


class LibrarianRead(LibrarianBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
