"""Pydantic schemas for copy payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from library_api.models.copy import CopyStatus


class CopyCreate(BaseModel):
    """Payload for registering a copy of a book."""

    book_id: int
    copy_number: int = Field(..., ge=1)
    status: CopyStatus = Field(default=CopyStatus.AVAILABLE)


class CopyUpdate(BaseModel):
    """Payload for renumbering or moving a copy; status is not writable."""

    model_config = ConfigDict(extra="forbid")

    book_id: int | None = None
    copy_number: int | None = Field(default=None, ge=1)


class CopyRead(BaseModel):
    """Representation returned by the API for persisted copies."""

    id: int
    book_id: int
    copy_number: int
    status: CopyStatus
    version: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
