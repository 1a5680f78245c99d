"""Pydantic schemas for publisher payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PublisherBase(BaseModel):
    """Shared attributes required for publisher operations."""

    name: str = Field(..., max_length=255)
    address: str | None = Field(default=None, max_length=512)
    phone_number: str | None = Field(default=None, max_length=64)


class PublisherCreate(PublisherBase):
    """Payload for creating a new publisher record."""

    pass


class PublisherUpdate(BaseModel):
    """Payload for updating an existing publisher; a rename shows on all its books."""

    name: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=512)
    phone_number: str | None = Field(default=None, max_length=64)


class PublisherRead(PublisherBase):
    """Representation returned by the API for persisted publisher records."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
