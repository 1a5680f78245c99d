"""Pydantic schemas for library members."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    name: str = Field(..., max_length=255)
    email: EmailStr
    phone_number: str | None = Field(default=None, max_length=64)
    address: str | None = Field(default=None, max_length=512)


class UserCreate(UserBase):
    pass


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    phone_number: str | None = Field(default=None, max_length=64)
    address: str | None = Field(default=None, max_length=512)


class UserRead(UserBase):
    id: int
    is_librarian: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
