"""Pydantic schemas for borrow and return payloads."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class BorrowRequest(BaseModel):
    """Payload for lending a copy; the borrow date defaults to today."""

    user_id: int
    copy_id: int
    borrow_date: date | None = Field(default_factory=date.today)


class ReturnRequest(BaseModel):
    """Payload for returning a borrowed copy; the return date defaults to today."""

    return_date: date | None = Field(default_factory=date.today)


class BorrowingRead(BaseModel):
    """Representation returned by the API for borrowing records."""

    id: int
    user_id: int
    copy_id: int
    borrow_date: date
    return_date: date | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
