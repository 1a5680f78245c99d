"""Error payload rendered for every failed domain operation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str
    error: str = Field(..., description="invalid_argument, not_found or conflict")
    context: dict[str, Any] = Field(default_factory=dict)
