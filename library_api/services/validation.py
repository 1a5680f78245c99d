"""Field validation shared by the catalog and membership services."""

from __future__ import annotations

import re

from pydantic import EmailStr, TypeAdapter, ValidationError

from library_api.core.errors import InvalidArgumentError

# ISBN-10, or ISBN-13 with a 978/979 prefix; hyphens are not accepted
ISBN_PATTERN = re.compile(r"^(97(8|9))?\d{9}(\d|X)$")
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def require_text(field: str, value: object) -> str:
    """Return ``value`` stripped, rejecting missing or blank input."""
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{field} is required", {"field": field})
    return str(value).strip()


def require_value(field: str, value: object) -> object:
    if value is None:
        raise InvalidArgumentError(f"{field} is required", {"field": field})
    return value


def validate_isbn(isbn: object) -> str:
    """Validate ISBN format and return the normalized value."""
    value = require_text("isbn", isbn)
    if not ISBN_PATTERN.match(value):
        raise InvalidArgumentError("Invalid ISBN format", {"field": "isbn", "value": value})
    return value


def validate_email(email: object) -> str:
    """Validate with email-validator (via pydantic) and return the normalized address."""
    value = require_text("email", email)
    try:
        return _EMAIL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise InvalidArgumentError(
            "Invalid email format", {"field": "email", "value": value}
        ) from exc


def validate_copy_number(copy_number: object) -> int:
    value = require_value("copy_number", copy_number)
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise InvalidArgumentError(
            "copy_number must be a positive integer",
            {"field": "copy_number", "value": value},
        )
    return value
