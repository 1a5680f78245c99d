"""Domain errors raised by the library services.

Every failure the presentation layer can display derives from
:class:`LibraryError` and belongs to one of three kinds: invalid argument,
not found, or conflict.
"""

from __future__ import annotations

from typing import Any


class LibraryError(Exception):
    """Base exception for library domain errors."""

    kind = "error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidArgumentError(LibraryError):
    """A required field is missing or malformed."""

    kind = "invalid_argument"


class NotFoundError(LibraryError):
    """A referenced record does not exist."""

    kind = "not_found"

    def __init__(self, entity: str, identifier: object) -> None:
        super().__init__(
            f"{entity} {identifier} not found",
            {"entity": entity, "identifier": identifier},
        )
        self.entity = entity
        self.identifier = identifier


class ConflictError(LibraryError):
    """The operation clashes with the current state of the store."""

    kind = "conflict"


# =============================================================================
# Specific conflicts
# =============================================================================


class DuplicateRecordError(ConflictError):
    """Raised when a unique field value is already taken."""

    def __init__(self, entity: str, field: str, value: object) -> None:
        super().__init__(
            f"{entity} with {field} '{value}' already exists",
            {"entity": entity, "field": field, "value": value},
        )
        self.entity = entity
        self.field = field
        self.value = value


class DependentRecordsError(ConflictError):
    """Raised when a delete is blocked by dependent rows."""

    def __init__(self, entity: str, identifier: int, dependents: dict[str, int]) -> None:
        summary = ", ".join(f"{count} {name}" for name, count in dependents.items())
        super().__init__(
            f"Cannot delete {entity} {identifier}: it still has {summary}",
            {"entity": entity, "identifier": identifier, "dependents": dependents},
        )
        self.dependents = dependents


class CopyAlreadyBorrowedError(ConflictError):
    """Raised when a copy with an open borrowing is borrowed again."""

    def __init__(self, copy_id: int) -> None:
        super().__init__("The book copy is already borrowed.", {"copy_id": copy_id})
        self.copy_id = copy_id


class BorrowingAlreadyReturnedError(ConflictError):
    """Raised when a borrowing that already has a return date is returned again."""

    def __init__(self, borrowing_id: int) -> None:
        super().__init__(
            "This book has already been returned.", {"borrowing_id": borrowing_id}
        )
        self.borrowing_id = borrowing_id


class InvalidTransitionError(ConflictError):
    """Raised for a copy status change the state machine does not allow."""

    def __init__(self, copy_id: int | None, current: str, target: str) -> None:
        super().__init__(
            f"Copy {copy_id} cannot move from {current} to {target}",
            {"copy_id": copy_id, "current": current, "target": target},
        )


class ReturnBeforeBorrowError(InvalidArgumentError):
    """Raised when a return date precedes the borrow date."""

    def __init__(self, borrowing_id: int, borrow_date: object, return_date: object) -> None:
        super().__init__(
            "Return date cannot be earlier than borrow date.",
            {
                "borrowing_id": borrowing_id,
                "borrow_date": str(borrow_date),
                "return_date": str(return_date),
            },
        )
