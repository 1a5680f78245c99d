"""Pydantic schemas for request and response payloads."""

from .book import BookCreate, BookRead, BookUpdate
from .borrowing import BorrowingRead, BorrowRequest, ReturnRequest
from .copy import CopyCreate, CopyRead, CopyUpdate
from .error import ErrorResponse
from .librarian import LibrarianCreate, LibrarianRead, LibrarianUpdate
from .publisher import PublisherCreate, PublisherRead, PublisherUpdate
from .user import UserCreate, UserRead, UserUpdate

__all__ = [
    "BookCreate",
    "BookRead",
    "BookUpdate",
    "BorrowRequest",
    "BorrowingRead",
    "CopyCreate",
    "CopyRead",
    "CopyUpdate",
    "ErrorResponse",
    "LibrarianCreate",
    "LibrarianRead",
    "LibrarianUpdate",
    "PublisherCreate",
    "PublisherRead",
    "PublisherUpdate",
    "ReturnRequest",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
