"""Repository exports."""

from .book import BookRepository
from .borrowing import BorrowingRepository
from .copy import CopyRepository
from .librarian import LibrarianRepository
from .publisher import PublisherRepository
from .user import UserRepository

__all__ = [
    "BookRepository",
    "BorrowingRepository",
    "CopyRepository",
    "LibrarianRepository",
    "PublisherRepository",
    "UserRepository",
]
