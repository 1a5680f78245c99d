"""Database models package."""

from .user import User
from .librarian import Librarian
from .publisher import Publisher  # Must be imported before Book due to relationship
from .book import Book
from .copy import Copy, CopyStatus
from .borrowing import Borrowing

__all__ = ["Book", "Borrowing", "Copy", "CopyStatus", "Librarian", "Publisher", "User"]
