"""Referential integrity guard run before every delete.

ORM cascades are not relied upon: each delete first counts the rows that
depend on the target and refuses with :class:`DependentRecordsError` when
any exist, so a blocked delete leaves the store untouched.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from library_api.core.errors import DependentRecordsError
from library_api.models.book import Book
from library_api.models.copy import Copy
from library_api.models.publisher import Publisher
from library_api.models.user import User
from library_api.repositories.book import BookRepository
from library_api.repositories.borrowing import BorrowingRepository
from library_api.repositories.copy import CopyRepository
from library_api.repositories.librarian import LibrarianRepository

logger = logging.getLogger(__name__)


class IntegrityGuard:
    """Blocks deletion of records that still have dependents."""

    def __init__(self) -> None:
        self._books = BookRepository()
        self._copies = CopyRepository()
        self._borrowings = BorrowingRepository()
        self._librarians = LibrarianRepository()

    def ensure_book_deletable(self, session: Session, book: Book) -> None:
        copies = self._copies.count_by_book_id(session, book.id)
        self._refuse_if_any("Book", book.id, {"copies": copies})

    def ensure_publisher_deletable(self, session: Session, publisher: Publisher) -> None:
        books = self._books.count_by_publisher_id(session, publisher.id)
        self._refuse_if_any("Publisher", publisher.id, {"books": books})

    def ensure_user_deletable(self, session: Session, user: User) -> None:
        dependents = {
            "borrowings": self._borrowings.count_by_user_id(session, user.id),
            "librarian roles": self._librarians.count_by_user_id(session, user.id),
        }
        self._refuse_if_any("User", user.id, dependents)

    def ensure_copy_deletable(self, session: Session, copy: Copy) -> None:
        """A copy on loan cannot be removed; returned history may be."""
        open_borrowings = self._borrowings.count_open_by_copy_id(session, copy.id)
        self._refuse_if_any("Copy", copy.id, {"open borrowings": open_borrowings})

    @staticmethod
    def _refuse_if_any(entity: str, identifier: int, dependents: dict[str, int]) -> None:
        blocking = {name: count for name, count in dependents.items() if count}
        if blocking:
            logger.warning("Refusing to delete %s %s: dependents %s", entity, identifier, blocking)
            raise DependentRecordsError(entity, identifier, blocking)
