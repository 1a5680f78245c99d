"""Catalog operations: publishers, books and copies."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from library_api.core.errors import (
    ConflictError,
    DuplicateRecordError,
    InvalidArgumentError,
    NotFoundError,
)
from library_api.db.session import atomic
from library_api.models.book import Book
from library_api.models.copy import Copy, CopyStatus
from library_api.models.publisher import Publisher
from library_api.repositories.book import BookRepository
from library_api.repositories.borrowing import BorrowingRepository
from library_api.repositories.copy import CopyRepository
from library_api.repositories.publisher import PublisherRepository
from library_api.services.integrity import IntegrityGuard
from library_api.services.validation import (
    require_text,
    require_value,
    validate_copy_number,
    validate_isbn,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """Creates, changes and removes publishers, books and copies."""

    def __init__(self, guard: IntegrityGuard | None = None) -> None:
        self._publishers = PublisherRepository()
        self._books = BookRepository()
        self._copies = CopyRepository()
        self._borrowings = BorrowingRepository()
        self._guard = guard or IntegrityGuard()

    # -------------------------------------------------------------------------
    # Publishers
    # -------------------------------------------------------------------------

    def create_publisher(self, session: Session, *, data: dict[str, Any]) -> Publisher:
        payload = dict(data)
        payload["name"] = require_text("name", payload.get("name"))
        with atomic(session):
            publisher = self._publishers.create(session, data=payload)
        logger.info("Created publisher %s (%s)", publisher.id, publisher.name)
        return publisher

    def get_publisher(self, session: Session, publisher_id: int) -> Publisher:
        publisher = self._publishers.get(session, publisher_id)
        if publisher is None:
            raise NotFoundError("Publisher", publisher_id)
        return publisher

    def list_publishers(self, session: Session) -> list[Publisher]:
        return self._publishers.list_all(session)

    def get_publisher_by_name(self, session: Session, name: str) -> Publisher:
        """Return the single publisher called ``name``.

        Publisher names are not unique in storage, so an ambiguous name is a
        conflict rather than an arbitrary pick.
        """
        matches = self._publishers.list_by_name(session, name)
        if not matches:
            raise NotFoundError("Publisher", name)
        if len(matches) > 1:
            raise ConflictError(
                f"Multiple publishers found with the name: {name}",
                {"name": name, "count": len(matches)},
            )
        return matches[0]

    def update_publisher(
        self, session: Session, publisher_id: int, *, data: dict[str, Any]
    ) -> Publisher:
        payload = dict(data)
        if "name" in payload:
            payload["name"] = require_text("name", payload["name"])
        with atomic(session):
            publisher = self.get_publisher(session, publisher_id)
            previous_name = publisher.name
            publisher = self._publishers.update(session, publisher, data=payload)
        if publisher.name != previous_name:
            # Books read the name through the relationship, nothing to refresh
            logger.info("Renamed publisher %s from %r to %r", publisher.id, previous_name, publisher.name)
        return publisher

    def delete_publisher(self, session: Session, publisher_id: int) -> None:
        with atomic(session):
            publisher = self.get_publisher(session, publisher_id)
            self._guard.ensure_publisher_deletable(session, publisher)
            self._publishers.delete(session, publisher)
        logger.info("Deleted publisher %s", publisher_id)

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------

    def _resolve_publisher(self, session: Session, payload: dict[str, Any]) -> Publisher:
        """Pick the publisher by ``publisher_id`` or, failing that, by name."""
        publisher_name = payload.pop("publisher", None)
        publisher_id = payload.pop("publisher_id", None)
        if publisher_id is not None:
            return self.get_publisher(session, publisher_id)
        if publisher_name:
            return self.get_publisher_by_name(session, publisher_name)
        raise InvalidArgumentError("publisher_id or publisher is required", {"field": "publisher_id"})

    def _ensure_isbn_free(self, session: Session, isbn: str, *, book_id: int | None = None) -> None:
        existing = self._books.get_by_isbn(session, isbn)
        if existing is not None and existing.id != book_id:
            raise DuplicateRecordError("Book", "isbn", isbn)

    def create_book(self, session: Session, *, data: dict[str, Any]) -> Book:
        payload = dict(data)
        payload["title"] = require_text("title", payload.get("title"))
        payload["author"] = require_text("author", payload.get("author"))
        payload["publication_year"] = require_value("publication_year", payload.get("publication_year"))
        payload["isbn"] = validate_isbn(payload.get("isbn"))
        with atomic(session):
            publisher = self._resolve_publisher(session, payload)
            self._ensure_isbn_free(session, payload["isbn"])
            payload["publisher_id"] = publisher.id
            book = self._books.create(session, data=payload)
        logger.info("Created book %s (isbn=%s) under publisher %s", book.id, book.isbn, publisher.id)
        return book

    def get_book(self, session: Session, book_id: int) -> Book:
        book = self._books.get(session, book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    def list_books(self, session: Session) -> list[Book]:
        return self._books.list_all(session)

    def list_books_by_publisher(self, session: Session, publisher_id: int) -> list[Book]:
        self.get_publisher(session, publisher_id)
        return self._books.list_by_publisher_id(session, publisher_id)

    def update_book(self, session: Session, book_id: int, *, data: dict[str, Any]) -> Book:
        payload = dict(data)
        for field in ("title", "author"):
            if field in payload:
                payload[field] = require_text(field, payload[field])
        if "publication_year" in payload:
            require_value("publication_year", payload["publication_year"])
        if "isbn" in payload:
            payload["isbn"] = validate_isbn(payload["isbn"])
        with atomic(session):
            book = self.get_book(session, book_id)
            if "isbn" in payload:
                self._ensure_isbn_free(session, payload["isbn"], book_id=book.id)
            if payload.get("publisher_id") is not None or payload.get("publisher"):
                payload["publisher_id"] = self._resolve_publisher(session, payload).id
            else:
                payload.pop("publisher_id", None)
                payload.pop("publisher", None)
            book = self._books.update(session, book, data=payload)
        logger.info("Updated book %s", book.id)
        return book

    def delete_book(self, session: Session, book_id: int) -> None:
        with atomic(session):
            book = self.get_book(session, book_id)
            self._guard.ensure_book_deletable(session, book)
            self._books.delete(session, book)
        logger.info("Deleted book %s", book_id)

    # -------------------------------------------------------------------------
    # Copies
    # -------------------------------------------------------------------------

    def _ensure_copy_number_free(
        self, session: Session, *, book_id: int, copy_number: int, copy_id: int | None = None
    ) -> None:
        existing = self._copies.get_by_book_and_number(session, book_id=book_id, copy_number=copy_number)
        if existing is not None and existing.id != copy_id:
            raise DuplicateRecordError("Copy", "copy_number", f"{book_id}/{copy_number}")

    def create_copy(self, session: Session, *, data: dict[str, Any]) -> Copy:
        """Register a new copy of a book.

        The initial status defaults to ``Available``; callers importing an
        existing collection may set it explicitly.
        """
        payload = dict(data)
        book_id = require_value("book_id", payload.get("book_id"))
        payload["copy_number"] = validate_copy_number(payload.get("copy_number"))
        try:
            payload["status"] = CopyStatus(payload.get("status") or CopyStatus.AVAILABLE)
        except ValueError as exc:
            raise InvalidArgumentError(
                "status must be Available or Borrowed",
                {"field": "status", "value": payload.get("status")},
            ) from exc
        with atomic(session):
            self.get_book(session, book_id)
            self._ensure_copy_number_free(session, book_id=book_id, copy_number=payload["copy_number"])
            copy = self._copies.create(session, data=payload)
        logger.info(
            "Created copy %s (book %s, number %s, %s)",
            copy.id,
            copy.book_id,
            copy.copy_number,
            copy.status.value,
        )
        return copy

    def get_copy(self, session: Session, copy_id: int) -> Copy:
        copy = self._copies.get(session, copy_id)
        if copy is None:
            raise NotFoundError("Copy", copy_id)
        return copy

    def list_copies(self, session: Session, status: CopyStatus | None = None) -> list[Copy]:
        if status is not None:
            return self._copies.list_by_status(session, status)
        return self._copies.list_all(session)

    def list_copies_of_book(self, session: Session, book_id: int) -> list[Copy]:
        self.get_book(session, book_id)
        return self._copies.list_by_book_id(session, book_id)

    def find_copy(self, session: Session, *, book_id: int, copy_number: int) -> Copy:
        copy = self._copies.get_by_book_and_number(session, book_id=book_id, copy_number=copy_number)
        if copy is None:
            raise NotFoundError("Copy", f"{book_id}/{copy_number}")
        return copy

    def update_copy(self, session: Session, copy_id: int, *, data: dict[str, Any]) -> Copy:
        """Renumber a copy or move it to another book.

        Status is owned by the borrowing workflow and cannot be set here.
        """
        payload = {key: value for key, value in data.items() if value is not None}
        if "status" in payload:
            raise InvalidArgumentError(
                "Copy status can only change by borrowing or returning",
                {"field": "status"},
            )
        if "copy_number" in payload:
            payload["copy_number"] = validate_copy_number(payload["copy_number"])
        with atomic(session):
            copy = self.get_copy(session, copy_id)
            book_id = payload.get("book_id", copy.book_id)
            if "book_id" in payload:
                self.get_book(session, book_id)
            copy_number = payload.get("copy_number", copy.copy_number)
            self._ensure_copy_number_free(
                session, book_id=book_id, copy_number=copy_number, copy_id=copy.id
            )
            copy = self._copies.update(session, copy, data=payload)
        logger.info("Updated copy %s", copy.id)
        return copy

    def delete_copy(self, session: Session, copy_id: int) -> None:
        """Remove a copy that is not on loan, together with its returned history."""
        with atomic(session):
            copy = self.get_copy(session, copy_id)
            self._guard.ensure_copy_deletable(session, copy)
            history = self._borrowings.list_by_copy_id(session, copy.id)
            for borrowing in history:
                session.delete(borrowing)
            self._copies.delete(session, copy)
        logger.info("Deleted copy %s and %d returned borrowings", copy_id, len(history))
