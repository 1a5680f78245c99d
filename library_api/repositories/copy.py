"""Database access helpers for book copies."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from library_api.models.copy import Copy, CopyStatus
from library_api.repositories.base import BaseRepository


class CopyRepository(BaseRepository[Copy]):
    """Repository for interacting with copy records."""

    def __init__(self) -> None:
        super().__init__(model=Copy)

    def create(self, session: Session, *, data: dict[str, object]) -> Copy:
        copy = Copy(**data)
        return self.add(session, copy)

    def list_all(self, session: Session) -> list[Copy]:
        statement = select(Copy).order_by(Copy.book_id, Copy.copy_number)
        return list(session.scalars(statement).all())

    def list_by_book_id(self, session: Session, book_id: int) -> list[Copy]:
        statement = select(Copy).where(Copy.book_id == book_id).order_by(Copy.copy_number)
        return list(session.scalars(statement).all())

    def list_by_status(self, session: Session, status: CopyStatus) -> list[Copy]:
        """Return copies whose cached status equals ``status``."""
        statement = (
            select(Copy).where(Copy.status == status).order_by(Copy.book_id, Copy.copy_number)
        )
        return list(session.scalars(statement).all())

    def count_by_book_id(self, session: Session, book_id: int) -> int:
        return self.count_where(session, Copy.book_id == book_id)

    def get_by_book_and_number(
        self, session: Session, *, book_id: int, copy_number: int
    ) -> Copy | None:
        """Find a copy by its number within a book, borrowings eager-loaded."""
        statement = (
            select(Copy)
            .options(selectinload(Copy.borrowings))
            .where(Copy.book_id == book_id, Copy.copy_number == copy_number)
        )
        return session.scalars(statement).first()

