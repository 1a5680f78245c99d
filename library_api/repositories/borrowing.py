"""Database access helpers for borrowings."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from library_api.models.book import Book
from library_api.models.borrowing import Borrowing
from library_api.models.copy import Copy
from library_api.repositories.base import BaseRepository


class BorrowingRepository(BaseRepository[Borrowing]):
    """Repository for interacting with borrowing records."""

    def __init__(self) -> None:
        super().__init__(model=Borrowing)

    def create(self, session: Session, *, data: dict[str, object]) -> Borrowing:
        borrowing = Borrowing(**data)
        return self.add(session, borrowing)

    def list_all(self, session: Session) -> list[Borrowing]:
        statement = select(Borrowing).order_by(Borrowing.borrow_date.desc(), Borrowing.id.desc())
        return list(session.scalars(statement).all())

    def list_by_user_id(
        self, session: Session, user_id: int, *, open_only: bool = False
    ) -> list[Borrowing]:
        """Return the borrowing history of a user, newest first."""
        statement = select(Borrowing).where(Borrowing.user_id == user_id)
        if open_only:
            statement = statement.where(Borrowing.return_date.is_(None))
        statement = statement.order_by(Borrowing.borrow_date.desc(), Borrowing.id.desc())
        return list(session.scalars(statement).all())

    def list_by_copy_id(self, session: Session, copy_id: int) -> list[Borrowing]:
        statement = select(Borrowing).where(Borrowing.copy_id == copy_id).order_by(Borrowing.id)
        return list(session.scalars(statement).all())

    def count_by_user_id(self, session: Session, user_id: int) -> int:
        return self.count_where(session, Borrowing.user_id == user_id)

    def count_open_by_copy_id(self, session: Session, copy_id: int) -> int:
        """Count borrowings of ``copy_id`` that have no return date."""
        return self.count_where(
            session, Borrowing.copy_id == copy_id, Borrowing.return_date.is_(None)
        )

    def close(self, session: Session, borrowing: Borrowing, *, return_date: date) -> bool:
        """Set the return date only while the row is still open.

        The guarded UPDATE touches no row when another transaction returned
        the borrowing first; that case reports ``False`` and leaves the
        stored return date alone.
        """
        statement = (
            update(Borrowing)
            .where(Borrowing.id == borrowing.id, Borrowing.return_date.is_(None))
            .values(return_date=return_date)
            .execution_options(synchronize_session=False)
        )
        if session.execute(statement).rowcount == 0:
            return False
        session.refresh(borrowing)
        return True

    def find_open_by_title_and_user(
        self, session: Session, *, title: str, user_id: int
    ) -> Borrowing | None:
        """Find the user's open borrowing of any copy of the titled book."""
        statement = (
            select(Borrowing)
            .join(Copy, Borrowing.copy_id == Copy.id)
            .join(Book, Copy.book_id == Book.id)
            .where(
                Book.title == title,
                Borrowing.user_id == user_id,
                Borrowing.return_date.is_(None),
            )
            .order_by(Borrowing.borrow_date, Borrowing.id)
        )
        return session.scalars(statement).first()
