"""Database access helpers for books."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from library_api.models.book import Book
from library_api.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """Repository for interacting with book records."""

    def __init__(self) -> None:
        super().__init__(model=Book)

    def create(self, session: Session, *, data: dict[str, object]) -> Book:
        book = Book(**data)
        return self.add(session, book)

    def list_all(self, session: Session) -> list[Book]:
        """List all books with their publisher joined in."""
        statement = select(Book).options(joinedload(Book.publisher_rel)).order_by(Book.title, Book.id)
        return list(session.scalars(statement).all())

    def list_by_publisher_id(self, session: Session, publisher_id: int) -> list[Book]:
        """List all books for a specific publisher."""
        statement = select(Book).where(Book.publisher_id == publisher_id).order_by(Book.title)
        return list(session.scalars(statement).all())

    def count_by_publisher_id(self, session: Session, publisher_id: int) -> int:
        return self.count_where(session, Book.publisher_id == publisher_id)

    def get_by_isbn(self, session: Session, isbn: str) -> Book | None:
        statement = select(Book).where(Book.isbn == isbn)
        result = session.execute(statement)
        return result.scalars().first()
