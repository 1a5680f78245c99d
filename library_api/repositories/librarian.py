"""Database access helpers for librarian roles."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.models.librarian import Librarian
from library_api.repositories.base import BaseRepository


class LibrarianRepository(BaseRepository[Librarian]):
    """Repository for interacting with librarian records."""

    def __init__(self) -> None:
        super().__init__(model=Librarian)

    def create(self, session: Session, *, data: dict[str, object]) -> Librarian:
        librarian = Librarian(**data)
        return self.add(session, librarian)

    def get_by_user_id(self, session: Session, user_id: int) -> Librarian | None:
        statement = select(Librarian).where(Librarian.user_id == user_id)
        return session.scalars(statement).first()

    def count_by_user_id(self, session: Session, user_id: int) -> int:
        return self.count_where(session, Librarian.user_id == user_id)
