"""Database access helpers for library members."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.models.user import User
from library_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Encapsulates persistence operations for users."""

    def __init__(self) -> None:
        super().__init__(model=User)

    def create(self, session: Session, *, data: dict[str, object]) -> User:
        user = User(**data)
        return self.add(session, user)

    def list_all(self, session: Session) -> list[User]:
        statement = select(User).order_by(User.name, User.id)
        return list(session.scalars(statement).all())

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return the user matching the provided email, if any."""

        statement = select(User).where(User.email == email)
        return session.scalars(statement).first()
