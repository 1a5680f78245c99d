"""Database access helpers for publisher entities."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.models.publisher import Publisher
from library_api.repositories.base import BaseRepository


class PublisherRepository(BaseRepository[Publisher]):
    """Repository for interacting with publisher records."""

    def __init__(self) -> None:
        super().__init__(model=Publisher)

    def list_all(self, session: Session) -> list[Publisher]:
        """Return all publishers ordered by name."""
        statement = select(Publisher).order_by(Publisher.name, Publisher.id)
        return list(session.scalars(statement).all())

    def list_by_name(self, session: Session, name: str) -> list[Publisher]:
        """Return every publisher carrying ``name``; names are not unique."""
        statement = select(Publisher).where(Publisher.name == name)
        return list(session.scalars(statement).all())

    def create(self, session: Session, *, data: dict[str, object]) -> Publisher:
        """Create a new publisher record."""
        publisher = Publisher(**data)
        return self.add(session, publisher)
