"""Shared repository helpers used by concrete persistence classes.

Repositories only flush. Transaction boundaries belong to the services,
which wrap each operation in :func:`library_api.db.atomic`.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Persistence helpers shared by every library record type."""

    def __init__(self, model: type[T]):
        self._model = model

    @property
    def model(self) -> type[T]:
        return self._model

    def add(self, session: Session, instance: T) -> T:
        """Stage ``instance``, flush it and load server defaults (id, timestamps, version)."""

        session.add(instance)
        session.flush()
        session.refresh(instance)
        return instance

    def get(self, session: Session, identifier: int) -> T | None:
        return session.get(self._model, identifier)

    def get_for_update(self, session: Session, identifier: int) -> T | None:
        """Re-read a row from the database and lock it until the transaction ends.

        ``populate_existing`` overwrites any stale copy already in the
        identity map. Databases without row locks (SQLite) ignore
        ``FOR UPDATE``; callers still need a guarded write.
        """

        statement = (
            select(self._model)
            .filter_by(id=identifier)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return session.scalars(statement).first()

    def list_all(self, session: Session) -> list[T]:
        result = session.execute(select(self._model))
        return list(result.scalars())

    def count_where(self, session: Session, *criteria: Any) -> int:
        """Count rows of the model matching every criterion."""

        statement = select(func.count()).select_from(self._model).where(*criteria)
        return session.execute(statement).scalar() or 0

    def update(self, session: Session, instance: T, *, data: dict[str, object]) -> T:
        for field, value in data.items():
            setattr(instance, field, value)
        session.flush()
        session.refresh(instance)
        return instance

    def delete(self, session: Session, instance: T) -> None:
        session.delete(instance)
        session.flush()
