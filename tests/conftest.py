"""Shared fixtures: an in-memory SQLite database with the full schema."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.db.base import Base
from library_api import models  # noqa: F401
from library_api.services import CatalogService, MembershipService


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    with factory() as session:
        yield session


@pytest.fixture
def catalog_records(session: Session) -> dict[str, int]:
    """A publisher, one book with two copies, and one member."""
    catalog = CatalogService()
    members = MembershipService()
    publisher = catalog.create_publisher(session, data={"name": "Penguin", "address": "London"})
    book = catalog.create_book(
        session,
        data={
            "title": "Dune",
            "author": "Frank Herbert",
            "publication_year": 1965,
            "isbn": "9780441013593",
            "publisher_id": publisher.id,
        },
    )
    first = catalog.create_copy(session, data={"book_id": book.id, "copy_number": 1})
    second = catalog.create_copy(session, data={"book_id": book.id, "copy_number": 2})
    user = members.create_user(
        session, data={"name": "Ada Lovelace", "email": "ada@example.com"}
    )
    return {
        "publisher_id": publisher.id,
        "book_id": book.id,
        "copy_id": first.id,
        "second_copy_id": second.id,
        "user_id": user.id,
    }


@pytest.fixture
def today() -> date:
    return date(2026, 10, 19)
