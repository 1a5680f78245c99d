"""Tests for the Alembic migration that creates the library schema."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

import pytest
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

MIGRATION_PATH = (
    Path(__file__).resolve().parents[1]
    / "alembic"
    / "versions"
    / "20261019_01_create_library_tables.py"
)


@pytest.fixture
def migration() -> Any:
    spec = importlib.util.spec_from_file_location("migration_20261019_01", MIGRATION_PATH)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_library_migration_creates_expected_schema(migration: Any) -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    original_op: Any = migration.op

    try:
        with engine.begin() as connection:
            context = MigrationContext.configure(connection=connection)
            migration.op = Operations(context)

            migration.upgrade()

            inspector = inspect(connection)
            assert {
                "publishers",
                "books",
                "copies",
                "users",
                "librarians",
                "borrowings",
            }.issubset(set(inspector.get_table_names()))

            copy_columns = {col["name"] for col in inspector.get_columns("copies")}
            assert {"book_id", "copy_number", "status", "version"}.issubset(copy_columns)
            assert any(
                constraint["column_names"] == ["book_id", "copy_number"]
                for constraint in inspector.get_unique_constraints("copies")
            )
            open_index = next(
                index
                for index in inspector.get_indexes("borrowings")
                if index["name"] == "uq_borrowings_open_copy"
            )
            assert open_index["unique"]
    finally:
        migration.op = original_op


def test_migration_allows_only_one_open_borrowing_per_copy(migration: Any) -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    original_op: Any = migration.op

    try:
        with engine.begin() as connection:
            migration.op = Operations(MigrationContext.configure(connection=connection))
            migration.upgrade()

            connection.execute(text("INSERT INTO publishers (id, name) VALUES (1, 'Penguin')"))
            connection.execute(
                text(
                    "INSERT INTO books (id, title, author, publication_year, isbn, publisher_id) "
                    "VALUES (1, 'Dune', 'Frank Herbert', 1965, '9780441013593', 1)"
                )
            )
            connection.execute(text("INSERT INTO copies (id, book_id, copy_number) VALUES (1, 1, 1)"))
            connection.execute(
                text("INSERT INTO users (id, name, email) VALUES (1, 'Ada', 'ada@example.com')")
            )
            row = connection.execute(text("SELECT status, version FROM copies WHERE id = 1")).one()
            assert row.status == "Available"
            assert row.version == 1

            connection.execute(
                text(
                    "INSERT INTO borrowings (user_id, copy_id, borrow_date, return_date) "
                    "VALUES (1, 1, '2026-10-01', '2026-10-05')"
                )
            )
            connection.execute(
                text(
                    "INSERT INTO borrowings (user_id, copy_id, borrow_date) "
                    "VALUES (1, 1, '2026-10-06')"
                )
            )
            with pytest.raises(IntegrityError):
                connection.execute(
                    text(
                        "INSERT INTO borrowings (user_id, copy_id, borrow_date) "
                        "VALUES (1, 1, '2026-10-07')"
                    )
                )
            with pytest.raises(IntegrityError):
                connection.execute(
                    text(
                        "INSERT INTO borrowings (user_id, copy_id, borrow_date, return_date) "
                        "VALUES (1, 1, '2026-10-07', '2026-10-01')"
                    )
                )
    finally:
        migration.op = original_op


def test_downgrade_drops_all_tables(migration: Any) -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    original_op: Any = migration.op

    try:
        with engine.begin() as connection:
            migration.op = Operations(MigrationContext.configure(connection=connection))
            migration.upgrade()
            migration.downgrade()

            assert inspect(connection).get_table_names() == []
    finally:
        migration.op = original_op
