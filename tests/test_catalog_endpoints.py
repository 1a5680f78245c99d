"""Integration tests for publisher, book, copy, user and librarian endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.db import get_db
from library_api.db.base import Base
from library_api.main import app

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def override_get_db():
    with TestingSessionLocal() as session:
        yield session


@pytest.fixture(autouse=True)
def setup_database() -> None:
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.pop(get_db, None)
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _create_book(client: TestClient, **overrides: object) -> dict:
    payload: dict[str, object] = {
        "title": "Dune",
        "author": "Frank Herbert",
        "publication_year": 1965,
        "isbn": "9780441013593",
        "publisher": "Penguin",
    }
    payload.update(overrides)
    return client.post("/books/", json=payload).json()


def test_create_and_list_publishers(client: TestClient) -> None:
    response = client.post("/publishers/", json={"name": "Penguin", "address": "London"})
    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Penguin"

    listing = client.get("/publishers/")
    assert [p["id"] for p in listing.json()] == [created["id"]]

    by_name = client.get("/publishers/", params={"name": "Penguin"})
    assert by_name.json()[0]["id"] == created["id"]


def test_get_publisher_returns_404_when_missing(client: TestClient) -> None:
    response = client.get("/publishers/999")

    assert response.status_code == 404
    assert response.json() == {
        "detail": "Publisher 999 not found",
        "error": "not_found",
        "context": {"entity": "Publisher", "identifier": 999},
    }


def test_book_creation_by_publisher_name_and_rename(client: TestClient) -> None:
    publisher = client.post("/publishers/", json={"name": "Penguin"}).json()
    book = _create_book(client)
    assert book["publisher"] == "Penguin"
    assert book["publisher_id"] == publisher["id"]

    client.put(f"/publishers/{publisher['id']}", json={"name": "Penguin Books"})

    assert client.get(f"/books/{book['id']}").json()["publisher"] == "Penguin Books"
    titles = [b["title"] for b in client.get(f"/publishers/{publisher['id']}/books").json()]
    assert titles == ["Dune"]


def test_malformed_isbn_is_bad_request(client: TestClient) -> None:
    client.post("/publishers/", json={"name": "Penguin"})

    response = client.post(
        "/books/",
        json={
            "title": "Dune",
            "author": "Frank Herbert",
            "publication_year": 1965,
            "isbn": "not-an-isbn",
            "publisher": "Penguin",
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ISBN format"


def test_duplicate_isbn_is_conflict(client: TestClient) -> None:
    client.post("/publishers/", json={"name": "Penguin"})
    _create_book(client)

    response = client.post(
        "/books/",
        json={
            "title": "Dune Messiah",
            "author": "Frank Herbert",
            "publication_year": 1969,
            "isbn": "9780441013593",
            "publisher": "Penguin",
        },
    )

    assert response.status_code == 409


def test_delete_publisher_with_books_is_conflict(client: TestClient) -> None:
    publisher = client.post("/publishers/", json={"name": "Penguin"}).json()
    _create_book(client)

    response = client.delete(f"/publishers/{publisher['id']}")

    assert response.status_code == 409
    assert response.json()["context"]["dependents"] == {"books": 1}
    assert client.get(f"/publishers/{publisher['id']}").status_code == 200


def test_copies_lookup_and_filter(client: TestClient) -> None:
    client.post("/publishers/", json={"name": "Penguin"})
    book = _create_book(client)
    first = client.post("/copies/", json={"book_id": book["id"], "copy_number": 1})
    assert first.status_code == 201
    assert first.json()["status"] == "Available"
    client.post("/copies/", json={"book_id": book["id"], "copy_number": 2})

    duplicate = client.post("/copies/", json={"book_id": book["id"], "copy_number": 2})
    assert duplicate.status_code == 409

    lookup = client.get("/copies/lookup", params={"book_id": book["id"], "copy_number": 2})
    assert lookup.status_code == 200
    assert lookup.json()["copy_number"] == 2

    available = client.get("/copies/", params={"status": "Available"})
    assert len(available.json()) == 2
    borrowed = client.get("/copies/", params={"status": "Borrowed"})
    assert borrowed.json() == []

    assert [c["copy_number"] for c in client.get(f"/books/{book['id']}/copies").json()] == [1, 2]


def test_copy_status_cannot_be_written_directly(client: TestClient) -> None:
    client.post("/publishers/", json={"name": "Penguin"})
    book = _create_book(client)
    copy = client.post("/copies/", json={"book_id": book["id"], "copy_number": 1}).json()

    response = client.put(f"/copies/{copy['id']}", json={"status": "Borrowed"})

    assert response.status_code == 422


def test_user_and_librarian_endpoints(client: TestClient) -> None:
    user = client.post("/users/", json={"name": "Ada", "email": "ada@example.com"})
    assert user.status_code == 201
    user_id = user.json()["id"]
    assert user.json()["is_librarian"] is False

    assert client.post("/users/", json={"name": "Ada", "email": "ada@example.com"}).status_code == 409

    librarian = client.post(
        "/librarians/",
        json={"user_id": user_id, "employment_date": "2020-01-06", "position": "Archivist"},
    )
    assert librarian.status_code == 201
    assert client.get(f"/users/{user_id}").json()["is_librarian"] is True

    assert client.delete(f"/users/{user_id}").status_code == 409

    assert client.delete(f"/librarians/{librarian.json()['id']}").status_code == 204
    assert client.get(f"/users/{user_id}").json()["is_librarian"] is False
    assert client.delete(f"/users/{user_id}").status_code == 204


def test_malformed_email_is_rejected_by_request_validation(client: TestClient) -> None:
    response = client.post("/users/", json={"name": "Ada", "email": "ada@example..com"})

    assert response.status_code == 422
    assert client.get("/users/").json() == []
