"""CRUD endpoints for books."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.schemas.book import BookCreate, BookRead, BookUpdate
from library_api.schemas.copy import CopyRead
from library_api.services.catalog import CatalogService

router = APIRouter(prefix="/books", tags=["Books"])
_catalog = CatalogService()


@router.post("/", response_model=BookRead, status_code=status.HTTP_201_CREATED)
def create_book(payload: BookCreate, db: Session = Depends(get_db)) -> BookRead:
    """Create a book under an existing publisher."""

    book = _catalog.create_book(db, data=payload.model_dump())
    return BookRead.model_validate(book)


@router.get("/", response_model=list[BookRead])
def list_books(db: Session = Depends(get_db)) -> list[BookRead]:
    return [BookRead.model_validate(book) for book in _catalog.list_books(db)]


@router.get("/{book_id}", response_model=BookRead)
def get_book(book_id: int, db: Session = Depends(get_db)) -> BookRead:
    return BookRead.model_validate(_catalog.get_book(db, book_id))


@router.get("/{book_id}/copies", response_model=list[CopyRead])
def list_book_copies(book_id: int, db: Session = Depends(get_db)) -> list[CopyRead]:
    return [CopyRead.model_validate(copy) for copy in _catalog.list_copies_of_book(db, book_id)]


@router.put("/{book_id}", response_model=BookRead)
def update_book(book_id: int, payload: BookUpdate, db: Session = Depends(get_db)) -> BookRead:
    book = _catalog.update_book(db, book_id, data=payload.model_dump(exclude_unset=True))
    return BookRead.model_validate(book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, db: Session = Depends(get_db)) -> None:
    """Delete a book that has no copies."""

    _catalog.delete_book(db, book_id)
