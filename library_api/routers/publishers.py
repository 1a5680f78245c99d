"""CRUD endpoints for publishers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.schemas.book import BookRead
from library_api.schemas.publisher import PublisherCreate, PublisherRead, PublisherUpdate
from library_api.services.catalog import CatalogService

router = APIRouter(prefix="/publishers", tags=["Publishers"])
_catalog = CatalogService()


@router.post("/", response_model=PublisherRead, status_code=status.HTTP_201_CREATED)
def create_publisher(payload: PublisherCreate, db: Session = Depends(get_db)) -> PublisherRead:
    """Create a new publisher record."""

    publisher = _catalog.create_publisher(db, data=payload.model_dump())
    return PublisherRead.model_validate(publisher)


@router.get("/", response_model=list[PublisherRead])
def list_publishers(
    name: str | None = Query(None, description="Return only the publisher with this exact name"),
    db: Session = Depends(get_db),
) -> list[PublisherRead]:
    if name is not None:
        return [PublisherRead.model_validate(_catalog.get_publisher_by_name(db, name))]
    return [PublisherRead.model_validate(p) for p in _catalog.list_publishers(db)]


@router.get("/{publisher_id}", response_model=PublisherRead)
def get_publisher(publisher_id: int, db: Session = Depends(get_db)) -> PublisherRead:
    return PublisherRead.model_validate(_catalog.get_publisher(db, publisher_id))


@router.get("/{publisher_id}/books", response_model=list[BookRead])
def list_publisher_books(publisher_id: int, db: Session = Depends(get_db)) -> list[BookRead]:
    books = _catalog.list_books_by_publisher(db, publisher_id)
    return [BookRead.model_validate(book) for book in books]


@router.put("/{publisher_id}", response_model=PublisherRead)
def update_publisher(
    publisher_id: int, payload: PublisherUpdate, db: Session = Depends(get_db)
) -> PublisherRead:
    publisher = _catalog.update_publisher(db, publisher_id, data=payload.model_dump(exclude_unset=True))
    return PublisherRead.model_validate(publisher)


@router.delete("/{publisher_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_publisher(publisher_id: int, db: Session = Depends(get_db)) -> None:
    """Delete a publisher that has no books."""

    _catalog.delete_publisher(db, publisher_id)
