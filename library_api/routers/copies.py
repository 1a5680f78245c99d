"""Endpoints for book copies."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.models.copy import CopyStatus
from library_api.schemas.copy import CopyCreate, CopyRead, CopyUpdate
from library_api.services.catalog import CatalogService

router = APIRouter(prefix="/copies", tags=["Copies"])
_catalog = CatalogService()


@router.post("/", response_model=CopyRead, status_code=status.HTTP_201_CREATED)
def create_copy(payload: CopyCreate, db: Session = Depends(get_db)) -> CopyRead:
    copy = _catalog.create_copy(db, data=payload.model_dump())
    return CopyRead.model_validate(copy)


@router.get("/", response_model=list[CopyRead])
def list_copies(
    status_filter: CopyStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
) -> list[CopyRead]:
    """List copies, optionally only those in one availability state."""

    return [CopyRead.model_validate(copy) for copy in _catalog.list_copies(db, status_filter)]


@router.get("/lookup", response_model=CopyRead)
def find_copy(
    book_id: int = Query(...),
    copy_number: int = Query(..., ge=1),
    db: Session = Depends(get_db),
) -> CopyRead:
    """Find a copy by its number within a book."""

    return CopyRead.model_validate(_catalog.find_copy(db, book_id=book_id, copy_number=copy_number))


@router.get("/{copy_id}", response_model=CopyRead)
def get_copy(copy_id: int, db: Session = Depends(get_db)) -> CopyRead:
    return CopyRead.model_validate(_catalog.get_copy(db, copy_id))


@router.put("/{copy_id}", response_model=CopyRead)
def update_copy(copy_id: int, payload: CopyUpdate, db: Session = Depends(get_db)) -> CopyRead:
    copy = _catalog.update_copy(db, copy_id, data=payload.model_dump(exclude_unset=True))
    return CopyRead.model_validate(copy)


@router.delete("/{copy_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_copy(copy_id: int, db: Session = Depends(get_db)) -> None:
    """Delete a copy that is not on loan."""

    _catalog.delete_copy(db, copy_id)
