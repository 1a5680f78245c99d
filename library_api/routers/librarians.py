"""Endpoints for the librarian role."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.schemas.librarian import LibrarianCreate, LibrarianRead, LibrarianUpdate
from library_api.services.members import MembershipService

router = APIRouter(prefix="/librarians", tags=["Librarians"])
_members = MembershipService()


@router.post("/", response_model=LibrarianRead, status_code=status.HTTP_201_CREATED)
def create_librarian(payload: LibrarianCreate, db: Session = Depends(get_db)) -> LibrarianRead:
    librarian = _members.create_librarian(db, data=payload.model_dump())
    return LibrarianRead.model_validate(librarian)


@router.get("/", response_model=list[LibrarianRead])
def list_librarians(db: Session = Depends(get_db)) -> list[LibrarianRead]:
    return [LibrarianRead.model_validate(item) for item in _members.list_librarians(db)]


@router.get("/{librarian_id}", response_model=LibrarianRead)
def get_librarian(librarian_id: int, db: Session = Depends(get_db)) -> LibrarianRead:
    return LibrarianRead.model_validate(_members.get_librarian(db, librarian_id))


@router.put("/{librarian_id}", response_model=LibrarianRead)
def update_librarian(
    librarian_id: int, payload: LibrarianUpdate, db: Session = Depends(get_db)
) -> LibrarianRead:
    librarian = _members.update_librarian(db, librarian_id, data=payload.model_dump(exclude_unset=True))
    return LibrarianRead.model_validate(librarian)


@router.delete("/{librarian_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_librarian(librarian_id: int, db: Session = Depends(get_db)) -> None:
    """Revoke the librarian role; the user record is kept."""

    _members.delete_librarian(db, librarian_id)
