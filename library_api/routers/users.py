"""Endpoints for library members and their borrowing history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.schemas.borrowing import BorrowingRead
from library_api.schemas.user import UserCreate, UserRead, UserUpdate
from library_api.services.lending import LendingService
from library_api.services.members import MembershipService

router = APIRouter(prefix="/users", tags=["Users"])
_members = MembershipService()
_lending = LendingService()


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    user = _members.create_user(db, data=payload.model_dump())
    return UserRead.model_validate(user)


@router.get("/", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)) -> list[UserRead]:
    return [UserRead.model_validate(user) for user in _members.list_users(db)]


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)) -> UserRead:
    return UserRead.model_validate(_members.get_user(db, user_id))


@router.get("/{user_id}/borrowings", response_model=list[BorrowingRead])
def list_user_borrowings(
    user_id: int,
    open_only: bool = Query(False, description="Only borrowings that are not returned"),
    db: Session = Depends(get_db),
) -> list[BorrowingRead]:
    """Return the borrowing history of a user, newest first."""

    borrowings = _lending.list_borrowings_for_user(db, user_id, open_only=open_only)
    return [BorrowingRead.model_validate(b) for b in borrowings]


@router.get("/{user_id}/borrowings/open", response_model=BorrowingRead)
def find_open_borrowing(
    user_id: int,
    title: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
) -> BorrowingRead:
    """Find the user's open borrowing of a book by title."""

    return BorrowingRead.model_validate(
        _lending.find_open_borrowing_by_title(db, user_id=user_id, title=title)
    )


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)) -> UserRead:
    user = _members.update_user(db, user_id, data=payload.model_dump(exclude_unset=True))
    return UserRead.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)) -> None:
    """Delete a user with no borrowings and no librarian role."""

    _members.delete_user(db, user_id)
