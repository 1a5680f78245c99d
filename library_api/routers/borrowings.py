"""Borrow and return endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.schemas.borrowing import BorrowingRead, BorrowRequest, ReturnRequest
from library_api.services.lending import LendingService

router = APIRouter(prefix="/borrowings", tags=["Borrowings"])
_lending = LendingService()


@router.post("/", response_model=BorrowingRead, status_code=status.HTTP_201_CREATED)
def borrow_copy(payload: BorrowRequest, db: Session = Depends(get_db)) -> BorrowingRead:
    """Lend a copy to a user."""

    borrowing = _lending.borrow(
        db,
        user_id=payload.user_id,
        copy_id=payload.copy_id,
        borrow_date=payload.borrow_date,
    )
    return BorrowingRead.model_validate(borrowing)


@router.get("/", response_model=list[BorrowingRead])
def list_borrowings(db: Session = Depends(get_db)) -> list[BorrowingRead]:
    return [BorrowingRead.model_validate(b) for b in _lending.list_borrowings(db)]


@router.get("/{borrowing_id}", response_model=BorrowingRead)
def get_borrowing(borrowing_id: int, db: Session = Depends(get_db)) -> BorrowingRead:
    return BorrowingRead.model_validate(_lending.get_borrowing(db, borrowing_id))


@router.post("/{borrowing_id}/return", response_model=BorrowingRead)
def return_copy(
    borrowing_id: int, payload: ReturnRequest, db: Session = Depends(get_db)
) -> BorrowingRead:
    """Close a borrowing and make its copy available again."""

    borrowing = _lending.return_copy(db, borrowing_id=borrowing_id, return_date=payload.return_date)
    return BorrowingRead.model_validate(borrowing)


@router.delete("/{borrowing_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_borrowing(borrowing_id: int, db: Session = Depends(get_db)) -> None:
    _lending.delete_borrowing(db, borrowing_id)
