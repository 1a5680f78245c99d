"""Tests for the borrow and return workflows."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from library_api.core.errors import (
    BorrowingAlreadyReturnedError,
    ConflictError,
    CopyAlreadyBorrowedError,
    InvalidArgumentError,
    NotFoundError,
    ReturnBeforeBorrowError,
)
from library_api.db.session import atomic
from library_api.models import Borrowing, Copy, CopyStatus
from library_api.services import CatalogService, LendingService


@pytest.fixture
def lending() -> LendingService:
    return LendingService()


def _assert_status_matches_open_borrowings(session: Session) -> None:
    session.expire_all()
    for copy in session.scalars(select(Copy)).all():
        open_count = session.execute(
            select(func.count())
            .select_from(Borrowing)
            .where(Borrowing.copy_id == copy.id, Borrowing.return_date.is_(None))
        ).scalar()
        assert open_count in (0, 1)
        assert (copy.status == CopyStatus.BORROWED) == (open_count == 1)


def test_borrow_marks_copy_borrowed(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    borrowing = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    assert borrowing.id is not None
    assert borrowing.borrow_date == today
    assert borrowing.return_date is None
    copy = session.get(Copy, catalog_records["copy_id"])
    assert copy.status == CopyStatus.BORROWED
    _assert_status_matches_open_borrowings(session)


def test_full_borrow_and_return_cycle(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    borrowing = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    with pytest.raises(CopyAlreadyBorrowedError) as excinfo:
        lending.borrow(
            session,
            user_id=catalog_records["user_id"],
            copy_id=catalog_records["copy_id"],
            borrow_date=today,
        )
    assert excinfo.value.message == "The book copy is already borrowed."

    returned = lending.return_copy(
        session, borrowing_id=borrowing.id, return_date=today + timedelta(days=14)
    )
    assert returned.return_date == today + timedelta(days=14)
    assert session.get(Copy, catalog_records["copy_id"]).status == CopyStatus.AVAILABLE

    with pytest.raises(BorrowingAlreadyReturnedError) as excinfo:
        lending.return_copy(session, borrowing_id=borrowing.id, return_date=today)
    assert excinfo.value.message == "This book has already been returned."

    # A returned copy can be lent again
    again = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today + timedelta(days=15),
    )
    assert again.id != borrowing.id
    _assert_status_matches_open_borrowings(session)


def test_failed_borrow_leaves_store_unchanged(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    with pytest.raises(ConflictError):
        lending.borrow(
            session,
            user_id=catalog_records["user_id"],
            copy_id=catalog_records["copy_id"],
            borrow_date=today,
        )

    assert len(lending.list_borrowings(session)) == 1
    _assert_status_matches_open_borrowings(session)


def test_borrow_requires_date(
    session: Session, lending: LendingService, catalog_records: dict[str, int]
) -> None:
    with pytest.raises(InvalidArgumentError):
        lending.borrow(
            session,
            user_id=catalog_records["user_id"],
            copy_id=catalog_records["copy_id"],
            borrow_date=None,
        )
    assert session.get(Copy, catalog_records["copy_id"]).status == CopyStatus.AVAILABLE


def test_borrow_unknown_user_or_copy(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    with pytest.raises(NotFoundError):
        lending.borrow(session, user_id=999, copy_id=catalog_records["copy_id"], borrow_date=today)
    with pytest.raises(NotFoundError):
        lending.borrow(session, user_id=catalog_records["user_id"], copy_id=999, borrow_date=today)
    assert lending.list_borrowings(session) == []


def test_borrow_repairs_stale_borrowed_status(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    copy = CatalogService().create_copy(
        session,
        data={"book_id": catalog_records["book_id"], "copy_number": 3, "status": "Borrowed"},
    )

    borrowing = lending.borrow(
        session, user_id=catalog_records["user_id"], copy_id=copy.id, borrow_date=today
    )

    assert borrowing.copy_id == copy.id
    assert session.get(Copy, copy.id).status == CopyStatus.BORROWED
    _assert_status_matches_open_borrowings(session)


def test_return_before_borrow_date_is_rejected(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    borrowing = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    with pytest.raises(ReturnBeforeBorrowError) as excinfo:
        lending.return_copy(
            session, borrowing_id=borrowing.id, return_date=today - timedelta(days=1)
        )

    assert isinstance(excinfo.value, InvalidArgumentError)
    assert lending.get_borrowing(session, borrowing.id).return_date is None
    assert session.get(Copy, catalog_records["copy_id"]).status == CopyStatus.BORROWED


def test_return_on_same_day_is_allowed(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    borrowing = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    returned = lending.return_copy(session, borrowing_id=borrowing.id, return_date=today)

    assert returned.return_date == today


def test_return_requires_date_and_existing_borrowing(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    with pytest.raises(NotFoundError):
        lending.return_copy(session, borrowing_id=999, return_date=today)

    borrowing = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )
    with pytest.raises(InvalidArgumentError):
        lending.return_copy(session, borrowing_id=borrowing.id, return_date=None)
    assert session.get(Copy, catalog_records["copy_id"]).status == CopyStatus.BORROWED


def test_second_open_borrowing_is_rejected_by_the_database(
    session: Session, catalog_records: dict[str, int], today: date
) -> None:
    LendingService().borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    with pytest.raises(ConflictError):
        with atomic(session):
            session.add(
                Borrowing(
                    user_id=catalog_records["user_id"],
                    copy_id=catalog_records["copy_id"],
                    borrow_date=today,
                )
            )
            session.flush()


def test_list_borrowings_for_user(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    first = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )
    lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["second_copy_id"],
        borrow_date=today + timedelta(days=1),
    )
    lending.return_copy(session, borrowing_id=first.id, return_date=today + timedelta(days=2))

    history = lending.list_borrowings_for_user(session, catalog_records["user_id"])
    open_only = lending.list_borrowings_for_user(
        session, catalog_records["user_id"], open_only=True
    )

    assert len(history) == 2
    assert history[0].borrow_date == today + timedelta(days=1)
    assert [b.copy_id for b in open_only] == [catalog_records["second_copy_id"]]

    with pytest.raises(NotFoundError):
        lending.list_borrowings_for_user(session, 999)


def test_find_open_borrowing_by_title(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    borrowing = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    found = lending.find_open_borrowing_by_title(
        session, user_id=catalog_records["user_id"], title="Dune"
    )
    assert found.id == borrowing.id

    lending.return_copy(session, borrowing_id=borrowing.id, return_date=today)
    with pytest.raises(NotFoundError):
        lending.find_open_borrowing_by_title(
            session, user_id=catalog_records["user_id"], title="Dune"
        )


def test_list_available_copies(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    available = lending.list_available_copies(session)

    assert [copy.id for copy in available] == [catalog_records["second_copy_id"]]


def test_delete_borrowing_only_after_return(
    session: Session, lending: LendingService, catalog_records: dict[str, int], today: date
) -> None:
    borrowing = lending.borrow(
        session,
        user_id=catalog_records["user_id"],
        copy_id=catalog_records["copy_id"],
        borrow_date=today,
    )

    with pytest.raises(ConflictError):
        lending.delete_borrowing(session, borrowing.id)

    lending.return_copy(session, borrowing_id=borrowing.id, return_date=today)
    lending.delete_borrowing(session, borrowing.id)

    with pytest.raises(NotFoundError):
        lending.get_borrowing(session, borrowing.id)
    _assert_status_matches_open_borrowings(session)
