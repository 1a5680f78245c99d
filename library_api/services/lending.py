"""Borrowing lifecycle: lending copies out and taking them back.

A copy is ``Borrowed`` exactly when it has an open borrowing (one without a
return date). Both writes of a borrow or a return commit together or not at
all, and two concurrent borrows of the same copy cannot both succeed:

* the copy row is read ``FOR UPDATE`` where the database supports it,
* ``Copy.version`` makes a stale concurrent update fail the flush,
* the partial unique index ``uq_borrowings_open_copy`` rejects a second
  open borrowing.

Failures from the last two surface as :class:`ConflictError` via
:func:`library_api.db.atomic`.

A return re-reads the borrowing ``FOR UPDATE`` and closes it with an UPDATE
guarded by ``return_date IS NULL``, so a second return loses with
:class:`BorrowingAlreadyReturnedError` instead of overwriting the first date.
"""

from __future__ import annotations

import logging
from datetime import date

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
from library_api.models.borrowing import Borrowing
from library_api.models.copy import Copy, CopyStatus
from library_api.repositories.borrowing import BorrowingRepository
from library_api.repositories.copy import CopyRepository
from library_api.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class LendingService:
    """Runs the borrow and return workflows."""

    def __init__(self) -> None:
        self._users = UserRepository()
        self._copies = CopyRepository()
        self._borrowings = BorrowingRepository()

    def borrow(
        self, session: Session, *, user_id: int, copy_id: int, borrow_date: date | None
    ) -> Borrowing:
        """Lend ``copy_id`` to ``user_id`` starting on ``borrow_date``.

        Raises:
            InvalidArgumentError: borrow_date is missing.
            NotFoundError: the user or the copy does not exist.
            ConflictError: the copy already has an open borrowing, or a
                concurrent borrow committed first.
        """
        if borrow_date is None:
            raise InvalidArgumentError("Borrow date cannot be null.", {"field": "borrow_date"})

        with atomic(session):
            if self._users.get(session, user_id) is None:
                raise NotFoundError("User", user_id)
            copy = self._copies.get_for_update(session, copy_id)
            if copy is None:
                raise NotFoundError("Copy", copy_id)

            # The cached status and the borrowings table can disagree; the
            # open borrowing count is authoritative.
            if self._borrowings.count_open_by_copy_id(session, copy.id) > 0:
                logger.warning("Rejected borrow of copy %s by user %s: already on loan", copy.id, user_id)
                raise CopyAlreadyBorrowedError(copy.id)
            if copy.status == CopyStatus.BORROWED:
                logger.warning("Copy %s marked Borrowed without an open borrowing; repairing", copy.id)
                copy.status = CopyStatus.AVAILABLE

            copy.transition_to(CopyStatus.BORROWED)
            borrowing = self._borrowings.create(
                session,
                data={
                    "user_id": user_id,
                    "copy_id": copy.id,
                    "borrow_date": borrow_date,
                    "return_date": None,
                },
            )

        logger.info(
            "User %s borrowed copy %s on %s (borrowing %s)",
            user_id,
            copy_id,
            borrow_date,
            borrowing.id,
        )
        return borrowing

    def return_copy(
        self, session: Session, *, borrowing_id: int, return_date: date | None
    ) -> Borrowing:
        """Close ``borrowing_id`` on ``return_date`` and free its copy.

        Raises:
            NotFoundError: the borrowing does not exist.
            ConflictError: the borrowing was already returned.
            InvalidArgumentError: return_date is missing or precedes the
                borrow date.
        """
        with atomic(session):
            borrowing = self._borrowings.get_for_update(session, borrowing_id)
            if borrowing is None:
                raise NotFoundError("Borrowing", borrowing_id)
            if borrowing.return_date is not None:
                logger.warning("Rejected return of borrowing %s: already returned", borrowing_id)
                raise BorrowingAlreadyReturnedError(borrowing_id)
            if return_date is None:
                raise InvalidArgumentError("Return date cannot be null.", {"field": "return_date"})
            if return_date < borrowing.borrow_date:
                raise ReturnBeforeBorrowError(borrowing_id, borrowing.borrow_date, return_date)

            copy = self._copies.get_for_update(session, borrowing.copy_id)
            if not self._borrowings.close(session, borrowing, return_date=return_date):
                logger.warning("Rejected return of borrowing %s: returned concurrently", borrowing_id)
                raise BorrowingAlreadyReturnedError(borrowing_id)
            if copy.status == CopyStatus.BORROWED:
                copy.transition_to(CopyStatus.AVAILABLE)
            else:
                logger.warning("Copy %s was already marked Available while on loan", copy.id)
            session.flush()

        logger.info("Borrowing %s returned on %s; copy %s available", borrowing_id, return_date, copy.id)
        return borrowing

    def get_borrowing(self, session: Session, borrowing_id: int) -> Borrowing:
        borrowing = self._borrowings.get(session, borrowing_id)
        if borrowing is None:
            raise NotFoundError("Borrowing", borrowing_id)
        return borrowing

    def list_borrowings(self, session: Session) -> list[Borrowing]:
        return self._borrowings.list_all(session)

    def list_borrowings_for_user(
        self, session: Session, user_id: int, *, open_only: bool = False
    ) -> list[Borrowing]:
        if self._users.get(session, user_id) is None:
            raise NotFoundError("User", user_id)
        return self._borrowings.list_by_user_id(session, user_id, open_only=open_only)

    def find_open_borrowing_by_title(self, session: Session, *, user_id: int, title: str) -> Borrowing:
        """Return the user's open borrowing of a copy of the book called ``title``."""
        borrowing = self._borrowings.find_open_by_title_and_user(session, title=title, user_id=user_id)
        if borrowing is None:
            raise NotFoundError("Open borrowing", f"user={user_id} title={title!r}")
        return borrowing

    def list_available_copies(self, session: Session) -> list[Copy]:
        return self._copies.list_by_status(session, CopyStatus.AVAILABLE)

    def delete_borrowing(self, session: Session, borrowing_id: int) -> None:
        """Remove a returned borrowing from the history.

        An open borrowing is what keeps its copy ``Borrowed``; it has to be
        returned first.
        """
        with atomic(session):
            borrowing = self.get_borrowing(session, borrowing_id)
            if borrowing.is_open:
                raise ConflictError(
                    "Cannot delete an open borrowing; return the copy first",
                    {"borrowing_id": borrowing_id},
                )
            self._borrowings.delete(session, borrowing)
        logger.info("Deleted borrowing %s", borrowing_id)
