"""ORM model for loanable copies and their availability state machine."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.core.errors import InvalidTransitionError
from library_api.db.base import Base

if TYPE_CHECKING:
    from library_api.models.book import Book
    from library_api.models.borrowing import Borrowing


class CopyStatus(str, enum.Enum):
    """Availability states of a copy."""

    AVAILABLE = "Available"
    BORROWED = "Borrowed"


ALLOWED_TRANSITIONS: dict[CopyStatus, frozenset[CopyStatus]] = {
    CopyStatus.AVAILABLE: frozenset({CopyStatus.BORROWED}),
    CopyStatus.BORROWED: frozenset({CopyStatus.AVAILABLE}),
}


class Copy(Base):
    """One physical instance of a book, tracked individually for availability.

    ``status`` caches whether an open borrowing exists. It is only changed
    through :meth:`transition_to`, which the lending workflow calls.
    ``version`` is the optimistic-lock counter checked on every update.
    """

    __tablename__ = "copies"
    __table_args__ = (
        UniqueConstraint("book_id", "copy_number", name="uq_copies_book_copy_number"),
        CheckConstraint("copy_number > 0", name="positive_copy_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id"), nullable=False, index=True)
    copy_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[CopyStatus] = mapped_column(
        Enum(
            CopyStatus,
            name="copy_status",
            native_enum=False,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=CopyStatus.AVAILABLE,
        server_default=CopyStatus.AVAILABLE.value,
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    book: Mapped["Book"] = relationship("Book", back_populates="copies")
    borrowings: Mapped[list["Borrowing"]] = relationship("Borrowing", back_populates="copy")

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_available(self) -> bool:
        return self.status == CopyStatus.AVAILABLE

    def transition_to(self, target: CopyStatus) -> None:
        """Move the copy to ``target`` if the state machine allows it."""

        current = CopyStatus(self.status)
        if target not in ALLOWED_TRANSITIONS[current]:
            raise InvalidTransitionError(self.id, current.value, target.value)
        self.status = target
