"""ORM model for loan events."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.db.base import Base

if TYPE_CHECKING:
    from library_api.models.copy import Copy
    from library_api.models.user import User


class Borrowing(Base):
    """One loan of a copy to a user, open until ``return_date`` is set."""

    __tablename__ = "borrowings"
    __table_args__ = (
        CheckConstraint(
            "return_date IS NULL OR return_date >= borrow_date",
            name="return_after_borrow",
        ),
        # At most one open borrowing per copy
        Index(
            "uq_borrowings_open_copy",
            "copy_id",
            unique=True,
            sqlite_where=text("return_date IS NULL"),
            postgresql_where=text("return_date IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    copy_id: Mapped[int] = mapped_column(ForeignKey("copies.id"), nullable=False, index=True)
    borrow_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="borrowings")
    copy: Mapped["Copy"] = relationship("Copy", back_populates="borrowings")

    @property
    def is_open(self) -> bool:
        return self.return_date is None
