"""ORM model for library members."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.db.base import Base

if TYPE_CHECKING:
    from library_api.models.borrowing import Borrowing
    from library_api.models.librarian import Librarian


class User(Base):
    """Represents a library member who can borrow copies."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    address: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # No ORM cascades: deletes are checked by the integrity guard instead
    borrowings: Mapped[list["Borrowing"]] = relationship("Borrowing", back_populates="user")
    librarian: Mapped["Librarian | None"] = relationship(
        "Librarian", back_populates="user", uselist=False
    )

    @property
    def is_librarian(self) -> bool:
        return self.librarian is not None
