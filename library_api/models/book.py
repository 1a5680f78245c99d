"""ORM model for book titles."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.db.base import Base

if TYPE_CHECKING:
    from library_api.models.copy import Copy
    from library_api.models.publisher import Publisher


class Book(Base):
    """Represents a catalogued title; loanable instances are its copies."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    publication_year: Mapped[int] = mapped_column(Integer, nullable=False)
    isbn: Mapped[str] = mapped_column(String(13), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    publisher_id: Mapped[int] = mapped_column(ForeignKey("publishers.id"), nullable=False, index=True)

    publisher_rel: Mapped["Publisher"] = relationship("Publisher", back_populates="books")
    copies: Mapped[list["Copy"]] = relationship(
        "Copy", back_populates="book", order_by="Copy.copy_number"
    )

    @property
    def publisher(self) -> str:
        """Get publisher name from relationship."""
        return self.publisher_rel.name
