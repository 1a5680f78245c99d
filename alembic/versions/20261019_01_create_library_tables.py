"""Create publishers, books, copies, users, librarians and borrowings tables"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "publishers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=512), nullable=True),
        sa.Column("phone_number", sa.String(length=64), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_publishers_name", "publishers", ["name"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=64), nullable=True),
        sa.Column("address", sa.String(length=512), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("publication_year", sa.Integer(), nullable=False),
        sa.Column("isbn", sa.String(length=13), nullable=False),
        sa.Column("publisher_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("isbn", name="uq_books_isbn"),
        sa.ForeignKeyConstraint(
            ["publisher_id"], ["publishers.id"], name="fk_books_publisher_id_publishers"
        ),
    )
    op.create_index("ix_books_title", "books", ["title"])
    op.create_index("ix_books_publisher_id", "books", ["publisher_id"])

    op.create_table(
        "librarians",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("employment_date", sa.Date(), nullable=False),
        sa.Column("position", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_librarians_user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_librarians_user_id_users"),
    )

    op.create_table(
        "copies",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("book_id", sa.Integer(), nullable=False),
        sa.Column("copy_number", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "Available",
                "Borrowed",
                name="copy_status",
                native_enum=False,
                create_constraint=True,
            ),
            nullable=False,
            server_default="Available",
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
        sa.UniqueConstraint("book_id", "copy_number", name="uq_copies_book_copy_number"),
        sa.CheckConstraint("copy_number > 0", name="ck_copies_positive_copy_number"),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], name="fk_copies_book_id_books"),
    )
    op.create_index("ix_copies_book_id", "copies", ["book_id"])
    op.create_index("ix_copies_status", "copies", ["status"])

    op.create_table(
        "borrowings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("copy_id", sa.Integer(), nullable=False),
        sa.Column("borrow_date", sa.Date(), nullable=False),
        sa.Column("return_date", sa.Date(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "return_date IS NULL OR return_date >= borrow_date",
            name="ck_borrowings_return_after_borrow",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_borrowings_user_id_users"),
        sa.ForeignKeyConstraint(["copy_id"], ["copies.id"], name="fk_borrowings_copy_id_copies"),
    )
    op.create_index("ix_borrowings_user_id", "borrowings", ["user_id"])
    op.create_index("ix_borrowings_copy_id", "borrowings", ["copy_id"])

    # At most one open borrowing per copy
    op.create_index(
        "uq_borrowings_open_copy",
        "borrowings",
        ["copy_id"],
        unique=True,
        sqlite_where=sa.text("return_date IS NULL"),
        postgresql_where=sa.text("return_date IS NULL"),
    )


def downgrade() -> None:
    op.drop_index("uq_borrowings_open_copy", table_name="borrowings")
    op.drop_index("ix_borrowings_copy_id", table_name="borrowings")
    op.drop_index("ix_borrowings_user_id", table_name="borrowings")
    op.drop_table("borrowings")

    op.drop_index("ix_copies_status", table_name="copies")
    op.drop_index("ix_copies_book_id", table_name="copies")
    op.drop_table("copies")

    op.drop_table("librarians")

    op.drop_index("ix_books_publisher_id", table_name="books")
    op.drop_index("ix_books_title", table_name="books")
    op.drop_table("books")

    op.drop_table("users")

    op.drop_index("ix_publishers_name", table_name="publishers")
    op.drop_table("publishers")
