from . import books, borrowings, copies, health, librarians, publishers, users  # noqa: F401

__all__ = ["books", "borrowings", "copies", "health", "librarians", "publishers", "users"]
