"""Database helpers and base objects."""

from .base import Base, metadata
from .session import SessionLocal, atomic, build_engine, engine, get_db

__all__ = [
    "Base",
    "SessionLocal",
    "atomic",
    "build_engine",
    "engine",
    "get_db",
    "metadata",
]
