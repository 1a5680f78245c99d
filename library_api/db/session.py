import logging
from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from library_api.core.config import Settings, get_settings
from library_api.core.errors import ConflictError, LibraryError

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the engine described by ``settings``."""

    options: dict[str, object] = {"echo": settings.database_echo, "future": True}
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    if settings.database_isolation_level:
        options["isolation_level"] = settings.database_isolation_level
    return create_engine(settings.database_url, **options)


settings = get_settings()

engine = build_engine(settings)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator:
    """Provide a SQLAlchemy session scoped to the request lifecycle."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """Run the enclosed block as one transaction.

    Commits when the block finishes, rolls back on any exception. Constraint
    violations and optimistic-lock failures surface as ``ConflictError``.
    """

    try:
        yield session
        session.commit()
    except LibraryError:
        session.rollback()
        raise
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Constraint violation, transaction rolled back: %s", exc.orig)
        raise ConflictError(
            "Operation violates a uniqueness or integrity constraint",
            details={"reason": str(exc.orig)},
        ) from exc
    except StaleDataError as exc:
        session.rollback()
        logger.warning("Concurrent modification detected, transaction rolled back: %s", exc)
        raise ConflictError(
            "Record was modified by a concurrent operation",
            details={"reason": str(exc)},
        ) from exc
    except Exception:
        session.rollback()
        logger.error("Unexpected failure, transaction rolled back", exc_info=True)
        raise
