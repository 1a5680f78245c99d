"""Membership operations: users and the librarian role."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from library_api.core.errors import ConflictError, DuplicateRecordError, NotFoundError
from library_api.db.session import atomic
from library_api.models.librarian import Librarian
from library_api.models.user import User
from library_api.repositories.librarian import LibrarianRepository
from library_api.repositories.user import UserRepository
from library_api.services.integrity import IntegrityGuard
from library_api.services.validation import require_text, require_value, validate_email

logger = logging.getLogger(__name__)


class MembershipService:
    """Manages library members and the librarians among them."""

    def __init__(self, guard: IntegrityGuard | None = None) -> None:
        self._users = UserRepository()
        self._librarians = LibrarianRepository()
        self._guard = guard or IntegrityGuard()

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def _ensure_email_free(self, session: Session, email: str, *, user_id: int | None = None) -> None:
        existing = self._users.get_by_email(session, email)
        if existing is not None and existing.id != user_id:
            raise DuplicateRecordError("User", "email", email)

    def create_user(self, session: Session, *, data: dict[str, Any]) -> User:
        payload = dict(data)
        payload["name"] = require_text("name", payload.get("name"))
        payload["email"] = validate_email(payload.get("email"))
        with atomic(session):
            self._ensure_email_free(session, payload["email"])
            user = self._users.create(session, data=payload)
        logger.info("Created user %s (%s)", user.id, user.email)
        return user

    def get_user(self, session: Session, user_id: int) -> User:
        user = self._users.get(session, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def list_users(self, session: Session) -> list[User]:
        return self._users.list_all(session)

    def update_user(self, session: Session, user_id: int, *, data: dict[str, Any]) -> User:
        payload = dict(data)
        if "name" in payload:
            payload["name"] = require_text("name", payload["name"])
        if "email" in payload:
            payload["email"] = validate_email(payload["email"])
        with atomic(session):
            user = self.get_user(session, user_id)
            if "email" in payload:
                self._ensure_email_free(session, payload["email"], user_id=user.id)
            user = self._users.update(session, user, data=payload)
        logger.info("Updated user %s", user.id)
        return user

    def delete_user(self, session: Session, user_id: int) -> None:
        with atomic(session):
            user = self.get_user(session, user_id)
            self._guard.ensure_user_deletable(session, user)
            self._users.delete(session, user)
        logger.info("Deleted user %s", user_id)

    def is_librarian(self, session: Session, user_id: int) -> bool:
        return self._librarians.count_by_user_id(session, user_id) > 0

    # -------------------------------------------------------------------------
    # Librarians
    # -------------------------------------------------------------------------

    def create_librarian(self, session: Session, *, data: dict[str, Any]) -> Librarian:
        payload = dict(data)
        user_id = require_value("user_id", payload.get("user_id"))
        payload["position"] = require_text("position", payload.get("position"))
        require_value("employment_date", payload.get("employment_date"))
        with atomic(session):
            self.get_user(session, user_id)
            if self._librarians.get_by_user_id(session, user_id) is not None:
                raise ConflictError(
                    f"User {user_id} is already a librarian", {"user_id": user_id}
                )
            librarian = self._librarians.create(session, data=payload)
        logger.info("Granted librarian role %s to user %s", librarian.id, user_id)
        return librarian

    def get_librarian(self, session: Session, librarian_id: int) -> Librarian:
        librarian = self._librarians.get(session, librarian_id)
        if librarian is None:
            raise NotFoundError("Librarian", librarian_id)
        return librarian

    def list_librarians(self, session: Session) -> list[Librarian]:
        return self._librarians.list_all(session)

    def update_librarian(
        self, session: Session, librarian_id: int, *, data: dict[str, Any]
    ) -> Librarian:
        payload = {key: value for key, value in data.items() if key in {"position", "employment_date"}}
        if "position" in payload:
            payload["position"] = require_text("position", payload["position"])
        if "employment_date" in payload:
            require_value("employment_date", payload["employment_date"])
        with atomic(session):
            librarian = self.get_librarian(session, librarian_id)
            librarian = self._librarians.update(session, librarian, data=payload)
        logger.info("Updated librarian %s", librarian.id)
        return librarian

    def delete_librarian(self, session: Session, librarian_id: int) -> None:
        """Revoke the librarian role; the owning user stays."""
        with atomic(session):
            librarian = self.get_librarian(session, librarian_id)
            user = librarian.user
            self._librarians.delete(session, librarian)
            if user is not None:
                # Reload the back-reference so the user no longer points at the role
                session.expire(user, ["librarian"])
        logger.info("Deleted librarian %s", librarian_id)
