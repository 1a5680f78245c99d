"""Service layer: lending workflow, catalog and membership operations."""

from .catalog import CatalogService
from .integrity import IntegrityGuard
from .lending import LendingService
from .members import MembershipService

__all__ = [
    "CatalogService",
    "IntegrityGuard",
    "LendingService",
    "MembershipService",
]
