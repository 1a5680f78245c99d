"""Liveness endpoints used by load balancers and readiness probes."""

from fastapi import APIRouter

from library_api.core.config import Settings, get_settings


router = APIRouter(tags=["Health"])


def health_payload(settings: Settings) -> dict[str, str]:
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@router.get("/")
def read_root() -> dict[str, str]:
    return health_payload(get_settings())


@router.get("/health")
def read_health() -> dict[str, str]:
    """Explicit health endpoint; same payload as the root."""
    return health_payload(get_settings())
