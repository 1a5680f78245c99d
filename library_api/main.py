import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from library_api.core.config import get_settings
from library_api.core.errors import (
    ConflictError,
    InvalidArgumentError,
    LibraryError,
    NotFoundError,
)
from library_api.routers import books, borrowings, copies, health, librarians, publishers, users
from library_api.schemas.error import ErrorResponse


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[LibraryError], int] = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def status_code_for(exc: LibraryError) -> int:
    """Map a domain error onto its HTTP status code."""
    for error_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.resolved_cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(librarians.router)
app.include_router(publishers.router)
app.include_router(books.router)
app.include_router(copies.router)
app.include_router(borrowings.router)
app.include_router(health.router)


@app.exception_handler(LibraryError)
async def handle_library_error(request: Request, exc: LibraryError) -> JSONResponse:
    code = status_code_for(exc)
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Unclassified domain error on %s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s failed with %s: %s", request.method, request.url.path, exc.kind, exc.message)
    body = ErrorResponse(detail=exc.message, error=exc.kind, context=exc.details)
    return JSONResponse(status_code=code, content=jsonable_encoder(body))

