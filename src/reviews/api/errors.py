"""HTTP status codes for Reviews domain errors.

Protean's own handlers cover the generic exceptions; the domain's error kinds
get specific codes so clients can tell them apart.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from reviews.errors import (
    AccessDenied,
    AnalyticsNotAvailable,
    DuplicateSubmission,
    InvalidTier,
    ModerationNotAvailable,
    QuotaExceeded,
    ReviewNotFound,
    SiteLimitReached,
    SiteNotFound,
)

STATUS_CODES = {
    SiteNotFound: 404,
    ReviewNotFound: 404,
    AccessDenied: 403,
    ModerationNotAvailable: 403,
    AnalyticsNotAvailable: 403,
    SiteLimitReached: 403,
    DuplicateSubmission: 400,
    QuotaExceeded: 400,
    InvalidTier: 400,
}


def _domain_error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"error": getattr(exc, "messages", str(exc))})

    return handler


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for error_cls, status_code in STATUS_CODES.items():
        app.add_exception_handler(error_cls, _domain_error_handler(status_code))
