"""Domain errors and the exception handlers that render them with request_id."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.marketplace.core.logging import get_logger

logger = get_logger(__name__)


class MarketplaceError(Exception):
    """Base class for errors raised by the approval lifecycle services."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "marketplace_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MarketplaceError):
    """Referenced project, organization, request or notification does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class UnauthorizedError(MarketplaceError):
    """Actor lacks the role required for the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "unauthorized"


class ApplicationsClosedError(MarketplaceError):
    """Target does not accept new applications or requests."""

    status_code = status.HTTP_409_CONFLICT
    code = "applications_closed"


class InvalidTransitionError(MarketplaceError):
    """Requested status change is not in the transition table."""

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_transition"


class DependencyFailureError(MarketplaceError):
    """Persistence (or another collaborator) failed while applying a change."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "dependency_failure"


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(MarketplaceError)
    async def marketplace_exception_handler(
        request: Request, exc: MarketplaceError
    ) -> JSONResponse:
        if isinstance(exc, DependencyFailureError):
            logger.error(
                "Dependency failure",
                path=request.url.path,
                error=exc.message,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.message,
                "code": exc.code,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
