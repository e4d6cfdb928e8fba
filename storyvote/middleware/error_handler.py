"""
Error handling middleware for the application.

This module provides centralized error handling for the application,
ensuring consistent error responses across all endpoints.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storyvote.utils.api_response import error_response
from storyvote.exceptions import (
    StoryVoteError,
    NotFoundError,
    InvalidRequestError,
    ConflictError,
    RateLimitExceededError,
    UnauthorizedError,
)

# Configure logging
logger = logging.getLogger(__name__)

# Most specific classes first
STATUS_CODES = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (RateLimitExceededError, status.HTTP_429_TOO_MANY_REQUESTS),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (InvalidRequestError, status.HTTP_400_BAD_REQUEST),
]


def status_code_for(exc: StoryVoteError) -> int:
    """HTTP status code reported for a domain exception."""
    for exc_class, status_code in STATUS_CODES:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def add_error_handlers(app: FastAPI) -> None:
    """
    Add error handlers to the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions."""
        logger.warning(f"HTTP exception: {exc.detail} (status_code={exc.status_code})")
        return JSONResponse(
            content=error_response(
                message=str(exc.detail),
                code="http_error"
            ),
            status_code=exc.status_code
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle request validation errors."""
        error_messages = []

        for error in exc.errors():
            loc = " -> ".join(str(loc_item) for loc_item in error["loc"])
            error_messages.append(f"{loc}: {error['msg']}")

        error_msg = "Validation error"
        logger.warning(f"{error_msg}: {', '.join(error_messages)}")

        return JSONResponse(
            content=error_response(
                message=error_msg,
                code="validation_error",
                details={"errors": error_messages}
            ),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )

    @app.exception_handler(StoryVoteError)
    async def storyvote_error_handler(request: Request, exc: StoryVoteError) -> JSONResponse:
        """Handle domain errors raised by the services."""
        status_code = status_code_for(exc)
        error_msg = str(exc) or "Request could not be processed"
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {error_msg}")

        return JSONResponse(
            content=error_response(
                message=error_msg,
                code=exc.code,
                details=exc.details
            ),
            status_code=status_code
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Handle database errors."""
        logger.error(f"Database error: {str(exc)}")

        return JSONResponse(
            content=error_response(
                message="Database error occurred",
                code="database_error"
            ),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all other exceptions."""
        logger.error(f"Unexpected error: {str(exc)}", exc_info=True)

        return JSONResponse(
            content=error_response(
                message="Internal server error",
                code="server_error",
                details={"type": type(exc).__name__}
            ),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
