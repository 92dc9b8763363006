"""
Error Handlers
Custom exceptions and exception handlers for FastAPI.
"""

import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..ingestion.errors import CSVProcessingError, MissingColumnsError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidRequestError(APIError):
    """Exception raised for invalid requests."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class FileUploadError(InvalidRequestError):
    """Exception raised when an uploaded file is rejected before processing."""


class EmptyFileError(FileUploadError):
    """Exception raised when no file, or an empty file, was uploaded."""

    def __init__(self):
        super().__init__("No file uploaded or the file is empty")


class InvalidFileTypeError(FileUploadError):
    """Exception raised for files that are not CSV."""

    def __init__(self, allowed_types: List[str], received: str = None):
        allowed = ", ".join(allowed_types)
        message = (
            f"Unsupported file type: {received}. Allowed types: {allowed}"
            if received
            else f"Allowed file types: {allowed}"
        )
        super().__init__(message, details={"allowed_types": allowed_types, "received": received})


class FileTooLargeError(FileUploadError):
    """Exception raised when the upload exceeds the configured size limit."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"File too large. Maximum allowed size: {max_bytes} bytes",
            details={"max_bytes": max_bytes},
        )
        self.status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


def setup_error_handlers(app: FastAPI) -> None:
    """
    Set up custom error handlers for the FastAPI app.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        logger.error(
            f"API error: {exc.message}",
            extra={
                "status_code": exc.status_code,
                "details": exc.details,
                "path": request.url.path,
            },
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "message": exc.message,
                    "type": exc.__class__.__name__,
                    "details": exc.details,
                }
            },
        )

    @app.exception_handler(CSVProcessingError)
    async def csv_processing_error_handler(request: Request, exc: CSVProcessingError):
        """Handle whole-file CSV failures (parse, empty table, missing columns)."""
        logger.warning(f"CSV rejected ({exc.kind}): {exc}", extra={"path": request.url.path})

        details = {"kind": exc.kind}
        if isinstance(exc, MissingColumnsError):
            details["missing"] = exc.missing
            details["required"] = exc.required

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": {
                    "message": str(exc),
                    "type": exc.__class__.__name__,
                    "details": details,
                }
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        logger.warning(f"Validation error: {exc}", extra={"path": request.url.path})

        # Convert error details to JSON-serializable format
        errors = []
        for error in exc.errors():
            errors.append(
                {
                    "loc": error.get("loc", []),
                    "msg": str(error.get("msg", "")),
                    "type": error.get("type", ""),
                }
            )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": {
                    "message": "Request validation failed",
                    "type": "ValidationError",
                    "details": errors,
                }
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        """Handle value errors."""
        logger.warning(f"Value error: {exc}", extra={"path": request.url.path})

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "message": str(exc),
                    "type": "ValueError",
                }
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unexpected error: {exc}", exc_info=True, extra={"path": request.url.path})

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "message": "An unexpected error occurred",
                    "type": "InternalServerError",
                }
            },
        )
