from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

class DashboardError(Exception):
    """Base exception for errors surfaced to API clients"""
    def __init__(self, message: str, error_code: str = "DASHBOARD_ERROR", status_code: int = 400, details: Any = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(DashboardError):
    """Malformed input, nothing was written"""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, "VALIDATION_ERROR", 400, details)

class DuplicateFieldError(DashboardError):
    """A custom field with the same fieldId already exists"""
    def __init__(self, field_id: str):
        super().__init__(f"Field ID '{field_id}' already exists", "DUPLICATE_FIELD", 409)
        self.field_id = field_id

class OverlapError(DashboardError):
    """Tenant occupancy overlaps another tenant of the same apartment"""
    def __init__(self, message: str = "Another active tenant overlaps for this apartment"):
        super().__init__(message, "TENANT_OVERLAP", 409)

class NotFoundError(DashboardError):
    """Referenced record does not exist"""
    def __init__(self, resource: str, resource_id: Any):
        super().__init__(f"{resource} with ID {resource_id} not found", "NOT_FOUND", 404)

class StorageError(DashboardError):
    """Persistence layer failure"""
    def __init__(self, message: str, error_code: str = "STORAGE_ERROR", details: Any = None):
        super().__init__(message, error_code, 500, details)

class SyncIncompleteError(StorageError):
    """A bulk seeding or cleanup pass could not update every entity"""
    def __init__(self, message: str, failed_ids: List[int]):
        super().__init__(message, "SYNC_INCOMPLETE", {"failed_ids": failed_ids})
        self.failed_ids = failed_ids

NON_RETRYABLE_CODES = ["VALIDATION_ERROR", "DUPLICATE_FIELD", "NOT_FOUND", "TENANT_OVERLAP"]

def _error_body(message: str, code: str, error_type: str, retry_allowed: bool, details: Optional[Any] = None):
    error = {
        "message": message,
        "code": code,
        "type": error_type
    }
    if details is not None:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "retry_allowed": retry_allowed
    }

async def dashboard_error_handler(request: Request, exc: DashboardError):
    """Handle application errors raised by the service layer"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message} (Code: {exc.error_code})")
    else:
        logger.info(f"{type(exc).__name__}: {exc.message} (Code: {exc.error_code})")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            exc.message,
            exc.error_code,
            type(exc).__name__,
            exc.error_code not in NON_RETRYABLE_CODES,
            jsonable_encoder(exc.details) if exc.details is not None else None
        )
    )

async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report request body/query validation failures as 400"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "Invalid request data",
            "VALIDATION_ERROR",
            "ValidationError",
            False,
            jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
        )
    )

async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors"""
    logger.error(f"Database error: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "A database error occurred. Please try again later.",
            "DATABASE_ERROR",
            "SQLAlchemyError",
            True
        )
    )

async def general_error_handler(request: Request, exc: Exception):
    """Handle general errors"""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "An unexpected error occurred. Please try again later.",
            "INTERNAL_ERROR",
            "Exception",
            True
        )
    )
