"""
Centralized error handling and user-friendly error messages.
"""
import logging
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Validation error."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class ConflictError(AppError):
    """Unique constraint violation (e.g. an email that is already registered)."""
    def __init__(self, message: str = "This record already exists", details: dict | None = None):
        super().__init__(message, status_code=409, details=details)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class UnauthorizedError(AppError):
    """Unauthorized access error."""
    def __init__(self, message: str = "Unauthorized access", details: dict | None = None):
        super().__init__(message, status_code=401, details=details)


class StorageError(AppError):
    """Database error."""
    def __init__(self, message: str = "Database operation failed", details: dict | None = None):
        super().__init__(message, status_code=500, details=details)


# User-friendly error messages
ERROR_MESSAGES = {
    # Authentication
    "invalid_credentials": "Invalid email or password. Please try again.",
    "missing_credentials": "Please provide email and password.",
    "email_exists": "An account with this email already exists. Please login instead.",
    "weak_password": "Password must be at least 6 characters long.",
    "session_expired": "Your session has expired. Please login again.",
    "invalid_token": "Authentication invalid. Please login again.",
    "account_not_found": "Account not found. It may have been deleted.",

    # Jobs
    "job_not_found": "Job not found.",
    "invalid_job_data": "Job information is incomplete. Please fill in all required fields.",

    # General
    "unauthorized": "Please login to access this feature.",
    "not_found": "The requested resource was not found.",
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Please check your input and try again.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def classify_database_error(error: Exception, operation: str = "") -> AppError:
    """Translate a SQLAlchemy failure into one of the application error kinds."""
    logger.error(f"Database error during {operation}: {error}")

    if isinstance(error, AppError):
        return error

    error_str = str(getattr(error, "orig", None) or error).lower()

    if isinstance(error, IntegrityError):
        # Detect specific DB errors
        if "duplicate" in error_str or "unique" in error_str:
            return ConflictError(
                "This record already exists. Please check your input.",
                details={"operation": operation},
            )

        if "foreign key" in error_str:
            return ValidationError(
                "Invalid reference. The related record may have been deleted.",
                details={"operation": operation},
            )

        if "check" in error_str or "not null" in error_str:
            return ValidationError(
                get_error_message("validation_error"),
                details={"operation": operation},
            )

    if isinstance(error, OperationalError):
        return StorageError(get_error_message("database_error"), details={"operation": operation})

    return StorageError(get_error_message("server_error"), details={"operation": operation})


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
        "status_code": status_code,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )
