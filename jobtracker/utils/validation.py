"""
Validation utilities for account and job input.

These raise `ValidationError` rather than `HTTPException` so the stores can use
them directly; the app-level exception handler turns them into 400 responses.
"""
import re
from typing import Any

from ..models.job import DEFAULT_JOB_STATUS, JOB_STATUSES
from .error_handlers import ValidationError

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def validate_email(email: str) -> str:
    """Validate email format."""
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")

    email = email.strip().lower()
    if len(email) > 255:
        raise ValidationError("Email too long (max 255 characters)")

    # Something before the @, and a dot somewhere in the domain part.
    pattern = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'
    if not re.match(pattern, email):
        raise ValidationError("Invalid email format")

    return email


def validate_password(password: str) -> None:
    """Validate password strength."""
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")

    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password too long (max {MAX_PASSWORD_BYTES} bytes)")


def validate_string_field(
    value: Any,
    field_name: str,
    min_length: int = 1,
    max_length: int = 1000,
    required: bool = True,
) -> str | None:
    """Validate a string field with common rules."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    value = value.strip()

    if required and not value:
        raise ValidationError(f"{field_name} cannot be empty")

    if len(value) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")

    if len(value) > max_length:
        raise ValidationError(f"{field_name} must not exceed {max_length} characters")

    return value


def validate_name(name: str) -> str:
    return validate_string_field(name, "Name", min_length=3, max_length=50)


def validate_job_status(status: str | None) -> str:
    """Validate job status."""
    if not status:
        return DEFAULT_JOB_STATUS

    if not isinstance(status, str):
        raise ValidationError("Status must be a string")

    status = status.strip().lower()

    if status not in JOB_STATUSES:
        raise ValidationError(
            f"Invalid status. Must be one of: {', '.join(JOB_STATUSES)}"
        )

    return status
