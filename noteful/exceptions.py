"""
Noteful Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions, each mapped to one HTTP status.
How:   Services raise these; the handlers registered in main.py turn them
       into structured JSON error responses.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    │   └── DuplicateKeyError    → 400 Bad Request (unique name taken)
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error

The `message` is safe to return to the client. The `context` dict is for
logs and, for validation errors only, echoed back as `details`.
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    When:    Malformed ObjectId, missing `title` / `name`, reference to a
             folder or tag that does not exist.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "The `folderId` is not valid",
            "details": {"field": "folderId"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DuplicateKeyError(ValidationError):
    """
    Raised when an insert or update violates a unique constraint.

    The database reports this as an IntegrityError; services translate it
    so the client sees e.g. "The folder name already exists" with a 400.
    """

    def __init__(
        self,
        resource: str = "resource",
        field: str = "name",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=f"The {resource} {field} already exists",
            field=field,
            context=context,
        )
        self.resource = resource


class NotFoundError(NotefulError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that into
    this exception so routes stay free of status-code logic.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotefulError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic; the original
    error type is kept in `context` and logged server-side only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(NotefulError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
