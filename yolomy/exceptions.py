"""
Yolomy Products Backend — Custom Exception Hierarchy
=====================================================

What:  Application-specific exceptions for the error scenarios the API exposes.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return `{"error": ...}` JSON bodies with the matching status code.
Who:   Raised by services and route helpers; caught by global handlers.

Exception Hierarchy:
    YolomyError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class YolomyError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client,
                  except for ValidationError details)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(YolomyError):
    """
    Raised when client input fails validation.

    When:    Missing or malformed product fields, a non-file `image` field,
             an oversized image, or a malformed product identifier.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "Invalid product data",
            "details": {"errors": [{"field": "price", "message": "Field required"}]}
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


class NotFoundError(YolomyError):
    """
    Raised when a requested resource does not exist.

    The message is deliberately short ("Product not found") so clients can
    match on it; the identifier is kept in context for logging.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource[:1].upper()}{resource[1:]} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(YolomyError):
    """
    Raised when a database operation fails.

    When:    Database unreachable, server selection timeout, write failure.
    HTTP:    500 Internal Server Error

    The raw driver message is kept in context["original_error"]; the handler
    only returns it when settings.expose_error_details is enabled.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
