"""
Homebase Backend: Exception Hierarchy
=====================================

What:  Application exceptions and the HTTP status each one maps to.
How:   Services and dependencies raise these; the handlers registered in
       main.py turn them into JSON error responses.

Exception Hierarchy:
    HomebaseError (base)                 → 500
    ├── ClientError(status_code, msg)    → carried status
    │   ├── ValidationError              → 400 Bad Request
    │   ├── AuthenticationError          → 401 Unauthorized
    │   ├── ForbiddenError               → 403 Forbidden
    │   └── NotFoundError                → 404 Not Found
    └── DatabaseError                    → 500 Internal Server Error

ClientError is the caller's fault and its message is safe to return as-is.
Everything else is answered with a generic message; details stay in the logs.
"""

from typing import Any, Dict, Optional


class HomebaseError(Exception):
    """
    Base exception for all Homebase application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged, returned only for client errors)
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ClientError(HomebaseError):
    """
    A failure caused by the caller: bad input, missing identity, not allowed,
    or not found.

    Can be raised directly with any 4xx status; the subclasses below cover the
    codes the API actually uses.
    """

    error_code = "client_error"

    def __init__(
        self,
        status_code: int,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code


class ValidationError(ClientError):
    """
    Raised when client input fails validation (missing field, bad id, range).

    Example response:
        {
            "error": "validation_error",
            "message": "formattedAddress is required",
            "details": {"field": "formattedAddress"}
        }
    """

    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(400, message, context=ctx)
        self.field = field


class AuthenticationError(ClientError):
    """Raised when no valid caller identity can be resolved from the request."""

    error_code = "authentication_required"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(401, message, context=context)


class ForbiddenError(ClientError):
    """
    Raised when the caller tries to change a resource owned by someone else.

    Only mutations answer 403; reads answer 404 so that existence of other
    users' rows is never revealed.
    """

    error_code = "forbidden"

    def __init__(
        self,
        resource: str = "resource",
        action: str = "modify",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(403, f"Not authorized to {action} this {resource}", context=ctx)


class NotFoundError(ClientError):
    """Raised when a requested resource does not exist (or is not the caller's)."""

    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource.capitalize()} with id {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(404, message, context=ctx)


class DatabaseError(HomebaseError):
    """
    Raised when a database statement fails unexpectedly.

    The message returned to the client is always generic; the context
    (resource, id, original error type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
