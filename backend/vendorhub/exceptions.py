"""
VendorHub Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every error the API can report.
How:   Each class carries a user-safe message, an optional context dict, an
       HTTP status code and a machine-readable error code. A single handler
       registered in main.py turns any VendorHubError into a JSON response.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    VendorHubError (base)                → 500 server_error
    ├── ValidationError                  → 400 validation_error
    │   ├── DuplicateEmailError          → 400 duplicate_email
    │   └── InvalidIdError               → 400 invalid_id
    ├── AuthenticationError              → 401
    │   ├── InvalidCredentialsError      → 401 invalid_credentials
    │   ├── TokenMissingError            → 401 token_missing
    │   ├── TokenInvalidError            → 401 token_invalid
    │   └── TokenExpiredError            → 401 token_expired
    ├── ForbiddenError                   → 403 forbidden
    ├── NotFoundError                    → 404 not_found
    ├── RateLimitExceededError           → 429 rate_limit_exceeded
    ├── FileStorageError                 → 500 server_error
    └── DatabaseError                    → 500 server_error
"""

from typing import Any, Dict, Optional


class VendorHubError(Exception):
    """
    Base exception for all VendorHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only returned where `expose_context` is set)
    """

    status_code: int = 500
    error_code: str = "server_error"
    expose_context: bool = False

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VendorHubError):
    """Client input failed a business rule the client can fix."""

    status_code = 400
    error_code = "validation_error"
    expose_context = True

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


class DuplicateEmailError(ValidationError):
    """A vendor with this email is already registered."""

    error_code = "duplicate_email"
    expose_context = False

    def __init__(self, email: Optional[str] = None):
        # Email is kept in context for logs only
        super().__init__(
            message="Email already taken",
            field="email",
            context={"email": email} if email else None,
        )


class InvalidIdError(ValidationError):
    """A path identifier is not a well-formed UUID."""

    error_code = "invalid_id"

    def __init__(self, resource: str = "resource", raw_id: Optional[str] = None):
        super().__init__(
            message=f"'{raw_id}' is not a valid {resource} id",
            field="id",
            context={"resource": resource},
        )


class AuthenticationError(VendorHubError):
    """Base for every 401 response; handlers add `WWW-Authenticate: Bearer`."""

    status_code = 401
    error_code = "unauthorized"


class InvalidCredentialsError(AuthenticationError):
    """
    Login failed.

    Raised for an unknown email AND for a wrong password with the same
    message, so the response never reveals which emails are registered.
    """

    error_code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid username or password", context=context)


class TokenMissingError(AuthenticationError):
    error_code = "token_missing"

    def __init__(self):
        super().__init__(message="Token is required")


class TokenInvalidError(AuthenticationError):
    error_code = "token_invalid"

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            message="Invalid token",
            context={"reason": reason} if reason else None,
        )


class TokenExpiredError(AuthenticationError):
    error_code = "token_expired"

    def __init__(self):
        super().__init__(message="Token has expired")


class ForbiddenError(VendorHubError):
    """Authenticated vendor does not own the resource it tried to change."""

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "You do not have access to this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VendorHubError):
    """
    A requested resource does not exist.

    SQLAlchemy returns None for missing rows; services turn that None into
    this exception so routes stay free of status-code logic.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class RateLimitExceededError(VendorHubError):
    """Client exceeded the per-IP limit on credential endpoints."""

    status_code = 429
    error_code = "rate_limit_exceeded"
    expose_context = True

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class FileStorageError(VendorHubError):
    """Reading or writing the upload directory failed (disk full, permissions...)."""

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(VendorHubError):
    """
    A database operation failed unexpectedly.

    The client always gets a generic message; SQL details stay in the logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
