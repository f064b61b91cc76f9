"""
crudkit — Application Error Taxonomy
======================================

What:  The single error type every repository and service operation raises.
How:   ApplicationError carries a human-readable message, an HTTP-style status
       code and an optional context dict. Subclasses pin the status code for
       each outcome class.
Who:   Raised by CrudRepository (backend outcomes) and CrudService
       (validation outcomes); caught by callers or by the FastAPI handlers
       in crudkit.http.

Exception Hierarchy:
    ApplicationError (base, status_code supplied by caller)
    ├── NotFoundError            → 404 (id has no matching record)
    ├── ValidationFailedError    → 422 (configured validator rejected input)
    └── OperationFailedError     → 500 (backend or unexpected failure)

Classification rule:
    An error is classified once, at the innermost layer that can tell what
    went wrong. Outer layers test is_application_error() and re-raise the
    same object instead of wrapping it again.
"""

from typing import Any, Dict, Optional


class ApplicationError(Exception):
    """
    Base class for all crudkit errors.

    Attributes:
        message:      User-facing error description
        status_code:  HTTP-style status code (404, 422, 500, ...)
        context:      Debug details (logged, never meant for API consumers)
    """

    kind = "application_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.context = dict(context or {})
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Client-safe representation (context is deliberately left out)."""
        return {
            "error": self.kind,
            "message": self.message,
            "status_code": self.status_code,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code})"


class NotFoundError(ApplicationError):
    """
    Raised when get/update/delete targets an id the backend has no record for.

    The backend reports absence as None (not an exception); the repository
    turns that None into this error. The id always appears in the message.
    """

    kind = "not_found"

    def __init__(
        self,
        message: str,
        resource_id: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, status_code=404, context=ctx)
        self.resource_id = resource_id


class ValidationFailedError(ApplicationError):
    """Raised when a configured validator rejects create/update input."""

    kind = "validation_failed"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if field:
            ctx["field"] = field
        super().__init__(message=message, status_code=422, context=ctx)
        self.field = field


class OperationFailedError(ApplicationError):
    """
    Raised when an operation could not execute.

    The message is generic per operation; the original exception is chained
    via ``raise ... from exc`` and its type is kept in context for logging.
    """

    kind = "operation_failed"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, status_code=500, context=ctx)
        self.operation = operation


def is_application_error(value: Any) -> bool:
    """True when ``value`` is already classified and must not be re-wrapped."""
    return isinstance(value, ApplicationError)
