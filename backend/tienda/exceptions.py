"""
Tienda API: Custom Exception Hierarchy
======================================

What:  Defines application-specific exceptions for the two error tiers.
Why:   Validators, the repository and the catalog reader raise these; global
       exception handlers (registered in main.py) turn them into JSON
       responses with the right status code. No handler needs its own
       try/except.
How:   Each exception carries a message and a context dict. Validation
       failures additionally expose `field` and `constraint`.

Exception Hierarchy:
    TiendaError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    │   ├── MissingFieldError        → required field absent or blank
    │   ├── InvalidTypeError         → field present but wrong type/range
    │   ├── InvalidIdentifierError   → table name fails identifier syntax
    │   └── ReferenceNotFoundError   → referenced row does not exist
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error

Validation failures are raised rather than returned: the first failing field
aborts the write before anything reaches the store.
"""

from typing import Any, Dict, Optional


class TiendaError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable description (returned in the response)
        context:  Structured details (field, constraint, resource, ...)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TiendaError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "Field 'precio' must be numeric",
            "code": "validation_error",
            "details": {"field": "precio", "constraint": "numeric"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        constraint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if constraint:
            ctx["constraint"] = constraint
        super().__init__(message=message, context=ctx)
        self.field = field
        self.constraint = constraint


class MissingFieldError(ValidationError):
    """A required field was absent, null or blank."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Field '{field}' is required",
            field=field,
            constraint="required",
        )


class InvalidTypeError(ValidationError):
    """A field was present but could not be coerced to the expected type."""

    def __init__(self, field: str, expected: str):
        article = "an" if expected[:1] in "aeiou" else "a"
        super().__init__(
            message=f"Field '{field}' must be {article} {expected} value",
            field=field,
            constraint=expected,
        )
        self.expected = expected


class InvalidIdentifierError(ValidationError):
    """A table name did not match the SQL identifier pattern."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Invalid table name '{identifier}'",
            field="table",
            constraint="identifier",
        )
        self.identifier = identifier


class ReferenceNotFoundError(ValidationError):
    """
    A foreign-key value in the payload names a row that does not exist.

    Rendered as 400 (not 404): the request path exists, the body is wrong.
    """

    def __init__(self, resource: str, field: str, resource_id: Any):
        super().__init__(
            message=f"{resource} with ID '{resource_id}' was not found",
            field=field,
            constraint="exists",
            context={"resource": resource, "resource_id": str(resource_id)},
        )
        self.resource = resource
        self.resource_id = resource_id


class NotFoundError(TiendaError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class DatabaseError(TiendaError):
    """
    Raised when a statement against the store fails.

    HTTP: 500 Internal Server Error

    Constraint violations, lost connections and timeouts all end up here;
    the driver message is kept in `message` and the original exception
    class in context["original_error"].
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
