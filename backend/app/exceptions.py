"""
StudyMate Backend — Custom Exception Hierarchy
=================================================

What:  The errors a partner or request operation can end in.
How:   Services raise these (never pymongo or bson errors) with a
       client-safe message and a context dict for the logs. The handlers
       in main.py turn each class into one status code and error body.

Exception Hierarchy:
    StudyMateError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    │   ├── MissingParameterError    → 400 (required query parameter absent)
    │   ├── InvalidIdentifierError   → 400 (id is not a valid ObjectId)
    │   └── InvalidSchemaError       → 400 (request body failed validation)
    ├── NotFoundError                → 404 Not Found
    ├── DatabaseError                → 500 Internal Server Error
    │   └── UpdateFailedError        → 500 (request partial update failed)
    └── StoreUnavailableError        → 503 Service Unavailable (retry later)
"""

from typing import Any, Dict, Optional


class StudyMateError(Exception):
    """
    Base exception for all StudyMate application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for client errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StudyMateError):
    """
    The client sent something it can fix: a bad id, a missing query
    parameter, or a body that does not fit the record type.
    HTTP:    400 Bad Request

    Subclasses narrow the cause so the response carries a precise error code
    while every client mistake still maps to 400.
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
        super().__init__(message=message, context=ctx)
        self.field = field


class MissingParameterError(ValidationError):
    """
    Raised when a required query parameter is absent or empty.

    When:    GET /myConnections or GET /requests without ?email=
    Raised before the store is touched.
    """

    error_code = "missing_parameter"

    def __init__(self, parameter: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"{parameter.capitalize()} query required",
            field=parameter,
            context=context,
        )
        self.parameter = parameter


class InvalidIdentifierError(ValidationError):
    """
    Raised when an id path parameter is not a valid ObjectId.

    bson raises InvalidId for these; the service layer converts it here so
    a typo in a URL is a 400, not an unhandled 500.
    """

    error_code = "invalid_identifier"

    def __init__(self, identifier: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"'{identifier}' is not a valid identifier",
            field="id",
            context=context,
        )
        self.identifier = identifier


class InvalidSchemaError(ValidationError):
    """
    Raised when a request body does not match the expected record shape.

    Also used for FastAPI's RequestValidationError (see main.py), so body
    validation failures share one error code.
    """

    error_code = "invalid_schema"

    def __init__(
        self,
        message: str = "Request body does not match the expected schema",
        errors: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)


class NotFoundError(StudyMateError):
    """
    A single-document lookup matched nothing.

    When:    GET /partners/{id} with an id that matches no document.
    HTTP:    404 Not Found

    motor returns None for a missing document; the service layer converts
    None → NotFoundError so the route stays free of status-code logic.
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


class DatabaseError(StudyMateError):
    """
    Raised when a store operation fails unexpectedly.

    What:    An insert, find, update or delete raised a PyMongoError.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Driver details (query shape, server address) are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpdateFailedError(DatabaseError):
    """
    Raised when the partial update of a request fails for any unexpected reason.

    HTTP:    500 Internal Server Error
    The message is fixed; the original error type is kept in context for logs.
    """

    MESSAGE = "Failed to update request"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=self.MESSAGE, context=context)


class StoreUnavailableError(StudyMateError):
    """
    Raised when MongoDB cannot be reached.

    When:    Server selection timed out, the connection dropped, or the
             client was never created because startup failed.
    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "The database is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
