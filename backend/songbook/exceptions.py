"""
Songbook Backend - Custom Exception Hierarchy
==============================================

What:  Defines the typed failures every song operation can end in.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in encoders.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by the validation layer, the song store and the controller.
When:  During request processing, whenever an operation cannot complete.

Exception Hierarchy:
    SongbookError (base)
    ├── ValidationError        → 400 Bad Request (client can fix the fields)
    ├── InvalidIdError         → 400 Bad Request (id is not a store identifier)
    ├── NotFoundError          → 404 Not Found
    └── StoreUnavailableError  → 500 Internal Server Error (store failed or timed out)

Store driver errors never leave the store adapter as-is: they are converted
into StoreUnavailableError so a failing database can never take the
serving process down with an unhandled exception.
"""

from typing import Any, Dict, Optional


class SongbookError(Exception):
    """
    Base exception for all Songbook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SongbookError):
    """
    Raised when submitted song fields fail validation.

    What:    The client sent fields that can be corrected and resubmitted.
    When:    Empty title or artist, non-text genre, body that is not an object.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "field": "title",
            "reason": "must be a non-empty string",
            "message": "Invalid value for 'title': must be a non-empty string"
        }
    """

    def __init__(
        self,
        field: str,
        reason: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["field"] = field
        ctx["reason"] = reason
        super().__init__(message=f"Invalid value for '{field}': {reason}", context=ctx)
        self.field = field
        self.reason = reason


class InvalidIdError(SongbookError):
    """
    Raised when an identifier is not in the store's accepted format.

    What:    The id in the path can never name a stored song.
    When:    Checked before any store call on get, update and delete.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        raw_id: Any,
        reason: str = "must be a UUID in canonical 8-4-4-4-12 hex form",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["raw_id"] = str(raw_id)
        super().__init__(message=f"'{raw_id}' is not a valid song id", context=ctx)
        self.raw_id = raw_id
        self.reason = reason


class NotFoundError(SongbookError):
    """
    Raised when a requested resource does not exist.

    What:    No stored song has the requested id.
    When:    GET, PUT or DELETE /songs/{id} with a well-formed but unknown id,
             including a second DELETE of the same id.
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


class StoreUnavailableError(SongbookError):
    """
    Raised when the song store cannot complete an operation.

    What:    The database was unreachable, rejected the statement, or did not
             answer within the configured timeout.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Driver error text (SQL, constraint names, hostnames) is kept in
        `context` and logged server-side only.

    No retries happen at this layer; retry policy belongs to whatever sits
    in front of the service.
    """

    def __init__(
        self,
        message: str = "The song store is unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
