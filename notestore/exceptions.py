"""
NoteStore — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for every failure a note operation can hit.
Why:   Typed exceptions let the store stay free of HTTP concerns while the global
       handlers in main.py still produce the right status code and message.
How:   Each exception carries a short user-facing message and an optional
       context dict. Validation contexts are returned as error details; every
       other context is logged server-side only (it may hold paths and OS errors).
Who:   Raised by NoteStore and the request schemas; caught by global handlers.

Exception Hierarchy:
    NoteStoreError (base)            → 500 Internal Server Error
    ├── ValidationError              → 400 Bad Request
    │   ├── InvalidNoteNameError     → 400 Bad Request
    │   └── NoteAlreadyExistsError   → 400 Bad Request
    ├── NoteNotFoundError            → 404 Not Found
    └── FileStorageError             → 500 Internal Server Error

No operation retries. Every filesystem call is attempted once and its failure
is mapped straight onto one of these classes.
"""

from typing import Any, Dict, Optional


class NoteStoreError(Exception):
    """
    Base exception for all NoteStore application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteStoreError):
    """
    Raised when client input fails validation.

    When:    Missing or empty body fields, unusable note names, duplicate creates.
    HTTP:    400 Bad Request

    Why 400 (not 422):
        The service contract answers every client mistake with 400, including
        the ones pydantic would report as 422. Request bodies are therefore
        parsed by hand in schemas/note.py and failures are re-raised as this class.
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


class InvalidNoteNameError(ValidationError):
    """
    Raised when a note name cannot be used as a single file name.

    A name must be exactly one path component inside the store root:
    no separators, no "." or "..", no NUL byte, not empty.
    """

    error_code = "invalid_note_name"

    def __init__(self, name: str):
        super().__init__(
            message="Invalid note name",
            field="name",
            context={"name": name},
        )
        self.name = name


class NoteAlreadyExistsError(ValidationError):
    """
    Raised by create when a file with the requested name is already present.

    HTTP:    400 Bad Request (the existing note is left untouched)
    """

    error_code = "note_already_exists"

    def __init__(self, name: str):
        super().__init__(
            message="Note already exists",
            field="note_name",
            context={"name": name},
        )
        self.name = name


class NoteNotFoundError(NoteStoreError):
    """
    Raised when a note cannot be read or removed.

    HTTP:    404 Not Found

    The underlying cause (missing file, permission denied, not a regular file)
    is kept in the context for logging only. Clients always see "Not found".
    """

    error_code = "not_found"

    def __init__(
        self,
        name: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message="Not found", context=ctx)
        self.name = name


class FileStorageError(NoteStoreError):
    """
    Raised when a write, listing, or startup directory operation fails.

    When:    Disk full, permission denied, store root missing, unreadable entry.
    HTTP:    500 Internal Server Error

    The message is generic; the OS error and path go to the context.
    """

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
