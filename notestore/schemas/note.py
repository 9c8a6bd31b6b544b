"""
NoteStore — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract, plus the functions that turn
       raw request bodies into those models.
Why:   Request bodies arrive in several shapes (form fields, JSON objects, raw
       text). Each operation gets one explicit request model, validated once
       here, so NoteStore only ever sees a name and a non-empty text.
How:   Bodies are parsed by hand (not as FastAPI body parameters) because every
       client mistake must answer 400, while FastAPI's automatic validation
       answers 422. Pydantic errors are re-raised as ValidationError.

Request Shapes:
    POST /write
        application/x-www-form-urlencoded, multipart/form-data, application/json
        → CreateNoteRequest(note_name, note)

    PUT /notes/{name}
        application/x-www-form-urlencoded, multipart/form-data, application/json
        → TextFieldBody(text)     (text taken from the "text" field)
        anything else (text/plain, no content type, ...)
        → RawTextBody(text)       (text is the whole decoded body)
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request

from notestore.exceptions import ValidationError

FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}
JSON_CONTENT_TYPE = "application/json"

MISSING_FIELDS_MESSAGE = "Missing required fields"
MISSING_TEXT_MESSAGE = "Missing text in request body"


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteItem(BaseModel):
    """One note as returned by GET /notes."""
    name: str = Field(description="Note name (the file name inside the store)")
    text: str = Field(description="Full note text")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every failed request.

    Example:
        {
            "error": "not_found",
            "message": "Not found",
            "details": null,
            "request_id": "1f0c9a2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Store directory status: available or unavailable")
    uptime_seconds: float = Field(description="Seconds since the application was created")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateNoteRequest(BaseModel):
    """
    Body of POST /write.

    Both fields are required and must be non-empty strings. An empty string
    counts as missing.
    """
    note_name: str = Field(min_length=1, description="Name of the note to create")
    note: str = Field(min_length=1, description="Text of the note")


class RawTextBody(BaseModel):
    """PUT body sent as plain text; the whole body is the note text."""
    kind: Literal["raw"] = "raw"
    text: str = Field(min_length=1)


class TextFieldBody(BaseModel):
    """PUT body sent as form fields or a JSON object with a "text" field."""
    kind: Literal["field"] = "field"
    text: str = Field(min_length=1)


# Sum type for PUT bodies; "kind" records which shape the client sent.
ReplaceNoteRequest = Union[RawTextBody, TextFieldBody]


# ══════════════════════════════════════════════════════════════════════════
# Body Parsing
# ══════════════════════════════════════════════════════════════════════════


def media_type(request: Request) -> str:
    """Content-Type without parameters, lowercased ("" when absent)."""
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


def _error_fields(exc: PydanticValidationError) -> list:
    return [".".join(str(part) for part in err["loc"]) for err in exc.errors()]


async def read_structured_fields(request: Request, message: str) -> Optional[Dict[str, Any]]:
    """
    Return the body as a field mapping for form and JSON requests.

    Returns None when the body is neither form-encoded nor JSON.

    Raises:
        ValidationError: The JSON body is malformed or is not an object.
    """
    kind = media_type(request)
    if kind in FORM_CONTENT_TYPES:
        form = await request.form()
        return dict(form)
    if kind == JSON_CONTENT_TYPE:
        try:
            payload = await request.json()
        except ValueError as e:
            raise ValidationError(message=message, context={"reason": "malformed JSON"}) from e
        if not isinstance(payload, dict):
            raise ValidationError(message=message, context={"reason": "JSON body must be an object"})
        return payload
    return None


async def parse_create_request(request: Request) -> CreateNoteRequest:
    """
    FastAPI dependency building the CreateNoteRequest for POST /write.

    Raises:
        ValidationError: note_name or note is missing, empty, or not a string.
    """
    fields = await read_structured_fields(request, MISSING_FIELDS_MESSAGE)
    try:
        return CreateNoteRequest.model_validate(fields or {})
    except PydanticValidationError as e:
        raise ValidationError(
            message=MISSING_FIELDS_MESSAGE,
            context={"fields": _error_fields(e)},
        ) from e


async def parse_replace_request(request: Request) -> ReplaceNoteRequest:
    """
    FastAPI dependency building the replace request for PUT /notes/{name}.

    Raises:
        ValidationError: The raw body is empty or not UTF-8, or the "text"
                         field is missing, empty, or not a string.
    """
    fields = await read_structured_fields(request, MISSING_TEXT_MESSAGE)
    if fields is not None:
        try:
            return TextFieldBody.model_validate({"text": fields.get("text")})
        except PydanticValidationError as e:
            raise ValidationError(message=MISSING_TEXT_MESSAGE, field="text") from e

    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError(
            message="Note text must be valid UTF-8",
            context={"reason": "undecodable body"},
        ) from e
    try:
        return RawTextBody(text=text)
    except PydanticValidationError as e:
        raise ValidationError(message=MISSING_TEXT_MESSAGE) from e
