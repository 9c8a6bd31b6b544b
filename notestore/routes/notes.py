"""
NoteStore — Notes Route Handlers
=================================

What:  The five note endpoints: read, list, create, replace, delete.
How:   Bodies are turned into request models by the dependencies in
       schemas/note.py; the NoteStore comes from notestore.deps. Handlers only
       choose the success status and body. Every failure is an exception that
       the global handlers in main.py convert to an ErrorResponse.

Endpoints:
    GET    /notes/{name}   → 200 text/plain note text           | 404
    PUT    /notes/{name}   → 200 "Updated successfully"         | 400, 500
    DELETE /notes/{name}   → 200 "Deleted"                      | 404
    GET    /notes          → 200 JSON [{name, text}, ...]       | 500
    POST   /write          → 201 "Created"                      | 400, 500
"""

import logging
from typing import List, Union

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from notestore.deps import get_note_store
from notestore.schemas.note import (
    CreateNoteRequest,
    ErrorResponse,
    NoteItem,
    RawTextBody,
    TextFieldBody,
    parse_create_request,
    parse_replace_request,
)
from notestore.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

# The request bodies are parsed by dependencies, so FastAPI cannot infer them
# for the OpenAPI document; they are described here instead.
_TEXT_CONTENT = {"text/plain": {"schema": {"type": "string"}}}

CREATE_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            media: {
                "schema": {
                    "type": "object",
                    "properties": {
                        "note_name": {"type": "string", "description": "Note name"},
                        "note": {"type": "string", "description": "Note text"},
                    },
                    "required": ["note_name", "note"],
                }
            }
            for media in (
                "application/x-www-form-urlencoded",
                "multipart/form-data",
                "application/json",
            )
        },
    }
}

REPLACE_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            **_TEXT_CONTENT,
            **{
                media: {
                    "schema": {
                        "type": "object",
                        "properties": {"text": {"type": "string"}},
                        "required": ["text"],
                    }
                }
                for media in (
                    "application/x-www-form-urlencoded",
                    "multipart/form-data",
                    "application/json",
                )
            },
        },
    }
}


@router.get(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note text", "content": _TEXT_CONTENT},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get the text of a note",
)
async def get_note(name: str, store: NoteStore = Depends(get_note_store)) -> PlainTextResponse:
    text = await store.read_note(name)
    return PlainTextResponse(text)


@router.put(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note updated", "content": _TEXT_CONTENT},
        400: {"description": "Missing text", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace the text of a note",
    description=(
        "Overwrites the note with the request body. The text is either the whole "
        "text/plain body or the `text` field of a form or JSON body. A note that "
        "does not exist yet is created."
    ),
    openapi_extra=REPLACE_BODY,
)
async def replace_note(
    name: str,
    body: Union[RawTextBody, TextFieldBody] = Depends(parse_replace_request),
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    await store.replace_note(name, body.text)
    return PlainTextResponse("Updated successfully")


@router.delete(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note deleted", "content": _TEXT_CONTENT},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(name: str, store: NoteStore = Depends(get_note_store)) -> PlainTextResponse:
    await store.delete_note(name)
    return PlainTextResponse("Deleted")


@router.get(
    "/notes",
    response_model=List[NoteItem],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes",
    description=(
        "Returns every note with its full text, in directory order. If any note "
        "cannot be read the whole request fails."
    ),
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[NoteItem]:
    return await store.list_notes()


@router.post(
    "/write",
    status_code=201,
    response_class=PlainTextResponse,
    responses={
        201: {"description": "Note created", "content": _TEXT_CONTENT},
        400: {"description": "Missing fields or note already exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a new note",
    openapi_extra=CREATE_BODY,
)
async def create_note(
    body: CreateNoteRequest = Depends(parse_create_request),
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    await store.create_note(body.note_name, body.note)
    return PlainTextResponse("Created", status_code=201)
