"""FastAPI dependencies for the NoteStore API.

The application owns a single NoteStore (created in create_app) and keeps it
on ``app.state``. Routes receive it through :func:`get_note_store` instead of
importing a module-level instance.
"""

from fastapi import Request

from notestore.services.note_store import NoteStore


def get_note_store(request: Request) -> NoteStore:
    """Return the NoteStore bound to the running application."""
    return request.app.state.note_store
