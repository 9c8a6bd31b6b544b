"""
NoteStore — File-Backed Note Persistence
=========================================

What:  Reads, lists, creates, replaces, and deletes notes stored as plain files.
Why:   Centralizes every filesystem call so routes only deal with HTTP.
How:   One file per note directly under the store root, filename = note name,
       content = note text (UTF-8, no envelope). All I/O goes through aiofiles.
Who:   Created once per application by create_app() and injected into routes
       through notestore.deps.get_note_store.
When:  On every /notes and /write request.

Directory Structure:
    cache/
    ├── shopping.txt      ← note "shopping.txt"
    ├── todo              ← note "todo"
    └── a.txt             ← note "a.txt"

Concurrency:
    Each request runs as its own task on the event loop. aiofiles offloads the
    blocking calls to a thread pool, so one request waiting on disk does not
    stall another. No locks are taken. A list may observe notes created,
    replaced, or deleted while it runs.

    Create uses the create-exclusive open mode ("x"): the OS creates the file
    only if nothing exists under that name. Two concurrent creates for the same
    new name therefore produce exactly one success; the other sees
    NoteAlreadyExistsError and the winner's text is kept.

Error Mapping:
    read_note    any read failure            → NoteNotFoundError (404)
    list_notes   listing or any read failure → FileStorageError  (500)
    create_note  name taken                  → NoteAlreadyExistsError (400)
                 other OS error              → FileStorageError  (500)
    replace_note any OS error                → FileStorageError  (500)
    delete_note  any failure                 → NoteNotFoundError (404)
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Union

import aiofiles
import aiofiles.os

from notestore.exceptions import (
    FileStorageError,
    InvalidNoteNameError,
    NoteAlreadyExistsError,
    NoteNotFoundError,
)
from notestore.schemas.note import NoteItem

logger = logging.getLogger(__name__)

# Note content is stored and returned byte-for-byte: newline="" disables
# universal newline translation in both directions.
NOTE_ENCODING = "utf-8"
NOTE_NEWLINE = ""

_RESERVED_NAMES = {".", ".."}
_FORBIDDEN_CHARS = ("/", "\\", "\x00")


class NoteStore:
    """
    Directory of notes, one file per note.

    The store holds no per-request state; it can be shared by every request
    handled by the process.
    """

    def __init__(self, root: Union[str, Path]):
        """
        Args:
            root: Store root directory. It is not created here; call
                  ensure_root() during startup.
        """
        self.root = Path(root).resolve()

    # ── Startup ───────────────────────────────────────────────────────────

    def ensure_root(self) -> None:
        """
        Create the store root (and missing parents) if it does not exist.

        Raises:
            FileStorageError: The directory could not be created, or the path
                              exists but is not a directory.
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot prepare store directory %s: %s", self.root, e)
            raise FileStorageError(
                message="Store directory could not be created",
                context={"path": str(self.root), "os_error": str(e)},
            ) from e
        logger.info("Store directory: %s", self.root)

    async def is_available(self) -> bool:
        """True when the store root is an existing, writable directory."""
        if not await aiofiles.os.path.isdir(self.root):
            return False
        return os.access(self.root, os.W_OK | os.X_OK)

    # ── Name Resolution ───────────────────────────────────────────────────

    def path_for(self, name: str) -> Path:
        """
        Map a note name to its file path inside the store root.

        A name must be a single path component. Separators, "." and "..", and
        NUL bytes are rejected so a name can never address a file outside the
        store root.

        Raises:
            InvalidNoteNameError: The name cannot be used as a file name.
        """
        if not name or name in _RESERVED_NAMES or any(c in name for c in _FORBIDDEN_CHARS):
            raise InvalidNoteNameError(name)
        return self.root / name

    # ── Operations ────────────────────────────────────────────────────────

    async def read_note(self, name: str) -> str:
        """
        Return the full text of a note.

        Raises:
            NoteNotFoundError: The file is missing or could not be read for any
                               reason (the cause is logged, not returned).
        """
        path = self.path_for(name)
        try:
            async with aiofiles.open(path, "r", encoding=NOTE_ENCODING, newline=NOTE_NEWLINE) as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Read of note %r failed: %s", name, e)
            raise NoteNotFoundError(name, context={"error": str(e)}) from e

    async def _read_entry(self, name: str) -> NoteItem:
        async with aiofiles.open(
            self.root / name, "r", encoding=NOTE_ENCODING, newline=NOTE_NEWLINE
        ) as f:
            return NoteItem(name=name, text=await f.read())

    async def list_notes(self) -> List[NoteItem]:
        """
        Return every note in the store, in directory-listing order.

        Entries are read concurrently. The listing is all-or-nothing: if any
        single entry cannot be read, the whole call fails.

        Raises:
            FileStorageError: The directory could not be listed or an entry
                              could not be read.
        """
        try:
            names = await aiofiles.os.listdir(self.root)
            return list(await asyncio.gather(*(self._read_entry(n) for n in names)))
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Listing notes in %s failed: %s", self.root, e)
            raise FileStorageError(
                context={"path": str(self.root), "error": str(e)},
            ) from e

    async def create_note(self, name: str, text: str) -> None:
        """
        Create a new note. Never overwrites an existing one.

        Raises:
            NoteAlreadyExistsError: A file with this name already exists.
            FileStorageError:       Any other write failure.
        """
        path = self.path_for(name)
        try:
            async with aiofiles.open(path, "x", encoding=NOTE_ENCODING, newline=NOTE_NEWLINE) as f:
                await f.write(text)
        except FileExistsError as e:
            logger.info("Create rejected, note %r already exists", name)
            raise NoteAlreadyExistsError(name) from e
        except OSError as e:
            logger.error("Failed to create note %r: %s", name, e)
            raise FileStorageError(
                context={"path": str(path), "os_error": str(e)},
            ) from e
        logger.info("Note created: %s (%d chars)", name, len(text))

    async def replace_note(self, name: str, text: str) -> None:
        """
        Overwrite a note's content, creating the note if it does not exist.

        Raises:
            FileStorageError: The file could not be written.
        """
        path = self.path_for(name)
        try:
            async with aiofiles.open(path, "w", encoding=NOTE_ENCODING, newline=NOTE_NEWLINE) as f:
                await f.write(text)
        except OSError as e:
            logger.error("Failed to update note %r: %s", name, e)
            raise FileStorageError(
                message="Error updating note",
                context={"path": str(path), "os_error": str(e)},
            ) from e
        logger.info("Note updated: %s (%d chars)", name, len(text))

    async def delete_note(self, name: str) -> None:
        """
        Remove a note.

        Raises:
            NoteNotFoundError: The file could not be removed for any reason.
        """
        path = self.path_for(name)
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            logger.debug("Delete of note %r failed: %s", name, e)
            raise NoteNotFoundError(name, context={"error": str(e)}) from e
        logger.info("Note deleted: %s", name)
