"""
NoteStore — Store Unit Tests
=============================

What:  Tests for NoteStore file persistence and its error mapping.
How:   Every test gets its own store root under tmp_path; no HTTP involved.

Test Strategy:
    ✅ Create/read round trip, byte-for-byte content
    ✅ Create never overwrites an existing note
    ✅ Replace creates missing notes
    ✅ Delete and read map every failure to NoteNotFoundError
    ✅ List is all-or-nothing
    ✅ Note names must be a single path component
"""

import asyncio
import logging

import pytest

from notestore.exceptions import (
    FileStorageError,
    InvalidNoteNameError,
    NoteAlreadyExistsError,
    NoteNotFoundError,
)
from notestore.services.note_store import NoteStore


class TestReadAndCreate:
    """Tests for read_note and create_note."""

    @pytest.mark.asyncio
    async def test_create_then_read_round_trip(self, note_store):
        await note_store.create_note("a.txt", "hello")
        assert await note_store.read_note("a.txt") == "hello"

    @pytest.mark.asyncio
    async def test_create_writes_file_named_after_note(self, note_store, store_dir):
        """The persisted layout is the bare text in a file named after the note."""
        await note_store.create_note("shopping", "milk\neggs")
        assert (store_dir / "shopping").read_text(encoding="utf-8") == "milk\neggs"

    @pytest.mark.asyncio
    async def test_content_is_stored_verbatim(self, note_store, store_dir):
        """Line endings and non-ASCII text survive untouched."""
        text = "line one\r\nline two\nпривіт ✓"
        await note_store.create_note("mixed", text)

        assert (store_dir / "mixed").read_bytes() == text.encode("utf-8")
        assert await note_store.read_note("mixed") == text

    @pytest.mark.asyncio
    async def test_create_existing_note_rejected(self, note_store, store_dir):
        """Creating over an existing note fails and keeps the original content."""
        await note_store.create_note("a.txt", "original")

        with pytest.raises(NoteAlreadyExistsError):
            await note_store.create_note("a.txt", "intruder")

        assert (store_dir / "a.txt").read_text(encoding="utf-8") == "original"

    @pytest.mark.asyncio
    async def test_create_over_directory_rejected(self, note_store, store_dir):
        (store_dir / "folder").mkdir()
        with pytest.raises(NoteAlreadyExistsError):
            await note_store.create_note("folder", "text")

    @pytest.mark.asyncio
    async def test_concurrent_creates_have_one_winner(self, note_store, store_dir):
        """Exclusive create: one call succeeds, the other sees the note exists."""
        results = await asyncio.gather(
            note_store.create_note("race", "first"),
            note_store.create_note("race", "second"),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], NoteAlreadyExistsError)
        assert (store_dir / "race").read_text(encoding="utf-8") in {"first", "second"}

    @pytest.mark.asyncio
    async def test_create_in_missing_root_is_storage_error(self, tmp_path):
        store = NoteStore(tmp_path / "does-not-exist")
        with pytest.raises(FileStorageError):
            await store.create_note("a.txt", "hello")

    @pytest.mark.asyncio
    async def test_read_missing_note(self, note_store):
        with pytest.raises(NoteNotFoundError) as exc_info:
            await note_store.read_note("nope")
        assert exc_info.value.message == "Not found"

    @pytest.mark.asyncio
    async def test_read_directory_is_not_found(self, note_store, store_dir):
        """Any read failure is reported as not found, whatever the cause."""
        (store_dir / "folder").mkdir()
        with pytest.raises(NoteNotFoundError):
            await note_store.read_note("folder")

    @pytest.mark.asyncio
    async def test_read_undecodable_file_is_not_found(self, note_store, store_dir):
        (store_dir / "binary").write_bytes(b"\xff\xfe\x00\x80")
        with pytest.raises(NoteNotFoundError):
            await note_store.read_note("binary")

    @pytest.mark.asyncio
    async def test_create_logs_note_name(self, note_store, caplog):
        caplog.set_level(logging.INFO, logger="notestore.services.note_store")
        await note_store.create_note("logged", "text")
        assert "Note created: logged" in caplog.text


class TestReplace:
    """Tests for replace_note."""

    @pytest.mark.asyncio
    async def test_replace_overwrites_content(self, note_store):
        await note_store.create_note("a.txt", "hello")
        await note_store.replace_note("a.txt", "world")
        assert await note_store.read_note("a.txt") == "world"

    @pytest.mark.asyncio
    async def test_replace_with_shorter_text_truncates(self, note_store):
        await note_store.create_note("a.txt", "a much longer text")
        await note_store.replace_note("a.txt", "short")
        assert await note_store.read_note("a.txt") == "short"

    @pytest.mark.asyncio
    async def test_replace_creates_missing_note(self, note_store):
        await note_store.replace_note("new", "created by replace")
        assert await note_store.read_note("new") == "created by replace"

    @pytest.mark.asyncio
    async def test_replace_directory_is_storage_error(self, note_store, store_dir):
        (store_dir / "folder").mkdir()
        with pytest.raises(FileStorageError) as exc_info:
            await note_store.replace_note("folder", "text")
        assert exc_info.value.message == "Error updating note"


class TestDelete:
    """Tests for delete_note."""

    @pytest.mark.asyncio
    async def test_delete_removes_note(self, note_store, store_dir):
        await note_store.create_note("a.txt", "hello")
        await note_store.delete_note("a.txt")

        assert not (store_dir / "a.txt").exists()
        with pytest.raises(NoteNotFoundError):
            await note_store.read_note("a.txt")

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, note_store):
        with pytest.raises(NoteNotFoundError):
            await note_store.delete_note("nope")

    @pytest.mark.asyncio
    async def test_delete_directory_is_not_found(self, note_store, store_dir):
        (store_dir / "folder").mkdir()
        with pytest.raises(NoteNotFoundError):
            await note_store.delete_note("folder")
        assert (store_dir / "folder").is_dir()


class TestList:
    """Tests for list_notes."""

    @pytest.mark.asyncio
    async def test_list_empty_store(self, note_store):
        assert await note_store.list_notes() == []

    @pytest.mark.asyncio
    async def test_list_returns_one_entry_per_file(self, note_store, store_dir):
        (store_dir / "one").write_text("first", encoding="utf-8")
        (store_dir / "two").write_text("second", encoding="utf-8")
        await note_store.create_note("three", "third")

        notes = await note_store.list_notes()

        assert {(n.name, n.text) for n in notes} == {
            ("one", "first"),
            ("two", "second"),
            ("three", "third"),
        }

    @pytest.mark.asyncio
    async def test_list_fails_entirely_on_unreadable_entry(self, note_store, store_dir):
        """A single bad entry fails the whole listing; no partial results."""
        (store_dir / "good").write_text("fine", encoding="utf-8")
        (store_dir / "subdir").mkdir()

        with pytest.raises(FileStorageError):
            await note_store.list_notes()

    @pytest.mark.asyncio
    async def test_list_missing_root_is_storage_error(self, tmp_path):
        store = NoteStore(tmp_path / "gone")
        with pytest.raises(FileStorageError):
            await store.list_notes()


class TestNames:
    """Tests for note name resolution."""

    def test_plain_name_maps_into_root(self, note_store, store_dir):
        assert note_store.path_for("a.txt") == store_dir.resolve() / "a.txt"

    def test_dotted_names_allowed(self, note_store, store_dir):
        assert note_store.path_for("..hidden").parent == store_dir.resolve()
        assert note_store.path_for(".env").name == ".env"

    @pytest.mark.parametrize("name", ["", ".", "..", "../escape", "a/b", "a\\b", "nul\x00byte"])
    def test_unusable_names_rejected(self, note_store, name):
        with pytest.raises(InvalidNoteNameError):
            note_store.path_for(name)

    @pytest.mark.asyncio
    async def test_traversal_never_touches_outside_files(self, note_store, store_dir):
        outside = store_dir.parent / "outside.txt"
        outside.write_text("keep me", encoding="utf-8")

        with pytest.raises(InvalidNoteNameError):
            await note_store.replace_note("../outside.txt", "overwritten")
        with pytest.raises(InvalidNoteNameError):
            await note_store.delete_note("../outside.txt")

        assert outside.read_text(encoding="utf-8") == "keep me"


class TestRootLifecycle:
    """Tests for ensure_root and is_available."""

    def test_ensure_root_creates_nested_directories(self, tmp_path):
        store = NoteStore(tmp_path / "a" / "b" / "cache")
        store.ensure_root()
        assert (tmp_path / "a" / "b" / "cache").is_dir()

    def test_ensure_root_is_idempotent(self, note_store, store_dir):
        note_store.ensure_root()
        note_store.ensure_root()
        assert store_dir.is_dir()

    def test_ensure_root_over_file_fails(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(FileStorageError):
            NoteStore(blocker).ensure_root()

    @pytest.mark.asyncio
    async def test_is_available(self, note_store, tmp_path):
        assert await note_store.is_available() is True
        assert await NoteStore(tmp_path / "missing").is_available() is False
