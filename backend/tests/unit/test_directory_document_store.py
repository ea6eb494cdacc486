"""
Unit tests for the FileSystem backend.
"""

import json

import pytest

from conftest import make_document
from roadmap_tracker.core.exceptions import ParseError, PermissionDeniedError
from roadmap_tracker.infrastructure.local.directory_document_store import (
    DirectoryDocumentStore,
    verify_directory_permission,
)
from roadmap_tracker.infrastructure.local.filesystem_directory import (
    FileSystemDirectoryHandle,
    FileSystemDirectoryPicker,
)
from roadmap_tracker.models.enums import PermissionMode, PermissionState


@pytest.mark.asyncio
async def test_load_missing_file_returns_none(directory_handle):
    assert await DirectoryDocumentStore(directory_handle).load() is None


@pytest.mark.asyncio
async def test_load_empty_file_returns_none(directory_handle, data_dir):
    (data_dir / "roadmap-data.json").write_text("  \n", encoding="utf-8")

    assert await DirectoryDocumentStore(directory_handle).load() is None


@pytest.mark.asyncio
async def test_save_writes_pretty_json(directory_handle, data_dir):
    document = make_document()

    await DirectoryDocumentStore(directory_handle).save(document)

    content = (data_dir / "roadmap-data.json").read_text(encoding="utf-8")
    assert json.loads(content) == document.to_json_dict()
    assert content == json.dumps(document.to_json_dict(), indent=2)


@pytest.mark.asyncio
async def test_invalid_json_raises_parse_error(directory_handle, data_dir):
    (data_dir / "roadmap-data.json").write_text("{oops", encoding="utf-8")

    with pytest.raises(ParseError):
        await DirectoryDocumentStore(directory_handle).load()


@pytest.mark.asyncio
async def test_permission_denied_by_user(data_dir):
    handle = FileSystemDirectoryHandle(data_dir, prompt=lambda h, mode: PermissionState.DENIED)

    with pytest.raises(PermissionDeniedError) as exc_info:
        await DirectoryDocumentStore(handle).load()

    assert exc_info.value.state == PermissionState.DENIED
    assert "not granted" in exc_info.value.message


@pytest.mark.asyncio
async def test_permission_prompt_dismissed(data_dir):
    async def dismiss(handle, mode):
        return PermissionState.CANCELLED

    handle = FileSystemDirectoryHandle(data_dir, prompt=dismiss)

    with pytest.raises(PermissionDeniedError) as exc_info:
        await DirectoryDocumentStore(handle).save(make_document())

    assert exc_info.value.state == PermissionState.CANCELLED
    assert "dismissed" in exc_info.value.message
    assert not (data_dir / "roadmap-data.json").exists()


@pytest.mark.asyncio
async def test_permission_is_asked_once_per_handle(data_dir):
    asked = []

    def prompt(handle, mode):
        asked.append(mode)
        return PermissionState.GRANTED

    handle = FileSystemDirectoryHandle(data_dir, prompt=prompt)

    assert await handle.query_permission(PermissionMode.READWRITE) == PermissionState.PROMPT
    assert await verify_directory_permission(handle) == PermissionState.GRANTED
    assert await verify_directory_permission(handle) == PermissionState.GRANTED
    assert await handle.query_permission(PermissionMode.READ) == PermissionState.GRANTED
    assert asked == [PermissionMode.READWRITE]


@pytest.mark.asyncio
async def test_missing_directory_is_denied(tmp_path):
    handle = FileSystemDirectoryHandle(tmp_path / "gone")

    assert await verify_directory_permission(handle) == PermissionState.DENIED


@pytest.mark.asyncio
async def test_picker_cancel_and_choice(data_dir, tmp_path):
    assert await FileSystemDirectoryPicker(lambda: None).pick() is None
    assert await FileSystemDirectoryPicker(lambda: str(tmp_path / "missing")).pick() is None

    handle = await FileSystemDirectoryPicker(lambda: str(data_dir)).pick()

    assert handle.name == "plans"


@pytest.mark.asyncio
async def test_invalid_utf8_raises_parse_error(directory_handle, data_dir):
    (data_dir / "roadmap-data.json").write_bytes(b'{"roadmaps": [], "x": "\xff\xfe"}')

    with pytest.raises(ParseError):
        await DirectoryDocumentStore(directory_handle).load()
