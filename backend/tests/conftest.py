"""
Shared fixtures: a SQLite key-value store in a temp directory, the stores
built on it, and a directory handle for the file system backend.
"""

from datetime import date

import pytest

from roadmap_tracker.infrastructure.local.filesystem_directory import FileSystemDirectoryHandle
from roadmap_tracker.infrastructure.local.key_value_store import KeyValueStore
from roadmap_tracker.infrastructure.local.local_document_store import LocalDocumentStore
from roadmap_tracker.infrastructure.local.settings_store import SettingsStore
from roadmap_tracker.models.document import AllRoadmapsData
from roadmap_tracker.models.enums import TimeScale
from roadmap_tracker.models.roadmap import Roadmap
from roadmap_tracker.models.task import Task
from roadmap_tracker.services.storage_coordinator import StorageCoordinator


def make_task(task_id: str, start: date, end: date, **kwargs) -> Task:
    return Task(id=task_id, name=f"Task {task_id}", start_date=start, end_date=end, **kwargs)


def make_document() -> AllRoadmapsData:
    roadmap = Roadmap(
        id="r1",
        name="Launch",
        time_scale=TimeScale.WEEKLY,
        tasks=[
            make_task("t1", date(2024, 1, 1), date(2024, 1, 5), category="Design"),
            make_task("t2", date(2024, 1, 8), date(2024, 1, 20), notes="<p>Ship it</p>"),
        ],
    )
    return AllRoadmapsData(roadmaps=[roadmap])


@pytest.fixture
def kv_store(tmp_path):
    """Key-value store in a temporary SQLite file."""
    store = KeyValueStore(url=f"sqlite:///{tmp_path / 'local.db'}")
    yield store
    store.dispose()


@pytest.fixture
def local_store(kv_store):
    return LocalDocumentStore(kv_store)


@pytest.fixture
def settings_store(kv_store):
    return SettingsStore(kv_store)


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "plans"
    path.mkdir()
    return path


@pytest.fixture
def directory_handle(data_dir):
    """Handle that is granted access without asking."""
    return FileSystemDirectoryHandle(data_dir)


@pytest.fixture
def coordinator(local_store, settings_store):
    return StorageCoordinator(local_store=local_store, settings_store=settings_store)
