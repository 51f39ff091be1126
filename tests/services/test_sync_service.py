"""Unit tests for SyncController."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from minutemind.adapters import JsonFileAdapter, MemoryAdapter, SqliteKeyValueAdapter
from minutemind.exceptions import StorageError
from minutemind.services import SyncController, TaskStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class RecordingAdapter(MemoryAdapter):
    """Memory adapter that keeps every batch written and yields while saving."""

    def __init__(self, initial: dict[str, Any] | None = None):
        super().__init__(initial)
        self.writes: list[dict[str, Any]] = []

    async def set(self, data: dict[str, Any]) -> None:
        await asyncio.sleep(0)
        self.writes.append(data)
        await super().set(data)


def _populate(store: TaskStore) -> None:
    task = store.create_task("Write report")
    subtask = store.add_subtask(task.id)
    subtask.title = "outline"
    subtask.status = "completed"
    store.update_subtask(task.id, subtask)
    store.create_task("Call bank")
    store.add_link("Docs", "https://example.com")
    store.set_dark_mode(True)


async def _round_trip(adapter) -> tuple[TaskStore, TaskStore]:
    original = TaskStore()
    sync = SyncController(original, adapter)
    await sync.load()
    _populate(original)
    await sync.flush()
    sync.close()

    restored = TaskStore()
    await SyncController(restored, adapter).load()
    return original, restored


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_load_empty_storage_keeps_defaults():
    store = TaskStore()
    assert await SyncController(store, MemoryAdapter()).load() is True
    assert store.tasks == []
    assert store.links == []
    assert store.dark_mode is False


@pytest.mark.asyncio
async def test_load_reads_all_keys_in_one_batch():
    adapter = MemoryAdapter()
    adapter.get = AsyncMock(return_value={})
    await SyncController(TaskStore(), adapter).load()
    adapter.get.assert_awaited_once_with({"tasks", "links", "darkMode"})


@pytest.mark.asyncio
async def test_load_partial_snapshot():
    store = TaskStore()
    await SyncController(store, MemoryAdapter({"darkMode": True})).load()
    assert store.dark_mode is True
    assert store.tasks == []


@pytest.mark.asyncio
async def test_load_legacy_task_shape():
    legacy = {
        "id": "t1",
        "title": "Old task",
        "completed": False,
        "pinned": False,
        "order": 0,
        "createdAt": "2024-01-01T00:00:00+00:00",
        "updatedAt": "2024-01-01T00:00:00+00:00",
        "priority": "low",
        "recurrence": None,
        "subtasks": [],
    }
    store = TaskStore()
    await SyncController(store, MemoryAdapter({"tasks": [legacy]})).load()
    task = store.get_task("t1")
    assert task.recurrence == "none"
    assert task.pomodoro_count == 0


@pytest.mark.asyncio
async def test_failed_load_keeps_defaults():
    adapter = MemoryAdapter()
    adapter.get = AsyncMock(side_effect=StorageError("disk gone"))
    store = TaskStore()
    assert await SyncController(store, adapter).load() is False
    assert store.tasks == []


@pytest.mark.asyncio
async def test_malformed_snapshot_keeps_defaults():
    store = TaskStore()
    adapter = MemoryAdapter({"tasks": [{"title": "x", "priority": "urgent"}]})
    assert await SyncController(store, adapter).load() is False
    assert store.tasks == []


# ---------------------------------------------------------------------------
# save on change
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_change_writes_whole_snapshot():
    adapter = RecordingAdapter()
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()
    store.create_task("a")
    await sync.flush()
    assert set(adapter.writes[-1]) == {"tasks", "links", "darkMode"}
    assert adapter.writes[-1]["tasks"][0]["title"] == "a"


@pytest.mark.asyncio
async def test_burst_of_changes_is_coalesced_and_last_write_is_latest():
    adapter = RecordingAdapter()
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()
    for title in ("a", "b", "c", "d"):
        store.create_task(title)
    await sync.flush()
    assert 1 <= len(adapter.writes) < 4
    assert adapter.writes[-1] == store.snapshot().to_storage()


@pytest.mark.asyncio
async def test_change_during_write_is_saved_afterwards():
    adapter = RecordingAdapter()
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()
    store.create_task("first")
    await asyncio.sleep(0)  # writer is now inside adapter.set
    store.create_task("second")
    await sync.flush()
    assert [t["title"] for t in adapter.writes[-1]["tasks"]] == ["first", "second"]


@pytest.mark.asyncio
async def test_store_commands_do_not_wait_for_saves():
    adapter = RecordingAdapter()
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()
    store.create_task("a")
    assert adapter.writes == []
    assert sync.busy
    await sync.flush()
    assert not sync.busy


@pytest.mark.asyncio
async def test_failed_save_is_swallowed():
    adapter = MemoryAdapter()
    adapter.set = AsyncMock(side_effect=StorageError("read-only"))
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()
    store.create_task("a")
    await sync.flush()
    assert sync.failed_saves == 1
    assert [t.title for t in store.tasks] == ["a"]


@pytest.mark.asyncio
async def test_close_stops_saving():
    adapter = RecordingAdapter()
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()
    sync.close()
    store.create_task("a")
    await sync.flush()
    assert adapter.writes == []


@pytest.mark.asyncio
async def test_explicit_save():
    adapter = RecordingAdapter()
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.save()
    assert sync.saves == 1
    assert adapter.data["tasks"] == []


class SlowFirstWriteAdapter(RecordingAdapter):
    """Holds the first write open until ``release`` is set."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()
        self.calls = 0

    async def set(self, data: dict[str, Any]) -> None:
        self.calls += 1
        if self.calls == 1:
            await self.release.wait()
        await super().set(data)


@pytest.mark.asyncio
async def test_explicit_save_during_slow_write_ends_with_latest_state():
    adapter = SlowFirstWriteAdapter()
    store = TaskStore()
    sync = SyncController(store, adapter)
    await sync.load()

    store.create_task("first")
    await asyncio.sleep(0)  # background write of ["first"] is now stuck
    store.create_task("second")
    pending_save = asyncio.create_task(sync.save())
    await asyncio.sleep(0)
    adapter.release.set()
    await pending_save
    await sync.flush()

    stored = [task["title"] for task in adapter.data["tasks"]]
    assert stored == ["first", "second"]
    assert adapter.writes[-1] == store.snapshot().to_storage()


# ---------------------------------------------------------------------------
# Round trip through every backend
# ---------------------------------------------------------------------------


@pytest.fixture(params=["memory", "json", "sqlite"])
def adapter(request, tmp_path):
    if request.param == "json":
        return JsonFileAdapter(tmp_path / "store.json")
    if request.param == "sqlite":
        return SqliteKeyValueAdapter(tmp_path / "store.db")
    return MemoryAdapter()


@pytest.mark.asyncio
async def test_save_then_load_round_trip(adapter):
    original, restored = await _round_trip(adapter)
    assert restored.snapshot().to_storage() == original.snapshot().to_storage()
    assert restored.tasks[0].progress == 100
    assert restored.dark_mode is True
