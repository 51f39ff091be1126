"""Tests for open_session wiring."""

import pytest

from minutemind.adapters import MemoryAdapter
from minutemind.config import get_config_manager
from minutemind.services import open_session
from minutemind.utils.notifications import NullNotifier


@pytest.mark.asyncio
async def test_changes_are_flushed_on_exit():
    adapter = MemoryAdapter()
    async with open_session(adapter=adapter) as session:
        session.store.create_task("persisted")
    assert adapter.data["tasks"][0]["title"] == "persisted"


@pytest.mark.asyncio
async def test_state_is_loaded_on_entry():
    adapter = MemoryAdapter({"darkMode": True})
    async with open_session(adapter=adapter) as session:
        assert session.store.dark_mode is True


@pytest.mark.asyncio
async def test_pomodoro_uses_configuration(scheduler):
    manager = get_config_manager()
    manager.set("pomodoro.duration_seconds", 3)
    manager.set("pomodoro.notifier", "none")
    async with open_session(manager, MemoryAdapter()) as session:
        engine = session.pomodoro(scheduler=scheduler)
        assert isinstance(engine.notifier, NullNotifier)
        task = session.store.create_task("focus")
        engine.start(task.id)
        scheduler.advance(3)
        assert session.store.get_task(task.id).pomodoro_count == 1
