"""Shared test fixtures.

Keeps config, data and log files inside ``tmp_path`` and provides a
virtual-time scheduler for the pomodoro engine.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import patch

import pytest

from minutemind.config import reset_config_manager

# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config and data directories at tmp_path for every test."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setenv("MINUTEMIND_DATA_DIR", str(data_dir))
    reset_config_manager()
    with patch("minutemind.config.user_config_dir", return_value=str(config_dir)):
        yield tmp_path
    reset_config_manager()


# ---------------------------------------------------------------------------
# Virtual time
# ---------------------------------------------------------------------------


class FakeHandle:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Scheduler whose clock only moves when ``advance`` is called."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def advance(self, seconds: float) -> None:
        """Run every callback that falls due within ``seconds``."""
        target = self.now + seconds
        while True:
            due = [h for h in self.pending if h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            self.handles.remove(handle)
            self.now = handle.due
            handle.callback()
        self.now = target


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()
