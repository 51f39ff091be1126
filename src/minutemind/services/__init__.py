"""Core services: task store, view projection, pomodoro engine and sync."""

from .pomodoro import PomodoroEngine, PomodoroState
from .projection import project
from .session import Session, open_session
from .sync_service import SyncController
from .task_store import TaskStore

__all__ = [
    "TaskStore",
    "project",
    "PomodoroEngine",
    "PomodoroState",
    "SyncController",
    "Session",
    "open_session",
]
