"""Pomodoro engine - one focus countdown at a time.

The engine is a small state machine:

* ``idle``: no session.
* ``running``: a session bound to ``task_id`` with ``remaining_seconds`` left.

A session ends either by ``stop()`` (no credit) or by natural expiry, which
credits one pomodoro to the task, fires a best-effort notification and
returns to ``idle``. Starting a session while another is running cancels the
old one without credit.

Time comes from an injected scheduler, so the countdown can be driven by a
virtual clock in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from minutemind.utils.logger import get_logger
from minutemind.utils.notifications import Notifier, NullNotifier
from minutemind.utils.scheduler import Scheduler, TimerHandle

from .task_store import TaskStore

logger = get_logger("pomodoro")

DEFAULT_DURATION_SECONDS = 25 * 60
TICK_SECONDS = 1.0
COMPLETE_TITLE = "Pomodoro Complete!"
COMPLETE_BODY = "Time for a break!"

PomodoroStatus = Literal["idle", "running"]


@dataclass(frozen=True)
class PomodoroState:
    """Read-only view of the engine for presentation."""

    status: PomodoroStatus
    task_id: str | None
    remaining_seconds: int

    @property
    def is_running(self) -> bool:
        return self.status == "running"

    def display(self) -> str:
        """Remaining time as M:SS."""
        minutes, seconds = divmod(self.remaining_seconds, 60)
        return f"{minutes}:{seconds:02d}"


StateListener = Callable[[PomodoroState], None]


class PomodoroEngine:
    """Countdown state machine bound to a task store."""

    def __init__(
        self,
        store: TaskStore,
        scheduler: Scheduler,
        notifier: Notifier | None = None,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        notify_failure_threshold: int = 3,
    ):
        self.store = store
        self.scheduler = scheduler
        self.notifier = notifier or NullNotifier()
        self.duration_seconds = duration_seconds
        self.notify_failure_threshold = notify_failure_threshold
        self.notification_failures = 0

        self._task_id: str | None = None
        self._remaining = duration_seconds
        self._handle: TimerHandle | None = None
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> PomodoroState:
        if self._task_id is None:
            return PomodoroState("idle", None, self._remaining)
        return PomodoroState("running", self._task_id, self._remaining)

    def subscribe(self, listener: StateListener) -> None:
        """Call ``listener`` after every tick and transition."""
        self._listeners.append(listener)

    def start(self, task_id: str) -> None:
        """Begin a session, replacing any running one without credit."""
        if self._task_id is not None:
            logger.info("cancelling session for %s in favour of %s", self._task_id, task_id)
            self._cancel()
        self._task_id = task_id
        self._remaining = self.duration_seconds
        self._schedule()
        logger.info("pomodoro started for %s", task_id)
        self._emit()

    def stop(self) -> None:
        """Abandon the running session. Never credits the task."""
        if self._task_id is None:
            return
        logger.info("pomodoro stopped for %s with %ds left", self._task_id, self._remaining)
        self._cancel()
        self._task_id = None
        self._remaining = self.duration_seconds
        self._emit()

    def reset(self, task_id: str) -> None:
        """Restart the countdown for ``task_id`` from the full duration."""
        self.stop()
        self.start(task_id)

    def _schedule(self) -> None:
        self._handle = self.scheduler.call_later(TICK_SECONDS, self._tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        """Count down one second; the tick that reaches 0:00 ends the session."""
        self._handle = None
        if self._task_id is None:
            return
        self._remaining -= 1
        if self._remaining <= 0:
            self._expire()
            return
        self._schedule()
        self._emit()

    def _expire(self) -> None:
        task_id = self._task_id
        assert task_id is not None
        self._task_id = None
        self._remaining = self.duration_seconds
        self.store.increment_pomodoro(task_id)
        logger.info("pomodoro completed for %s", task_id)
        self._notify()
        self._emit()

    def _notify(self) -> None:
        try:
            self.notifier.notify(COMPLETE_TITLE, COMPLETE_BODY)
        except Exception as e:  # noqa: BLE001 - delivery is best effort
            self.notification_failures += 1
            logger.debug("notification failed: %s", e)
            if self.notification_failures == self.notify_failure_threshold:
                logger.warning(
                    "pomodoro notifications failed %d times in a row",
                    self.notification_failures,
                )
        else:
            self.notification_failures = 0

    def _emit(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            listener(state)
