"""Task store - authoritative in-memory state.

The store owns the task list, the quick links and the dark-mode flag. Every
mutating operation bumps ``updated_at`` on the tasks it touches and then
notifies subscribers; the sync controller is the main subscriber and turns
each notification into a save.

Unknown ids are never an error here: update, delete and subtask operations
on a missing id silently do nothing. Title validation belongs to the command
layer and is not repeated in the store.
"""

from __future__ import annotations

from collections.abc import Callable

from minutemind.models import (
    AppSnapshot,
    QuickLink,
    Subtask,
    Task,
    compute_progress,
    utc_now,
)
from minutemind.utils.logger import get_logger

from .projection import project

logger = get_logger("store")

ChangeListener = Callable[["TaskStore"], None]


class TaskStore:
    """In-memory collection of tasks and quick links."""

    def __init__(self, snapshot: AppSnapshot | None = None):
        self._tasks: list[Task] = []
        self._links: list[QuickLink] = []
        self._dark_mode = False
        self._listeners: list[ChangeListener] = []
        if snapshot is not None:
            self._load(snapshot)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> list[Task]:
        """Tasks in storage order (a new list of the stored models)."""
        return list(self._tasks)

    @property
    def links(self) -> list[QuickLink]:
        return list(self._links)

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    def get_task(self, task_id: str) -> Task | None:
        """Return a detached copy of a task, suitable for edit-then-update."""
        index = self._index_of(task_id)
        if index is None:
            return None
        return self._tasks[index].model_copy(deep=True)

    def visible_tasks(self, query: str = "") -> list[Task]:
        """Projected display sequence for the current state."""
        return project(self._tasks, query)

    def snapshot(self) -> AppSnapshot:
        """Deep copy of everything that gets persisted."""
        return AppSnapshot(
            tasks=[task.model_copy(deep=True) for task in self._tasks],
            links=[link.model_copy() for link in self._links],
            dark_mode=self._dark_mode,
        )

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def hydrate(self, snapshot: AppSnapshot) -> None:
        """Replace all state with a loaded snapshot without notifying."""
        self._load(snapshot)

    # ------------------------------------------------------------------
    # Task commands
    # ------------------------------------------------------------------

    def create_task(self, title: str) -> Task:
        """Append a new task at the end of the manual order."""
        now = utc_now()
        task = Task(
            title=title,
            order=len(self._tasks),
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        logger.debug("created task %s", task.id)
        self._changed()
        return task

    def update_task(self, task: Task) -> None:
        """Replace the stored task with the same id.

        Progress is recomputed from the incoming subtasks, so a caller can
        never set it directly.
        """
        index = self._index_of(task.id)
        if index is None:
            logger.debug("update ignored, unknown task %s", task.id)
            return
        replacement = task.model_copy(deep=True)
        replacement.progress = compute_progress(replacement.subtasks)
        replacement.touch()
        self._tasks[index] = replacement
        self._changed()

    def delete_task(self, task_id: str) -> None:
        index = self._index_of(task_id)
        if index is None:
            return
        del self._tasks[index]
        logger.debug("deleted task %s", task_id)
        self._changed()

    def clear_completed(self) -> None:
        """Remove every completed task."""
        remaining = [task for task in self._tasks if not task.completed]
        if len(remaining) == len(self._tasks):
            return
        logger.debug("cleared %d completed tasks", len(self._tasks) - len(remaining))
        self._tasks = remaining
        self._changed()

    def reorder_tasks(self, from_index: int, to_index: int, query: str = "") -> None:
        """Move a task within the displayed list and renumber every task.

        Indices address the projected sequence for ``query``, which may be
        filtered and always lists pinned tasks first. The dragged and target
        tasks are located in the unfiltered display order, the dragged task
        is moved to the target's slot, and every task gets ``order`` equal
        to its new 0-based position.
        """
        view = project(self._tasks, query)
        if not (0 <= from_index < len(view) and 0 <= to_index < len(view)):
            logger.debug("reorder ignored, index out of range (%d -> %d)", from_index, to_index)
            return
        if from_index == to_index:
            return

        moved_id = view[from_index].id
        target_id = view[to_index].id
        ordered = project(self._tasks)
        ids = [task.id for task in ordered]
        source = ids.index(moved_id)
        destination = ids.index(target_id)

        moved = ordered.pop(source)
        ordered.insert(destination, moved)

        for position, task in enumerate(ordered):
            if task.order != position:
                task.order = position
                task.touch()
        self._tasks = ordered
        self._changed()

    def increment_pomodoro(self, task_id: str) -> None:
        """Credit one finished focus session to a task."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("pomodoro credit dropped, unknown task %s", task_id)
            return
        task = self._tasks[index]
        task.pomodoro_count += 1
        task.touch()
        self._changed()

    # ------------------------------------------------------------------
    # Subtask commands
    # ------------------------------------------------------------------

    def add_subtask(self, task_id: str) -> Subtask | None:
        """Append an empty pending subtask and return it."""
        index = self._index_of(task_id)
        if index is None:
            return None
        task = self._tasks[index]
        subtask = Subtask()
        task.subtasks.append(subtask)
        task.progress = compute_progress(task.subtasks)
        task.touch()
        self._changed()
        return subtask.model_copy()

    def update_subtask(self, task_id: str, subtask: Subtask) -> None:
        """Replace a subtask by id and recompute the owner's progress."""
        index = self._index_of(task_id)
        if index is None:
            return
        task = self._tasks[index]
        for position, existing in enumerate(task.subtasks):
            if existing.id == subtask.id:
                replacement = subtask.model_copy()
                replacement.updated_at = max(utc_now(), replacement.created_at)
                task.subtasks[position] = replacement
                break
        else:
            logger.debug("subtask update ignored, unknown subtask %s", subtask.id)
            return
        task.progress = compute_progress(task.subtasks)
        task.touch()
        self._changed()

    # ------------------------------------------------------------------
    # Quick links and settings
    # ------------------------------------------------------------------

    def add_link(self, title: str, url: str, icon: str | None = None) -> QuickLink:
        link = QuickLink(title=title, url=url, icon=icon)
        self._links.append(link)
        self._changed()
        return link

    def remove_link(self, link_id: str) -> None:
        remaining = [link for link in self._links if link.id != link_id]
        if len(remaining) == len(self._links):
            return
        self._links = remaining
        self._changed()

    def set_dark_mode(self, enabled: bool) -> None:
        if self._dark_mode == enabled:
            return
        self._dark_mode = enabled
        self._changed()

    def toggle_dark_mode(self) -> bool:
        self.set_dark_mode(not self._dark_mode)
        return self._dark_mode

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self, snapshot: AppSnapshot) -> None:
        tasks: list[Task] = []
        seen: set[str] = set()
        for task in snapshot.tasks:
            if task.id in seen:
                logger.warning("dropping duplicate task id %s from snapshot", task.id)
                continue
            seen.add(task.id)
            tasks.append(task.model_copy(deep=True))
        self._tasks = tasks
        self._links = [link.model_copy() for link in snapshot.links]
        self._dark_mode = snapshot.dark_mode

    def _index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)
