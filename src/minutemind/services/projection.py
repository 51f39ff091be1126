"""View projection: the ordered, filtered task list the user sees."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from minutemind.models import QuickLink, Task


def matches_query(task: Task, query: str) -> bool:
    """Case-insensitive substring match on the task or any subtask title.

    The query is matched as typed, whitespace included; only the empty
    string matches everything.
    """
    needle = query.lower()
    if not needle:
        return True
    if needle in task.title.lower():
        return True
    return any(needle in subtask.title.lower() for subtask in task.subtasks)


def sort_key(task: Task) -> tuple[int, int]:
    """Pinned tasks first, then ascending manual order."""
    return (0 if task.pinned else 1, task.order)


def project(
    tasks: Iterable[Task],
    query: str = "",
    links: Sequence[QuickLink] | None = None,
) -> list[Task]:
    """Filter and order tasks for display.

    The sort is stable, so tasks sharing a pin state and order value keep
    their storage order. Nothing is mutated.

    Args:
        tasks: Tasks in storage order
        query: Search text; empty matches everything
        links: Accepted for call-site symmetry with the store; unused

    Returns:
        New list of the matching tasks in display order
    """
    return sorted((task for task in tasks if matches_query(task, query)), key=sort_key)
