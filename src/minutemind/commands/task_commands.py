"""Task commands: add, list, show, edit, done/undo, pin/unpin, delete, clear, move."""

from typing import Annotated, Any

import typer

from minutemind.exceptions import ValidationError
from minutemind.models import Task
from minutemind.services import Session, open_session
from minutemind.utils.exit_codes import ERROR_INVALID_ARGS
from minutemind.utils.recurrence import parse_recurrence
from minutemind.utils.task_helpers import resolve_id
from minutemind.utils.ui.console import get_console
from minutemind.utils.ui.formatters import (
    format_info,
    format_success,
    format_task_detail,
    format_task_table,
    short_id,
)
from minutemind.utils.validation import validate_title

from .decorators import AppError, command_wrapper

app = typer.Typer()
console = get_console()


def apply_updates(task: Task, updates: dict[str, Any]) -> Task:
    """Copy of ``task`` with ``updates`` applied and validated."""
    return Task.model_validate(task.model_dump() | updates)


def _collect_updates(
    priority: str | None = None,
    due: str | None = None,
    color: str | None = None,
    recurrence: str | None = None,
    notes: str | None = None,
    target: int | None = None,
) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    if priority is not None:
        updates["priority"] = priority.lower()
    if due is not None:
        updates["due_date"] = due or None
    if color is not None:
        updates["color"] = color.lower() or None
    if recurrence is not None:
        try:
            updates["recurrence"] = parse_recurrence(recurrence)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    if notes is not None:
        updates["notes"] = notes or None
    if target is not None:
        updates["pomodoro_target"] = target or None
    return updates


def _find(session: Session, reference: str) -> Task:
    task_id = resolve_id(reference, session.store.tasks)
    task = session.store.get_task(task_id)
    assert task is not None
    return task


@app.command("add")
@command_wrapper
async def add(
    title: Annotated[str, typer.Argument(help="Task title")],
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="low, medium or high")
    ] = None,
    due: Annotated[
        str | None, typer.Option("--due", "-d", help="Due date (YYYY-MM-DD)")
    ] = None,
    color: Annotated[str | None, typer.Option("--color", "-c", help="Color tag")] = None,
    recurrence: Annotated[
        str | None,
        typer.Option("--recurrence", "-r", help="none, daily, weekly or monthly"),
    ] = None,
    notes: Annotated[str | None, typer.Option("--notes", help="Free-form notes")] = None,
    pin: Annotated[bool, typer.Option("--pin", help="Pin the new task")] = False,
) -> None:
    """Add a new task."""
    title = validate_title(title)
    updates = _collect_updates(priority, due, color, recurrence, notes)
    if pin:
        updates["pinned"] = True
    # Reject bad options before anything is stored
    apply_updates(Task(title=title), updates)

    async with open_session() as session:
        task = session.store.create_task(title)
        if updates:
            session.store.update_task(apply_updates(task, updates))
        format_success(f"Task added: {short_id(task.id)} {task.title}")


@app.command("list")
@command_wrapper
async def list_tasks(
    search: Annotated[
        str, typer.Option("--search", "-s", help="Filter by task or subtask title")
    ] = "",
    open_only: Annotated[
        bool, typer.Option("--open", help="Hide completed tasks")
    ] = False,
    compact: Annotated[bool, typer.Option("--compact", help="Fewer columns")] = False,
) -> None:
    """List tasks in display order (pinned first)."""
    async with open_session() as session:
        tasks = session.store.visible_tasks(search)
        if open_only:
            tasks = [task for task in tasks if not task.completed]
        if not tasks:
            format_info("No tasks found.")
            return
        compact = compact or session.config_manager.config.output.compact
        format_task_table(tasks, compact=compact)


@app.command("show")
@command_wrapper
async def show(task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")]) -> None:
    """Show every detail of a task."""
    async with open_session() as session:
        format_task_detail(_find(session, task_ref))


@app.command("edit")
@command_wrapper
async def edit(
    task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")],
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="low, medium or high")
    ] = None,
    due: Annotated[
        str | None,
        typer.Option("--due", "-d", help="Due date (YYYY-MM-DD), empty to clear"),
    ] = None,
    color: Annotated[
        str | None, typer.Option("--color", "-c", help="Color tag, empty to clear")
    ] = None,
    recurrence: Annotated[
        str | None,
        typer.Option("--recurrence", "-r", help="none, daily, weekly or monthly"),
    ] = None,
    notes: Annotated[
        str | None, typer.Option("--notes", help="Notes, empty to clear")
    ] = None,
    target: Annotated[
        int | None, typer.Option("--target", help="Pomodoro target, 0 to clear")
    ] = None,
) -> None:
    """Change a task's title or metadata."""
    updates = _collect_updates(priority, due, color, recurrence, notes, target)
    if title is not None:
        updates["title"] = validate_title(title)

    async with open_session() as session:
        task = _find(session, task_ref)
        if not updates:
            format_info("Nothing to change.")
            return
        session.store.update_task(apply_updates(task, updates))
        format_success(f"Task {short_id(task.id)} updated")


async def _set_flag(task_ref: str, field: str, value: bool, message: str) -> None:
    async with open_session() as session:
        task = _find(session, task_ref)
        setattr(task, field, value)
        session.store.update_task(task)
        format_success(f"{message}: {task.title}")


@app.command("done")
@command_wrapper
async def done(task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")]) -> None:
    """Mark a task as completed."""
    await _set_flag(task_ref, "completed", True, "Completed")


@app.command("undo")
@command_wrapper
async def undo(task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")]) -> None:
    """Mark a completed task as open again."""
    await _set_flag(task_ref, "completed", False, "Reopened")


@app.command("pin")
@command_wrapper
async def pin(task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")]) -> None:
    """Pin a task to the top of the list."""
    await _set_flag(task_ref, "pinned", True, "Pinned")


@app.command("unpin")
@command_wrapper
async def unpin(task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")]) -> None:
    """Return a pinned task to its manual position."""
    await _set_flag(task_ref, "pinned", False, "Unpinned")


@app.command("delete")
@command_wrapper
async def delete(
    task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")],
) -> None:
    """Delete a task."""
    async with open_session() as session:
        task = _find(session, task_ref)
        session.store.delete_task(task.id)
        format_success(f"Task {short_id(task.id)} deleted")


@app.command("clear")
@command_wrapper
async def clear() -> None:
    """Remove every completed task."""
    async with open_session() as session:
        before = len(session.store.tasks)
        session.store.clear_completed()
        removed = before - len(session.store.tasks)
        if removed:
            format_success(f"Cleared {removed} completed task(s)")
        else:
            format_info("No completed tasks to clear.")


@app.command("move")
@command_wrapper
async def move(
    from_index: Annotated[int, typer.Argument(help="Current position (from 'list')")],
    to_index: Annotated[int, typer.Argument(help="New position")],
    search: Annotated[
        str, typer.Option("--search", "-s", help="Positions refer to this filtered list")
    ] = "",
) -> None:
    """Move a task to another position in the displayed list."""
    async with open_session() as session:
        visible = session.store.visible_tasks(search)
        for index in (from_index, to_index):
            if not 0 <= index < len(visible):
                raise AppError(
                    f"Position {index} is out of range (0-{len(visible) - 1})",
                    exit_code=ERROR_INVALID_ARGS,
                )
        moved = visible[from_index]
        session.store.reorder_tasks(from_index, to_index, search)
        format_success(f"Moved '{moved.title}' to position {to_index}")
