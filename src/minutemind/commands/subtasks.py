"""Subtask commands."""

from typing import Annotated

import typer

from minutemind.exceptions import ValidationError
from minutemind.models import SUBTASK_STATUSES
from minutemind.services import open_session
from minutemind.utils.task_helpers import resolve_id
from minutemind.utils.ui.formatters import format_info, format_success, short_id
from minutemind.utils.validation import validate_title

from .decorators import command_wrapper

app = typer.Typer(help="Subtask (checklist) commands")


@app.command("add")
@command_wrapper
async def add_subtask(
    task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")],
    title: Annotated[str, typer.Argument(help="Subtask title")],
) -> None:
    """Append a subtask to a task."""
    title = validate_title(title, "Subtask title")
    async with open_session() as session:
        task_id = resolve_id(task_ref, session.store.tasks)
        subtask = session.store.add_subtask(task_id)
        assert subtask is not None
        subtask.title = title
        session.store.update_subtask(task_id, subtask)
        task = session.store.get_task(task_id)
        format_success(
            f"Subtask {short_id(subtask.id)} added ({task.progress}% complete)"
        )


@app.command("set")
@command_wrapper
async def set_subtask(
    task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")],
    subtask_ref: Annotated[str, typer.Argument(help="Subtask ID or prefix")],
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    status: Annotated[
        str | None,
        typer.Option("--status", "-s", help="pending, in-progress or completed"),
    ] = None,
) -> None:
    """Rename a subtask or change its status."""
    if status is not None and status not in SUBTASK_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(SUBTASK_STATUSES)}")
    if title is not None:
        title = validate_title(title, "Subtask title")

    async with open_session() as session:
        task_id = resolve_id(task_ref, session.store.tasks)
        task = session.store.get_task(task_id)
        subtask_id = resolve_id(subtask_ref, task.subtasks, kind="Subtask")
        subtask = next(item for item in task.subtasks if item.id == subtask_id)
        if title is None and status is None:
            format_info("Nothing to change.")
            return
        if title is not None:
            subtask.title = title
        if status is not None:
            subtask.status = status
        session.store.update_subtask(task_id, subtask)
        task = session.store.get_task(task_id)
        format_success(f"Subtask updated ({task.progress}% complete)")
