"""Focus command - run a pomodoro for one task in the terminal."""

import asyncio
from typing import Annotated

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from minutemind.services import PomodoroState, Session, open_session
from minutemind.utils.task_helpers import resolve_id
from minutemind.utils.ui.console import get_console
from minutemind.utils.ui.formatters import format_warning

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


async def run_focus(session: Session, task_id: str, minutes: int | None = None) -> bool:
    """Count down one session for ``task_id``.

    Returns:
        True if the session ran to completion, False if it was interrupted
    """
    engine = session.pomodoro()
    if minutes:
        engine.duration_seconds = minutes * 60
    finished = asyncio.Event()
    total = engine.duration_seconds
    task = session.store.get_task(task_id)
    console.print(f"\n[bold green]Focusing on:[/bold green] {task.title}")
    console.print(f"Duration: {PomodoroState('idle', None, total).display()}\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
        transient=True,
    ) as progress:
        bar = progress.add_task("Starting...", total=total)

        def on_state(state: PomodoroState) -> None:
            if not state.is_running:
                finished.set()
                return
            progress.update(
                bar,
                completed=total - state.remaining_seconds,
                description=f"⏱️  {state.display()} remaining",
            )

        engine.subscribe(on_state)
        engine.start(task_id)
        try:
            await finished.wait()
        except (asyncio.CancelledError, KeyboardInterrupt):
            engine.stop()
            console.print("\n[yellow]⚠️  Session Interrupted[/yellow]")
            console.print("[dim]No pomodoro was credited[/dim]\n")
            return False

    if engine.notification_failures:
        format_warning("Could not deliver the completion notification")
    credited = session.store.get_task(task_id)
    count = credited.pomodoro_count if credited else 0
    console.print(f"[dim]{count} pomodoro(s) completed for this task[/dim]\n")
    return True


@app.command("focus")
@command_wrapper
async def focus(
    task_ref: Annotated[str, typer.Argument(help="Task ID or prefix")],
    minutes: Annotated[
        int | None, typer.Option("--minutes", "-m", min=1, help="Override the session length")
    ] = None,
) -> None:
    """Start a pomodoro focus session for a task."""
    async with open_session() as session:
        task_id = resolve_id(task_ref, session.store.tasks)
        await run_focus(session, task_id, minutes)
