"""Output formatters for the MinuteMind CLI."""

from __future__ import annotations

from datetime import date

from rich.table import Table
from rich.text import Text

from minutemind.models import QuickLink, Task
from minutemind.utils.recurrence import describe_recurrence, next_occurrence

from .console import get_console

console = get_console()

PRIORITY_ICONS = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🟢",
}

SUBTASK_ICONS = {
    "pending": "○",
    "in-progress": "◐",
    "completed": "●",
}

# Rich color names for the tag palette
COLOR_STYLES = {
    "slate": "grey58",
    "red": "red",
    "amber": "dark_orange",
    "emerald": "green",
    "cyan": "cyan",
    "violet": "medium_purple",
    "fuchsia": "magenta",
    "rose": "hot_pink",
}


def short_id(item_id: str, length: int = 8) -> str:
    """First characters of an id for display."""
    return item_id[:length]


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def format_due_date(due: date, today: date | None = None) -> Text:
    today = today or date.today()
    label = f"{due:%b} {due.day}, {due.year}"
    if due < today:
        return Text(label, style="bold red")
    if due == today:
        return Text(label, style="yellow")
    return Text(label)


def _title_cell(task: Task) -> Text:
    title = Text(task.title, style="strike dim" if task.completed else "")
    if task.pinned:
        title = Text("📌 ") + title
    if task.color:
        swatch = COLOR_STYLES.get(task.color.split("-")[0], "white")
        title = Text("▍", style=swatch) + title
    return title


def format_task_table(tasks: list[Task], compact: bool = False) -> None:
    """Render tasks in display order with their position index."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("", width=2)
    table.add_column("Task")
    table.add_column("Pri", justify="center")
    if not compact:
        table.add_column("Due")
        table.add_column("Progress")
        table.add_column("🍅", justify="right")

    for position, task in enumerate(tasks):
        row: list[str | Text] = [
            str(position),
            short_id(task.id),
            "✓" if task.completed else " ",
            _title_cell(task),
            PRIORITY_ICONS[task.priority],
        ]
        if not compact:
            row.append(format_due_date(task.due_date) if task.due_date else "")
            if task.subtasks:
                color = get_completion_color(task.progress)
                row.append(
                    Text(f"{get_progress_bar(task.progress)} {task.progress}%", style=color)
                )
            else:
                row.append("")
            row.append(str(task.pomodoro_count) if task.pomodoro_count else "")
        table.add_row(*row)

    console.print(table)


def format_task_detail(task: Task) -> None:
    """Render every field of one task."""
    console.print(_title_cell(task), style="bold")
    console.print(f"[dim]ID:[/dim] {task.id}")
    console.print(f"[dim]Status:[/dim] {'completed' if task.completed else 'open'}")
    console.print(f"[dim]Priority:[/dim] {PRIORITY_ICONS[task.priority]} {task.priority}")
    console.print(f"[dim]Recurrence:[/dim] {describe_recurrence(task.recurrence)}")
    if task.due_date:
        console.print("[dim]Due:[/dim] ", format_due_date(task.due_date), sep="")
        upcoming = next_occurrence(task.due_date, task.recurrence)
        if upcoming:
            console.print(f"[dim]Next occurrence:[/dim] {upcoming.isoformat()}")
    if task.color:
        console.print(f"[dim]Color:[/dim] {task.color}")
    if task.notes:
        console.print(f"[dim]Notes:[/dim] {task.notes}")

    pomodoros = str(task.pomodoro_count)
    if task.pomodoro_target:
        pomodoros += f" / {task.pomodoro_target}"
    console.print(f"[dim]Pomodoros:[/dim] {pomodoros}")

    if task.subtasks:
        color = get_completion_color(task.progress)
        console.print(
            f"[dim]Progress:[/dim] [{color}]{get_progress_bar(task.progress)} {task.progress}%[/{color}]"
        )
        for subtask in task.subtasks:
            icon = SUBTASK_ICONS[subtask.status]
            title = subtask.title or "[dim](untitled)[/dim]"
            console.print(f"  {icon} [cyan]{short_id(subtask.id)}[/cyan] {title}")


def format_links_table(links: list[QuickLink]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("URL", style="blue")
    for link in links:
        title = f"{link.icon} {link.title}" if link.icon else link.title
        table.add_row(short_id(link.id), title, link.url)
    console.print(table)
