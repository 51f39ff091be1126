"""Main entry point for the MinuteMind CLI."""

import typer

from minutemind import __version__
from minutemind.commands import focus, links, settings, subtasks, task_commands
from minutemind.config import get_config_manager
from minutemind.utils.typer_helpers import SuggestingGroup
from minutemind.utils.ui.console import get_console

app = typer.Typer(
    name="minutemind",
    cls=SuggestingGroup,
    help="Tasks, subtasks, quick links and pomodoro focus sessions in the terminal",
    no_args_is_help=True,
)

console = get_console()

# Top-level commands (add, list, done, focus, theme ...) live in their own
# modules; their registrations are merged into the root group.
for module in (task_commands, focus, settings):
    app.registered_commands.extend(module.app.registered_commands)

app.add_typer(subtasks.app, name="subtask", help="Subtask (checklist) commands")
app.add_typer(links.app, name="links", help="Quick link commands")
app.add_typer(settings.config_app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    """Tasks, subtasks, quick links and pomodoro focus sessions in the terminal."""
    if not get_config_manager().config.output.color:
        console.no_color = True


@app.command()
def version() -> None:
    """Show version and storage information."""
    config_manager = get_config_manager()
    console.print(f"[bold]MinuteMind[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Storage backend:[/dim] {config_manager.config.storage.backend}")
    console.print(f"[dim]Data directory:[/dim] {config_manager.data_dir}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
