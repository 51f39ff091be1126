"""Theme and configuration commands."""

import json
from typing import Annotated, Any

import typer
from pydantic import ValidationError as ModelValidationError

from minutemind.config import get_config_manager
from minutemind.services import open_session
from minutemind.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from minutemind.utils.ui.console import get_console
from minutemind.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

app = typer.Typer()
config_app = typer.Typer(help="Configuration management")
console = get_console()


@app.command("theme")
@command_wrapper
async def theme(
    mode: Annotated[
        str, typer.Argument(help="on, off or toggle")
    ] = "toggle",
) -> None:
    """Switch dark mode on, off, or toggle it."""
    mode = mode.lower()
    if mode not in ("on", "off", "toggle"):
        raise AppError("Mode must be on, off or toggle", exit_code=ERROR_INVALID_ARGS)
    async with open_session() as session:
        if mode == "toggle":
            session.store.toggle_dark_mode()
        else:
            session.store.set_dark_mode(mode == "on")
        state = "on" if session.store.dark_mode else "off"
        format_success(f"Dark mode {state}")


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@config_app.command("get")
@command_wrapper
def config_get(key: Annotated[str, typer.Argument(help="Dot-separated key")]) -> None:
    """Show a configuration value."""
    value = get_config_manager().get(key)
    if value is None:
        raise AppError(f"Unknown or unset key: {key}", exit_code=ERROR_NOT_FOUND)
    if hasattr(value, "model_dump"):
        value = value.model_dump()
    console.print_json(json.dumps(value))


@config_app.command("set")
@command_wrapper
def config_set(
    key: Annotated[str, typer.Argument(help="Dot-separated key")],
    value: Annotated[str, typer.Argument(help="New value (JSON or plain text)")],
) -> None:
    """Change a configuration value."""
    try:
        get_config_manager().set(key, _parse_value(value))
    except KeyError as e:
        raise AppError(f"Unknown key: {key}", exit_code=ERROR_NOT_FOUND) from e
    except ModelValidationError as e:
        raise AppError(f"Invalid value for {key}", exit_code=ERROR_INVALID_ARGS) from e
    format_success(f"{key} updated")


@config_app.command("reset")
@command_wrapper
def config_reset(
    key: Annotated[str | None, typer.Argument(help="Key to reset, all if omitted")] = None,
) -> None:
    """Restore defaults."""
    try:
        get_config_manager().reset(key)
    except KeyError as e:
        raise AppError(f"Unknown key: {key}", exit_code=ERROR_NOT_FOUND) from e
    format_success(f"{key or 'Configuration'} reset to defaults")
