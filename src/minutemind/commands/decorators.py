"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError as ModelValidationError

from minutemind.exceptions import StorageError, ValidationError
from minutemind.utils.exit_codes import (
    ERROR_INVALID_ARGS,
    ERROR_STORAGE,
    get_exit_code_name,
)
from minutemind.utils.logger import get_logger
from minutemind.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def _first_error(error: ModelValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{field}: {message}" if field else message


def command_wrapper(func: Callable):
    """Wrap a command with logging, error formatting and async support."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger("cli")
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except ValidationError as e:
            logger.warning("command rejected: %s - %s", cmd, e)
            format_error(str(e))
            raise typer.Exit(code=ERROR_INVALID_ARGS) from e

        except ModelValidationError as e:
            logger.warning("command rejected: %s - %s", cmd, e)
            format_error(_first_error(e))
            raise typer.Exit(code=ERROR_INVALID_ARGS) from e

        except StorageError as e:
            logger.error("command failed: %s - storage: %s", cmd, e)
            format_error(f"Storage error: {e}")
            raise typer.Exit(code=ERROR_STORAGE) from e

        except AppError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s [%s]",
                cmd,
                elapsed,
                str(e),
                get_exit_code_name(e.exit_code),
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except KeyboardInterrupt:
            logger.info("command interrupted: %s", cmd)
            raise typer.Exit(code=130) from None

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=1) from e

    return wrapper
