"""Decorators for command functions."""

import functools
import time
from collections.abc import Callable

import typer

from todolist.exceptions import ConfigError, PersistenceError
from todolist.utils import exit_codes
from todolist.utils.logger import get_logger
from todolist.utils.ui.formatters import format_error


class AppError(Exception):
    """Error a command reports to the user, with the exit code to leave with."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _exit_code_for(error: Exception) -> int:
    if isinstance(error, AppError):
        return error.exit_code
    if isinstance(error, ConfigError):
        return exit_codes.ERROR_INVALID_ARGS
    if isinstance(error, PersistenceError):
        return exit_codes.ERROR_STORAGE
    return exit_codes.ERROR_GENERAL


def command_wrapper(func: Callable) -> Callable:
    """Log a command's start, outcome and duration, and turn errors into exit codes.

    Expected errors are shown as their message. Anything else is shown as an
    unexpected error and logged with its traceback.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
        except (typer.Exit, typer.Abort):
            raise
        except Exception as e:
            code = _exit_code_for(e)
            elapsed = time.monotonic() - start
            expected = isinstance(e, (AppError, ConfigError, PersistenceError))
            logger.error(
                "command failed: %s (%.3fs) [%s] %s",
                cmd,
                elapsed,
                exit_codes.describe(code),
                e,
                exc_info=not expected,
            )
            format_error(str(e) if expected else f"An unexpected error occurred: {e}")
            raise typer.Exit(code=code) from e

        logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
        return result

    return wrapper
