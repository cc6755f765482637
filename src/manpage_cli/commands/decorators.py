"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from manpage_cli.commands.state import get_state
from manpage_cli.models.exceptions import ManpageError
from manpage_cli.utils.exit_codes import ERROR_GENERAL
from manpage_cli.utils.logger import get_logger


def command_wrapper(func: Callable):
    """Log the command and turn ManpageError into a message and exit code.

    The wrapped command must take ``ctx: typer.Context`` so the reporter
    built from the global flags can be found.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        reporter = get_state(kwargs.get("ctx")).reporter
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except ManpageError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s: %s",
                cmd,
                elapsed,
                type(e).__name__,
                str(e),
            )
            reporter.error(str(e), detail=e.detail)
            raise typer.Exit(code=e.exit_code) from e

        except (typer.Exit, typer.Abort, typer.BadParameter):
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            reporter.error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
