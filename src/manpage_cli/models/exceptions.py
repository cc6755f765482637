"""Custom exceptions for manpage-cli."""

from manpage_cli.utils.exit_codes import (
    ERROR_CONVERSION,
    ERROR_GENERAL,
    ERROR_INSTALL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_VALIDATION,
)


class ManpageError(Exception):
    """Base exception for all manpage-cli errors.

    ``detail`` carries verbatim output from an external tool, if any.
    """

    exit_code: int = ERROR_GENERAL

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.detail = detail


class NotFoundError(ManpageError):
    """Raised when a target, README or generated page does not exist."""

    exit_code = ERROR_NOT_FOUND


class MissingReadmeError(NotFoundError):
    """Raised when no README could be located next to the target."""


class InvalidTargetError(ManpageError):
    """Raised when the target exists but is not a readable regular file."""

    exit_code = ERROR_INVALID_ARGS


class ConversionFailure(ManpageError):
    """Raised when the converter fails or returns nothing usable."""

    exit_code = ERROR_CONVERSION


class ValidationError(ManpageError):
    """Raised when a generated page lacks required structural markers."""

    exit_code = ERROR_VALIDATION


class InstallError(ManpageError):
    """Raised when the page cannot be copied into the man directory."""

    exit_code = ERROR_INSTALL


class DatabaseUpdateWarning(ManpageError):
    """Raised when the man database could not be refreshed.

    Never fatal: the installer logs it and reports a warning.
    """


class PageWriteError(ManpageError):
    """Raised when the generated page cannot be written next to the README."""
