"""Path and install-context resolution.

Targets and READMEs are always carried as ``Path`` objects and handed to
subprocesses as single argv elements, so names with spaces or punctuation
reach the filesystem byte for byte.
"""

from __future__ import annotations

import os
import shutil
import stat
from enum import Enum
from pathlib import Path

from manpage_cli.models.config_models import InstallSettings, ResolverSettings
from manpage_cli.models.exceptions import (
    InstallError,
    InvalidTargetError,
    MissingReadmeError,
    NotFoundError,
)
from manpage_cli.utils.logger import get_logger

PAGE_SUFFIX = ".1"


class InstallContext(str, Enum):
    """Where an installed page goes."""

    SYSTEM = "system"
    USER = "user"


def _canonical(path: str | os.PathLike[str]) -> Path:
    return Path(os.path.realpath(os.path.expanduser(os.fspath(path))))


def resolve_target(
    target: str | os.PathLike[str], settings: ResolverSettings | None = None
) -> Path:
    """Canonicalize the command being documented.

    A bare name (no path separator) that does not exist in the working
    directory is looked up on ``PATH`` when ``settings.search_path`` is set.

    Raises:
        NotFoundError: If the target does not exist
        InvalidTargetError: If it is not a readable regular file
    """
    settings = settings or ResolverSettings()
    raw = os.fspath(target)
    if not raw:
        raise NotFoundError("No target given")

    candidate = Path(raw).expanduser()
    if not candidate.exists() and settings.search_path and os.sep not in raw:
        found = shutil.which(raw)
        if found:
            get_logger("resolver").debug("resolved %r on PATH: %s", raw, found)
            candidate = Path(found)

    try:
        mode = os.stat(candidate).st_mode
    except FileNotFoundError:
        raise NotFoundError(f"Command not found: {raw}") from None
    except OSError as e:
        raise InvalidTargetError(f"Cannot access {raw}: {e.strerror}") from e

    resolved = _canonical(candidate)
    if not stat.S_ISREG(mode):
        raise InvalidTargetError(f"Not a regular file: {resolved}")
    if not os.access(resolved, os.R_OK):
        raise InvalidTargetError(f"Target is not readable: {resolved}")
    return resolved


def find_readme(directory: Path, names: list[str]) -> Path | None:
    """Return the first README-like regular file in ``directory``."""
    for name in names:
        candidate = directory / name
        if candidate.is_file():
            return _canonical(candidate)
    return None


def resolve_readme(
    target: Path,
    explicit: str | os.PathLike[str] | None = None,
    settings: ResolverSettings | None = None,
) -> Path:
    """Locate the README to convert.

    An explicit path always wins and never falls back to searching.

    Raises:
        NotFoundError: If an explicit README does not exist
        MissingReadmeError: If none is found next to the target
    """
    settings = settings or ResolverSettings()
    if explicit is not None and os.fspath(explicit):
        readme = _canonical(explicit)
        if not readme.is_file():
            raise NotFoundError(f"README not found: {explicit}")
        return readme

    readme = find_readme(target.parent, settings.readme_names)
    if readme is None:
        raise MissingReadmeError(
            f"No README found in {target.parent} "
            f"(looked for {', '.join(settings.readme_names)})"
        )
    return readme


def generated_page_path(target: Path, readme: Path) -> Path:
    """Return ``<readme dir>/<target name>.1``."""
    return readme.parent / f"{target.name}{PAGE_SUFFIX}"


def determine_install_context(force_user: bool = False) -> InstallContext:
    """SYSTEM when running with effective uid 0, unless USER is forced."""
    if force_user:
        return InstallContext.USER
    geteuid = getattr(os, "geteuid", None)
    if geteuid is not None and geteuid() == 0:
        return InstallContext.SYSTEM
    return InstallContext.USER


def install_directory_for(
    context: InstallContext, settings: InstallSettings | None = None
) -> Path:
    """Return the man1 directory for a context, creating it if needed.

    Raises:
        InstallError: If the directory cannot be created
    """
    settings = settings or InstallSettings()
    raw = settings.system_dir if context is InstallContext.SYSTEM else settings.user_dir
    directory = Path(raw).expanduser()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(
            f"Cannot create {directory}: {e.strerror or e}"
        ) from e
    return directory
