"""Install generated pages and refresh the man database."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from manpage_cli.models.config_models import InstallSettings
from manpage_cli.models.exceptions import DatabaseUpdateWarning, InstallError
from manpage_cli.services.resolver import InstallContext, install_directory_for
from manpage_cli.utils.logger import get_logger
from manpage_cli.utils.ui.reporter import Reporter


def update_man_database(
    context: InstallContext, settings: InstallSettings | None = None
) -> str | None:
    """Refresh the man index with the first available updater.

    Only system installs are indexed; returns the updater used, or None.

    Raises:
        DatabaseUpdateWarning: If the updater is missing or fails
    """
    settings = settings or InstallSettings()
    if context is not InstallContext.SYSTEM:
        return None

    for updater in settings.database_updaters:
        executable = shutil.which(updater)
        if executable is None:
            continue
        get_logger("installer").debug("running %s", executable)
        try:
            result = subprocess.run(
                [executable], capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise DatabaseUpdateWarning(f"{updater} could not be run: {e}") from e
        if result.returncode != 0:
            raise DatabaseUpdateWarning(
                f"{updater} exited with status {result.returncode}",
                detail=result.stderr or None,
            )
        return updater

    raise DatabaseUpdateWarning(
        f"No man database updater found (tried {', '.join(settings.database_updaters)})"
    )


def user_manpath_configured(user_dir: Path) -> bool:
    """Return True if ``manpath`` already searches the per-user man tree."""
    man_root = str(user_dir.parent)
    try:
        result = subprocess.run(
            ["manpath"], capture_output=True, text=True, check=False
        )
    except OSError:
        return man_root in os.environ.get("MANPATH", "").split(os.pathsep)
    return man_root in result.stdout.strip().split(os.pathsep)


def install_page(
    page: Path,
    context: InstallContext,
    settings: InstallSettings | None = None,
    reporter: Reporter | None = None,
) -> Path:
    """Copy a page into the man1 directory for ``context``.

    A failed database refresh is reported but never fails the install.

    Raises:
        InstallError: If the directory or the copy cannot be created
    """
    settings = settings or InstallSettings()
    reporter = reporter or Reporter()
    logger = get_logger("installer")

    directory = install_directory_for(context, settings)
    destination = directory / page.name
    reporter.detail(f"Installing {page} to {directory}")

    try:
        shutil.copyfile(page, destination)
        os.chmod(destination, settings.mode)
    except OSError as e:
        logger.error("copy %s -> %s failed: %s", page, destination, e)
        raise InstallError(
            f"Failed to install {page.name} to {directory}: {e.strerror or e}"
        ) from e
    logger.info("installed %s (%s)", destination, context.value)

    try:
        updater = update_man_database(context, settings)
    except DatabaseUpdateWarning as e:
        logger.warning("man database update failed: %s", e)
        reporter.warning(f"Man database not updated: {e}", detail=e.detail)
    else:
        if updater:
            reporter.detail(f"Updated man database with {updater}")

    if context is InstallContext.USER and not user_manpath_configured(directory):
        reporter.warning(
            f"{directory.parent} may not be in MANPATH; add "
            f'export MANPATH="{directory.parent}:$MANPATH" to your shell profile'
        )

    return destination
