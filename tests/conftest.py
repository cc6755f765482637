"""Shared test fixtures and configuration.

Every test gets its own config and log directories under tmp_path so the
real user's files are never read or written.
"""

from __future__ import annotations

import logging
import logging.handlers
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

TESTCMD_PAGE = """\
.TH TESTCMD 1 "December 2024" "1.0" "User Commands"
.SH NAME
testcmd \\- mock generated man page
.SH SYNOPSIS
.B testcmd
[options]
.SH DESCRIPTION
This is a mock generated man page for testing.
"""

SIMPLE_README = """\
# testcmd

A small command used in tests.

## Usage

```
testcmd [options] FILE
```

## Options

- `-h` show help
"""


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config and log directories at tmp_path."""
    import manpage_cli.utils.logger as logger_mod
    from manpage_cli.services.config_service import get_config_service

    config_dir = tmp_path / "_config"
    log_dir = tmp_path / "_logs"

    get_config_service.cache_clear()
    logger_mod._logger = None
    with (
        patch(
            "manpage_cli.services.config_service.user_config_dir",
            return_value=str(config_dir),
        ),
        patch("manpage_cli.utils.logger.user_log_dir", return_value=str(log_dir)),
    ):
        yield
    get_config_service.cache_clear()
    root = logging.getLogger("manpage_cli")
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
            root.removeHandler(handler)
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Project fixtures
# ---------------------------------------------------------------------------


def make_project(directory: Path, command: str = "testcmd", readme: str | None = SIMPLE_README) -> Path:
    """Create ``directory/command`` (and a README.md) and return the command path."""
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / command
    target.write_text("#!/bin/sh\necho hello\n")
    target.chmod(0o755)
    if readme is not None:
        (directory / "README.md").write_text(readme)
    return target


@pytest.fixture()
def project(tmp_path) -> Path:
    """A ``simple/testcmd`` script with a README next to it."""
    return make_project(tmp_path / "simple")


def completed(stdout: str = "", stderr: str = "", returncode: int = 0):
    return subprocess.CompletedProcess(
        args=["fake"], returncode=returncode, stdout=stdout, stderr=stderr
    )


def make_tool(
    directory: Path,
    name: str,
    stdout: bytes = b"",
    stderr: bytes = b"",
    returncode: int = 0,
) -> Path:
    """Write an executable shell script that prints fixed bytes and exits."""
    directory.mkdir(parents=True, exist_ok=True)
    out = directory / f"{name}.out"
    err = directory / f"{name}.err"
    out.write_bytes(stdout)
    err.write_bytes(stderr)
    tool = directory / name
    tool.write_text(
        "#!/bin/sh\n"
        "cat >/dev/null\n"
        f"cat '{out}'\n"
        f"cat '{err}' >&2\n"
        f"exit {returncode}\n"
    )
    tool.chmod(0o755)
    return tool


@pytest.fixture()
def fake_converter():
    """Patch the external converter's subprocess call.

    Yields the mock; set ``.return_value`` or ``.side_effect`` to change the
    converter's behaviour. By default it prints TESTCMD_PAGE.
    """
    with patch(
        "manpage_cli.services.converter.subprocess.run",
        return_value=completed(stdout=TESTCMD_PAGE),
    ) as run:
        yield run


@pytest.fixture()
def user_home(tmp_path, monkeypatch):
    """Run as an unprivileged user whose home is tmp_path/home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    with (
        patch("manpage_cli.services.resolver.os.geteuid", return_value=1000, create=True),
        patch(
            "manpage_cli.services.installer.user_manpath_configured",
            return_value=True,
        ),
    ):
        yield home
