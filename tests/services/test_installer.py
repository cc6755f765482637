"""Tests for installing pages and refreshing the man database."""

from __future__ import annotations

import stat
from unittest.mock import MagicMock, patch

import pytest

from conftest import TESTCMD_PAGE, completed
from manpage_cli.models.config_models import InstallSettings
from manpage_cli.models.exceptions import DatabaseUpdateWarning, InstallError
from manpage_cli.services.installer import (
    install_page,
    update_man_database,
    user_manpath_configured,
)
from manpage_cli.services.resolver import InstallContext


@pytest.fixture()
def page(tmp_path):
    path = tmp_path / "src" / "testcmd.1"
    path.parent.mkdir()
    path.write_text(TESTCMD_PAGE)
    path.chmod(0o600)
    return path


@pytest.fixture()
def settings(tmp_path):
    return InstallSettings(
        system_dir=str(tmp_path / "system" / "man1"),
        user_dir=str(tmp_path / "user" / "man1"),
    )


# ---------------------------------------------------------------------------
# update_man_database
# ---------------------------------------------------------------------------


class TestUpdateManDatabase:
    def test_user_context_does_nothing(self, settings):
        with patch("manpage_cli.services.installer.subprocess.run") as run:
            assert update_man_database(InstallContext.USER, settings) is None
        run.assert_not_called()

    def test_runs_first_available_updater(self, settings):
        def which(name):
            return "/usr/sbin/makewhatis" if name == "makewhatis" else None

        with (
            patch("manpage_cli.services.installer.shutil.which", side_effect=which),
            patch(
                "manpage_cli.services.installer.subprocess.run", return_value=completed()
            ) as run,
        ):
            assert update_man_database(InstallContext.SYSTEM, settings) == "makewhatis"
        assert run.call_args[0][0] == ["/usr/sbin/makewhatis"]

    def test_failure_raises_warning(self, settings):
        with (
            patch("manpage_cli.services.installer.shutil.which", return_value="/usr/bin/mandb"),
            patch(
                "manpage_cli.services.installer.subprocess.run",
                return_value=completed(returncode=1, stderr="locked"),
            ),
        ):
            with pytest.raises(DatabaseUpdateWarning) as exc_info:
                update_man_database(InstallContext.SYSTEM, settings)
        assert exc_info.value.detail == "locked"

    def test_no_updater_raises_warning(self, settings):
        with patch("manpage_cli.services.installer.shutil.which", return_value=None):
            with pytest.raises(DatabaseUpdateWarning, match="mandb, makewhatis"):
                update_man_database(InstallContext.SYSTEM, settings)


# ---------------------------------------------------------------------------
# install_page
# ---------------------------------------------------------------------------


class TestInstallPage:
    def test_user_install(self, page, settings, tmp_path):
        with patch(
            "manpage_cli.services.installer.user_manpath_configured", return_value=True
        ):
            destination = install_page(page, InstallContext.USER, settings)

        assert destination == tmp_path / "user" / "man1" / "testcmd.1"
        assert destination.read_text() == TESTCMD_PAGE
        assert stat.S_IMODE(destination.stat().st_mode) == 0o644

    def test_system_install_updates_database(self, page, settings, tmp_path):
        reporter = MagicMock()
        with (
            patch("manpage_cli.services.installer.shutil.which", return_value="/usr/bin/mandb"),
            patch(
                "manpage_cli.services.installer.subprocess.run", return_value=completed()
            ) as run,
        ):
            destination = install_page(page, InstallContext.SYSTEM, settings, reporter)

        assert destination == tmp_path / "system" / "man1" / "testcmd.1"
        run.assert_called_once()
        reporter.warning.assert_not_called()

    def test_database_failure_is_not_fatal(self, page, settings):
        reporter = MagicMock()
        with (
            patch("manpage_cli.services.installer.shutil.which", return_value=None),
        ):
            destination = install_page(page, InstallContext.SYSTEM, settings, reporter)

        assert destination.exists()
        reporter.warning.assert_called_once()
        assert "Man database not updated" in reporter.warning.call_args[0][0]

    def test_overwrites_existing_page(self, page, settings, tmp_path):
        existing = tmp_path / "system" / "man1" / "testcmd.1"
        existing.parent.mkdir(parents=True)
        existing.write_text("old")
        with patch("manpage_cli.services.installer.shutil.which", return_value=None):
            install_page(page, InstallContext.SYSTEM, settings, MagicMock())
        assert existing.read_text() == TESTCMD_PAGE

    def test_copy_failure_raises_install_error(self, page, settings):
        with patch(
            "manpage_cli.services.installer.shutil.copyfile",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(InstallError, match="Permission denied"):
                install_page(page, InstallContext.USER, settings, MagicMock())

    def test_warns_when_user_dir_not_in_manpath(self, page, settings):
        reporter = MagicMock()
        with patch(
            "manpage_cli.services.installer.user_manpath_configured", return_value=False
        ):
            install_page(page, InstallContext.USER, settings, reporter)
        assert "MANPATH" in reporter.warning.call_args[0][0]


class TestUserManpathConfigured:
    def test_found_in_manpath_output(self, tmp_path):
        man1 = tmp_path / "share" / "man" / "man1"
        output = f"/usr/share/man:{tmp_path / 'share' / 'man'}\n"
        with patch(
            "manpage_cli.services.installer.subprocess.run",
            return_value=completed(stdout=output),
        ):
            assert user_manpath_configured(man1)

    def test_missing_from_manpath_output(self, tmp_path):
        with patch(
            "manpage_cli.services.installer.subprocess.run",
            return_value=completed(stdout="/usr/share/man\n"),
        ):
            assert not user_manpath_configured(tmp_path / "man1")

    def test_falls_back_to_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MANPATH", str(tmp_path))
        with patch(
            "manpage_cli.services.installer.subprocess.run",
            side_effect=FileNotFoundError("manpath"),
        ):
            assert user_manpath_configured(tmp_path / "man1")
