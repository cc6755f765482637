"""Unit tests for the 'generate' command.

Covers:
- Page created next to the README
- Explicit README argument
- Missing README / target, directory target
- Converter failure and output without a title header
- --converter template
- --install
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from conftest import completed, make_project, make_tool
from manpage_cli.commands.generate_command import app
from manpage_cli.services.config_service import get_config_service
from manpage_cli.utils.exit_codes import (
    ERROR_CONVERSION,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_VALIDATION,
)

runner = CliRunner()


def test_generate_success(project, fake_converter):
    result = runner.invoke(app, [str(project)])

    assert result.exit_code == 0, result.output
    assert "Generating man page for testcmd" in result.output
    assert "Created" in result.output
    assert (project.parent / "testcmd.1").exists()


def test_generate_with_explicit_readme(tmp_path, fake_converter):
    target = make_project(tmp_path / "bin", readme=None)
    readme = tmp_path / "notes.md"
    readme.write_text("# testcmd\n")

    result = runner.invoke(app, [str(target), str(readme)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "testcmd.1").exists()


def test_generate_missing_readme(tmp_path, fake_converter):
    target = make_project(tmp_path / "bare", readme=None)

    result = runner.invoke(app, [str(target)])

    assert result.exit_code == ERROR_NOT_FOUND
    assert "No README found" in result.output
    fake_converter.assert_not_called()


def test_generate_missing_explicit_readme(project, fake_converter):
    result = runner.invoke(app, [str(project), "/nonexistent/README.md"])

    assert result.exit_code == ERROR_NOT_FOUND
    assert "README not found" in result.output


def test_generate_missing_target(tmp_path, fake_converter):
    result = runner.invoke(app, [str(tmp_path / "nothing")])

    assert result.exit_code == ERROR_NOT_FOUND
    assert "Command not found" in result.output


def test_generate_directory_target(tmp_path, fake_converter):
    result = runner.invoke(app, [str(tmp_path)])

    assert result.exit_code == ERROR_INVALID_ARGS
    assert "Not a regular file" in result.output


def test_generate_converter_failure(project, fake_converter):
    fake_converter.return_value = completed(returncode=2, stderr="rate limited")

    result = runner.invoke(app, [str(project)])

    assert result.exit_code == ERROR_CONVERSION
    assert "rate limited" in result.output
    assert not (project.parent / "testcmd.1").exists()


def test_generate_converter_not_installed(project, fake_converter):
    fake_converter.side_effect = FileNotFoundError("claude")

    result = runner.invoke(app, [str(project)])

    assert result.exit_code == ERROR_CONVERSION
    assert "Converter not found" in result.output


def test_generate_without_title_header(project, fake_converter):
    fake_converter.return_value = completed(stdout="just some text\n")

    result = runner.invoke(app, [str(project)])

    assert result.exit_code == ERROR_VALIDATION
    assert "title header" in result.output
    assert not (project.parent / "testcmd.1").exists()


def test_generate_template_converter(project):
    result = runner.invoke(app, [str(project), "--converter", "template"])

    assert result.exit_code == 0, result.output
    assert (project.parent / "testcmd.1").read_text().startswith('.TH "TESTCMD"')


def test_generate_invalid_converter(project):
    result = runner.invoke(app, [str(project), "--converter", "magic"])

    assert result.exit_code == 2


def test_generate_and_install(project, fake_converter, user_home):
    result = runner.invoke(app, [str(project), "-i"])

    assert result.exit_code == 0, result.output
    assert "Installed" in result.output
    assert (user_home / ".local" / "share" / "man" / "man1" / "testcmd.1").exists()


def test_generate_paths_with_spaces(tmp_path, fake_converter):
    target = make_project(tmp_path / "my dir", command="my tool")

    result = runner.invoke(app, [str(target)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "my dir" / "my tool.1").exists()


def test_generate_with_undecodable_converter_output(project, tmp_path):
    tool = make_tool(
        tmp_path / "tools",
        "ai",
        stdout=b".TH TESTCMD 1\n.SH NAME\ntestcmd \\- caf\xe9\n",
    )
    service = get_config_service()
    service.set("converter.command", str(tool))
    service.set("converter.args", [])

    result = runner.invoke(app, [str(project)])

    assert result.exit_code == 0, result.output
    page = (project.parent / "testcmd.1").read_text(encoding="utf-8")
    assert "caf\ufffd" in page


def test_generate_unwritable_readme_directory(project, fake_converter):
    with patch.object(
        Path, "write_text", side_effect=PermissionError(13, "Permission denied")
    ):
        result = runner.invoke(app, [str(project)])

    assert result.exit_code == ERROR_GENERAL
    assert "Cannot write" in result.output
    assert "Permission denied" in result.output
    assert "unexpected" not in result.output
