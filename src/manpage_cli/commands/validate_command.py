"""Command 'validate' of manpage-cli"""

from pathlib import Path

import typer

from manpage_cli.commands.decorators import command_wrapper
from manpage_cli.commands.state import get_state
from manpage_cli.models.exceptions import NotFoundError, ValidationError
from manpage_cli.models.validation import ManPage, ValidationReport
from manpage_cli.services.validator import validate_page
from manpage_cli.utils.ui.formatters import (
    OutputFormat,
    format_output,
    format_report,
    format_summary,
)

app = typer.Typer()


@app.command()
@command_wrapper
def validate(
    ctx: typer.Context,
    pages: list[Path] = typer.Argument(..., help="Man page file(s) to check"),
    render: bool = typer.Option(
        True, "--render/--no-render", help="Also run the page through the renderer"
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.pretty, "--output", "-o", help="Output format"
    ),
) -> None:
    """Check man pages for required sections, order and render errors.

    Exits non-zero if any page has an error; warnings never fail.
    """
    state = get_state(ctx)
    renderer = state.config.renderer
    command = renderer.command if render and renderer.enabled else None

    reports = []
    for path in pages:
        try:
            page = ManPage.from_file(path)
        except NotFoundError as e:
            report = ValidationReport(page=str(path))
            report.add_error(str(e))
        else:
            report = validate_page(page, command)
        reports.append(report)

    if output is OutputFormat.pretty:
        for report in reports:
            format_report(report, state.reporter)
        if len(reports) > 1:
            format_summary(reports, state.reporter)
    else:
        format_output([r.summary() for r in reports], output.value)

    failed = [r for r in reports if not r.ok]
    if failed:
        raise ValidationError(f"{len(failed)} of {len(reports)} page(s) failed validation")
