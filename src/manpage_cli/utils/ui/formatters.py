"""Output formatters for validation reports and configuration."""

import json
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from rich.markup import escape

from manpage_cli.models.validation import ValidationReport
from manpage_cli.utils.ui.reporter import Reporter


class OutputFormat(str, Enum):
    pretty = "pretty"
    json = "json"
    yaml = "yaml"


def format_output(data: Any, output_format: str = "json") -> None:
    """Print machine-readable data as JSON or YAML."""
    if output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")
    else:
        print(json.dumps(data, indent=2, default=str))


def format_report(report: ValidationReport, reporter: Reporter) -> None:
    """Print one report for humans: findings, then a one-line verdict."""
    name = Path(report.page).name
    reporter.info(f"Validating {report.page}")
    for finding in report.findings:
        if finding.severity == "error":
            reporter.error(f"{name}: {finding.message}", detail=finding.detail)
        else:
            reporter.warning(f"{name}: {finding.message}", detail=finding.detail)

    if report.ok:
        reporter.success(
            f"{report.page}: no errors, {report.warning_count} warning(s)"
        )


def format_summary(reports: list[ValidationReport], reporter: Reporter) -> None:
    """Print totals across several reports."""
    errors = sum(r.error_count for r in reports)
    warnings = sum(r.warning_count for r in reports)
    if reporter.settings.quiet:
        return
    style = "red" if errors else "green"
    reporter.out.print(
        f"[{style}]{len(reports)} page(s): {errors} error(s), "
        f"{warnings} warning(s)[/{style}]"
    )


def format_config(data: dict, reporter: Reporter, prefix: str = "") -> None:
    """Print nested configuration as dotted ``key = value`` lines."""
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            format_config(value, reporter, prefix=f"{dotted}.")
        else:
            reporter.out.print(
                f"[cyan]{escape(dotted)}[/cyan] = {escape(json.dumps(value))}"
            )
