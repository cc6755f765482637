"""Configuration management commands."""

import json

import typer

from manpage_cli.commands.decorators import command_wrapper
from manpage_cli.commands.state import get_state
from manpage_cli.models.exceptions import ManpageError
from manpage_cli.services.config_service import get_config_service
from manpage_cli.utils.logger import get_log_path
from manpage_cli.utils.typer_helpers import SuggestingGroup
from manpage_cli.utils.ui.formatters import OutputFormat, format_config, format_output

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")


def _parse_value(value: str):
    """Interpret a CLI value as JSON where possible, else as a string."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


@app.command("show")
@command_wrapper
def show_config(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(
        OutputFormat.pretty, "--output", "-o", help="Output format"
    ),
) -> None:
    """Show the effective configuration."""
    state = get_state(ctx)
    data = state.config.model_dump()
    if output is OutputFormat.pretty:
        format_config(data, state.reporter)
    else:
        format_output(data, output.value)


@app.command("get")
@command_wrapper
def get_config(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Configuration key (e.g. converter.command)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError:
        raise ManpageError(f"Configuration key '{key}' not found") from None
    format_output(value, "json")


@app.command("set")
@command_wrapper
def set_config(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Configuration key (e.g. converter.command)"),
    value: str = typer.Argument(..., help="Value; JSON is accepted for lists"),
) -> None:
    """Set a configuration value."""
    service = get_config_service()
    parsed = _parse_value(value)
    try:
        service.set(key, parsed)
    except KeyError:
        raise ManpageError(f"Configuration key '{key}' not found") from None
    except ValueError as e:
        raise ManpageError(str(e)) from e
    get_state(ctx).reporter.success(f"Configuration '{key}' set to {json.dumps(parsed)}")


@app.command("reset")
@command_wrapper
def reset_config(
    ctx: typer.Context,
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    reporter = get_state(ctx).reporter
    if not yes:
        what = f"'{key}'" if key else "the entire configuration"
        if not typer.confirm(f"Reset {what} to defaults?"):
            reporter.info("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError:
        raise ManpageError(f"Configuration key '{key}' not found") from None

    if key:
        reporter.success(f"Configuration '{key}' reset to default")
    else:
        reporter.success("Configuration reset to defaults")


@app.command("path")
@command_wrapper
def config_path(ctx: typer.Context) -> None:
    """Show where the configuration and log files live."""
    out = get_state(ctx).reporter.out
    out.print(f"config: {get_config_service().config_path}", markup=False)
    out.print(f"log:    {get_log_path()}", markup=False)
