"""Main entry point for manpage-cli."""

import typer

from manpage_cli import __version__
from manpage_cli.commands import (
    config_command,
    generate_command,
    install_command,
    validate_command,
    version_command,
)
from manpage_cli.commands.state import AppState
from manpage_cli.models.config_models import OutputSettings
from manpage_cli.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="manpage",
    cls=SuggestingGroup,
    help="Generate UNIX man pages from README files using an AI converter.",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("generate")(generate_command.generate)
app.command("install")(install_command.install)
app.command("validate")(validate_command.validate)
app.command("version")(version_command.version)
app.add_typer(config_command.app, name="config", help="Configuration management")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"manpage {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed progress"
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only show warnings and errors (wins over --verbose)",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Generate UNIX man pages from README files using an AI converter."""
    ctx.obj = AppState(
        output=OutputSettings.from_flags(verbose=verbose, quiet=quiet, color=not no_color)
    )


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
