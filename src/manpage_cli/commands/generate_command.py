"""Command 'generate' of manpage-cli"""

from enum import Enum

import typer

from manpage_cli.commands.decorators import command_wrapper
from manpage_cli.commands.state import get_state
from manpage_cli.services.generation_service import GenerationService

app = typer.Typer()


class ConverterBackend(str, Enum):
    external = "external"
    template = "template"


@app.command()
@command_wrapper
def generate(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Command or script to document"),
    readme: str | None = typer.Argument(
        None, help="README to convert (default: search next to TARGET)"
    ),
    install: bool = typer.Option(
        False, "--install", "-i", help="Install the page after generating it"
    ),
    user: bool = typer.Option(
        False, "--user", help="Install into the per-user man directory even as root"
    ),
    converter: ConverterBackend | None = typer.Option(
        None,
        "--converter",
        help="Converter to use (default from config: external AI command)",
    ),
) -> None:
    """Generate TARGET.1 from a README, next to the README.

    Examples:
      manpage generate ./mytool
      manpage generate ./mytool docs/README.md
      manpage generate -i mytool
    """
    state = get_state(ctx)
    service = GenerationService(state.config, state.reporter)
    service.generate(
        target,
        readme,
        install=install,
        force_user=user,
        backend=converter.value if converter else None,
    )
