"""Command 'install' of manpage-cli"""

import typer

from manpage_cli.commands.decorators import command_wrapper
from manpage_cli.commands.state import get_state
from manpage_cli.services.generation_service import GenerationService

app = typer.Typer()


@app.command()
@command_wrapper
def install(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Command whose generated page to install"),
    user: bool = typer.Option(
        False, "--user", help="Install into the per-user man directory even as root"
    ),
) -> None:
    """Install a previously generated TARGET.1.

    Root installs to the system man directory and refreshes the man
    database; everyone else installs to ~/.local/share/man/man1.
    """
    state = get_state(ctx)
    GenerationService(state.config, state.reporter).install(target, force_user=user)
