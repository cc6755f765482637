"""Command 'version' of manpage-cli"""

import typer

from manpage_cli import __version__
from manpage_cli.utils.ui.console import get_console

app = typer.Typer()


@app.command()
def version() -> None:
    """Show version information"""
    get_console().print(f"manpage {__version__}")
