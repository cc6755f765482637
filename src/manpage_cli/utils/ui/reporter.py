"""User-facing progress and diagnostics.

A Reporter is built once per invocation from OutputSettings and handed to
whatever needs to talk to the user, so verbosity is never global state.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from manpage_cli.models.config_models import OutputSettings
from manpage_cli.utils.ui.console import get_console


class Reporter:
    """Print messages according to the invocation's verbosity.

    ``info`` and ``success`` are suppressed by ``--quiet``; ``detail`` is only
    shown with ``--verbose``; ``warning`` and ``error`` always go to stderr.
    """

    def __init__(
        self,
        settings: OutputSettings | None = None,
        out: Console | None = None,
        err: Console | None = None,
    ):
        self.settings = settings or OutputSettings()
        self.out = out or get_console(color=self.settings.color)
        self.err = err or get_console(stderr=True, color=self.settings.color)

    def info(self, message: str) -> None:
        if not self.settings.quiet:
            self.out.print(f"[cyan]◉[/cyan] {escape(message)}")

    def detail(self, message: str) -> None:
        if self.settings.verbose:
            self.out.print(f"[dim]{escape(message)}[/dim]")

    def success(self, message: str) -> None:
        if not self.settings.quiet:
            self.out.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str, detail: str | None = None) -> None:
        self.err.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")
        if detail:
            self._print_detail(detail)

    def error(self, message: str, detail: str | None = None) -> None:
        self.err.print(f"[bold red]Error:[/bold red] {escape(message)}")
        if detail:
            self._print_detail(detail)

    def _print_detail(self, detail: str) -> None:
        for line in detail.rstrip().splitlines():
            self.err.print(f"    {escape(line)}")
