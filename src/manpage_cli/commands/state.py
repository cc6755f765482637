"""Per-invocation state shared by all commands through ``ctx.obj``."""

from __future__ import annotations

from dataclasses import dataclass, field

import typer

from manpage_cli.models.config_models import AppConfig, OutputSettings
from manpage_cli.services.config_service import get_config_service
from manpage_cli.utils.ui.reporter import Reporter


@dataclass
class AppState:
    """Output settings and reporter built by the root callback."""

    output: OutputSettings = field(default_factory=OutputSettings)
    reporter: Reporter | None = None

    def __post_init__(self):
        if self.reporter is None:
            self.reporter = Reporter(self.output)

    @property
    def config(self) -> AppConfig:
        return get_config_service().config


def get_state(ctx: typer.Context | None) -> AppState:
    """Return the state set up by the root callback, or a default one.

    A command app invoked on its own (as in tests) has no root callback.
    """
    if ctx is not None:
        node = ctx
        while node is not None:
            if isinstance(node.obj, AppState):
                return node.obj
            node = node.parent
        state = AppState()
        ctx.obj = state
        return state
    return AppState()
