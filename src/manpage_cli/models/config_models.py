"""Configuration models for manpage-cli.

Every external collaborator (converter, renderer, database updater) and
both install locations are configurable, so the defaults below only
describe a typical Linux machine with ``claude`` and ``groff`` installed.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_PROMPT = """\
Convert the README below into a UNIX man page for the command '{name}' \
(section {section}). Output ONLY valid troff using the man macro package, \
with no markdown fences and no commentary.

The first line must be a title header of the form:
.TH {title} {section} "{date}" "{name} {version}" "User Commands"

Use .SH headers in this order, omitting any the README gives no material for:
{sections}

The NAME section must be a single line: {name} \\- <short description>.
"""


class ConverterSettings(BaseModel):
    """External README-to-troff converter."""

    backend: Literal["external", "template"] = Field(default="external")
    command: str = Field(default="claude")
    args: list[str] = Field(default_factory=lambda: ["--print"])
    prompt: str = Field(default=DEFAULT_PROMPT)
    timeout: float | None = Field(default=None, description="Seconds, or None")

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("converter command cannot be empty")
        return v.strip()


class RendererSettings(BaseModel):
    """External troff renderer used to syntax-check pages."""

    command: list[str] = Field(
        default_factory=lambda: ["groff", "-ww", "-t", "-man", "-Tascii"]
    )
    enabled: bool = Field(default=True)


class InstallSettings(BaseModel):
    """Install locations and man database updaters."""

    system_dir: str = Field(default="/usr/local/share/man/man1")
    user_dir: str = Field(default="~/.local/share/man/man1")
    mode: int = Field(default=0o644)
    database_updaters: list[str] = Field(
        default_factory=lambda: ["mandb", "makewhatis"]
    )


class ResolverSettings(BaseModel):
    """README lookup next to the target."""

    readme_names: list[str] = Field(
        default_factory=lambda: [
            "README.md",
            "readme.md",
            "Readme.md",
            "README.markdown",
            "README",
        ]
    )
    search_path: bool = Field(
        default=True, description="Look bare command names up on PATH"
    )


class AppConfig(BaseModel):
    """Main configuration."""

    converter: ConverterSettings = Field(default_factory=ConverterSettings)
    renderer: RendererSettings = Field(default_factory=RendererSettings)
    install: InstallSettings = Field(default_factory=InstallSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)


class OutputSettings(BaseModel):
    """Per-invocation output settings built from the global CLI flags."""

    verbosity: Literal["quiet", "normal", "verbose"] = Field(default="normal")
    color: bool = Field(default=True)

    @classmethod
    def from_flags(
        cls, verbose: bool = False, quiet: bool = False, color: bool = True
    ) -> OutputSettings:
        """Combine -v/-q; quiet wins when both are given."""
        if quiet:
            verbosity = "quiet"
        elif verbose:
            verbosity = "verbose"
        else:
            verbosity = "normal"
        return cls(verbosity=verbosity, color=color)

    @property
    def quiet(self) -> bool:
        return self.verbosity == "quiet"

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"
