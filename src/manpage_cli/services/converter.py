"""README to troff converters.

The real work is delegated to an external AI command; ``TemplateConverter``
is a deterministic stand-in that needs nothing but the README itself.
"""

from __future__ import annotations

import re
import subprocess
from datetime import date
from typing import Protocol

from manpage_cli import __version__
from manpage_cli.models.config_models import ConverterSettings
from manpage_cli.models.exceptions import ConversionFailure
from manpage_cli.services.validator import SECTION_ORDER
from manpage_cli.utils.logger import get_logger

_FENCE_RE = re.compile(r"^\s*```[\w+-]*\s*$")


class Converter(Protocol):
    """Anything that turns README markdown into man(7) troff."""

    def convert(self, readme_text: str) -> str: ...


def strip_code_fences(text: str) -> str:
    """Drop a markdown code fence wrapped around the whole output."""
    lines = text.strip().splitlines()
    if lines and _FENCE_RE.match(lines[0]):
        lines = lines[1:]
        if lines and _FENCE_RE.match(lines[-1]):
            lines = lines[:-1]
    return "\n".join(lines).strip()


def title_date(today: date | None = None) -> str:
    """Month and year as conventionally shown in a .TH line."""
    return (today or date.today()).strftime("%B %Y")


class ExternalConverter:
    """Run an AI command line tool with the README on stdin."""

    def __init__(
        self,
        command_name: str,
        settings: ConverterSettings | None = None,
        version: str = __version__,
        today: date | None = None,
    ):
        self.command_name = command_name
        self.settings = settings or ConverterSettings()
        self.version = version
        self.today = today

    def build_prompt(self) -> str:
        try:
            return self.settings.prompt.format(
                name=self.command_name,
                title=self.command_name.upper(),
                section=1,
                date=title_date(self.today),
                version=self.version,
                sections=", ".join(SECTION_ORDER),
            )
        except (KeyError, IndexError, ValueError) as e:
            raise ConversionFailure(f"Invalid converter prompt template: {e}") from e

    def argv(self) -> list[str]:
        return [self.settings.command, *self.settings.args, self.build_prompt()]

    def convert(self, readme_text: str) -> str:
        """Return troff text produced by the external command.

        Raises:
            ConversionFailure: If the command is missing, fails, times out
                or prints nothing
        """
        argv = self.argv()
        command = self.settings.command
        get_logger("converter").debug(
            "running converter %s (%d bytes of README)", command, len(readme_text)
        )
        try:
            result = subprocess.run(
                argv,
                input=readme_text,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.settings.timeout,
                check=False,
            )
        except FileNotFoundError:
            raise ConversionFailure(f"Converter not found: {command}") from None
        except subprocess.TimeoutExpired as e:
            raise ConversionFailure(
                f"Converter {command} timed out after {e.timeout} seconds"
            ) from e

        if result.returncode != 0:
            raise ConversionFailure(
                f"Converter {command} exited with status {result.returncode}",
                detail=result.stderr or None,
            )

        text = strip_code_fences(result.stdout)
        if not text:
            raise ConversionFailure(f"Converter {command} returned no output")
        return text + "\n"


# README heading -> man section
_SECTION_ALIASES = {
    "USAGE": "SYNOPSIS",
    "SYNOPSIS": "SYNOPSIS",
    "OVERVIEW": "DESCRIPTION",
    "DESCRIPTION": "DESCRIPTION",
    "ABOUT": "DESCRIPTION",
    "FLAGS": "OPTIONS",
    "OPTIONS": "OPTIONS",
    "EXAMPLE": "EXAMPLES",
    "EXAMPLES": "EXAMPLES",
    "ENVIRONMENT VARIABLES": "ENVIRONMENT",
    "AUTHORS": "AUTHOR",
    "LICENSE": "COPYRIGHT",
    "LICENCE": "COPYRIGHT",
}

_RANK = {name: rank for rank, name in enumerate(SECTION_ORDER)}
_BULLET_RE = re.compile(r"^\s*[-*+]\s+(.*)$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")


def escape_troff(text: str) -> str:
    """Escape backslashes and protect a leading control character."""
    text = text.replace("\\", "\\e")
    if text.startswith((".", "'")):
        text = "\\&" + text
    return text


def inline_markdown(text: str) -> str:
    """Escape a line of markdown and turn its inline markup into fonts."""
    text = escape_troff(text)
    text = re.sub(r"\[([^\]]+)\]\(([^)]+)\)", r"\1 <\2>", text)
    text = re.sub(r"\*\*(.+?)\*\*", r"\\fB\1\\fR", text)
    text = re.sub(r"`([^`]+)`", r"\\fB\1\\fR", text)
    text = re.sub(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])", r"\\fI\1\\fR", text)
    return text


class TemplateConverter:
    """Deterministic markdown to man(7) conversion.

    ``#`` is the title, its first paragraph becomes the NAME description,
    ``##`` headings become sections (mapped onto conventional names and
    ordered conventionally) and ``###`` headings become subsections.
    """

    def __init__(
        self,
        command_name: str,
        version: str = __version__,
        today: date | None = None,
    ):
        self.command_name = command_name
        self.version = version
        self.today = today

    def convert(self, readme_text: str) -> str:
        summary, sections = self._split(readme_text)

        out = [
            f'.TH "{self.command_name.upper()}" 1 "{title_date(self.today)}" '
            f'"{self.command_name} {self.version}" "User Commands"',
            ".SH NAME",
            f"{escape_troff(self.command_name)} \\- "
            + inline_markdown(summary or f"manual page for {self.command_name}"),
        ]

        if not any(name == "SYNOPSIS" for name, _ in sections):
            sections.append(("SYNOPSIS", [f"**{self.command_name}** [*options*]"]))

        for name, body in self._ordered(sections):
            out.append(f".SH {name}")
            out.extend(self._body(body))
        return "\n".join(out) + "\n"

    def _split(self, readme_text: str) -> tuple[str, list[tuple[str, list[str]]]]:
        summary = ""
        sections: list[tuple[str, list[str]]] = []
        current: list[str] = []
        sections.append(("DESCRIPTION", current))
        in_code = False

        for line in readme_text.splitlines():
            if _FENCE_RE.match(line):
                in_code = not in_code
                current.append(line)
                continue
            heading = None if in_code else _HEADING_RE.match(line)
            if heading and len(heading.group(1)) == 1:
                continue
            if heading and len(heading.group(1)) == 2:
                name = heading.group(2).strip().upper()
                name = _SECTION_ALIASES.get(name, name)
                current = next((body for n, body in sections if n == name), None)
                if current is None:
                    current = []
                    sections.append((name, current))
                continue
            if not summary and not in_code and not heading and line.strip():
                if len(sections) == 1 and not any(s.strip() for s in current):
                    summary = line.strip()
                    continue
            current.append(line)

        sections = [(name, body) for name, body in sections if any(s.strip() for s in body)]
        return summary, sections

    @staticmethod
    def _ordered(sections):
        description = _RANK["DESCRIPTION"]

        def rank(item):
            return _RANK.get(item[0], description + 0.5)

        return sorted(sections, key=rank)

    @staticmethod
    def _body(lines: list[str]) -> list[str]:
        out: list[str] = []
        in_code = False
        paragraph_open = False
        for line in lines:
            if _FENCE_RE.match(line):
                if in_code:
                    out.extend([".fi", ".RE"])
                else:
                    out.extend([".PP", ".RS 4", ".nf"])
                in_code = not in_code
                paragraph_open = False
                continue
            if in_code:
                out.append(escape_troff(line))
                continue
            if not line.strip():
                paragraph_open = False
                continue
            heading = _HEADING_RE.match(line)
            if heading:
                out.append(f".SS {escape_troff(heading.group(2))}")
                paragraph_open = False
                continue
            bullet = _BULLET_RE.match(line)
            if bullet:
                out.extend([".IP \\(bu 2", inline_markdown(bullet.group(1))])
                paragraph_open = True
                continue
            if not paragraph_open:
                out.append(".PP")
                paragraph_open = True
            out.append(inline_markdown(line.strip()))
        if in_code:
            out.extend([".fi", ".RE"])
        return out


def build_converter(
    command_name: str,
    settings: ConverterSettings | None = None,
    backend: str | None = None,
) -> Converter:
    """Pick the converter named by ``backend`` or the configured default."""
    settings = settings or ConverterSettings()
    choice = backend or settings.backend
    if choice == "template":
        return TemplateConverter(command_name)
    if choice == "external":
        return ExternalConverter(command_name, settings)
    raise ValueError(f"Unknown converter backend: {choice}")
