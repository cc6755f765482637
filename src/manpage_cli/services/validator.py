"""Man page validation.

Structural checks work on the page text alone so a converter's output can
be checked before anything is written. The render check hands the text to
an external troff processor and reports whatever it complains about.
"""

from __future__ import annotations

import re
import shlex
import subprocess

from manpage_cli.models.validation import Finding, ManPage, ValidationReport
from manpage_cli.utils.logger import get_logger

# Conventional order of man page sections (man-pages(7)).
SECTION_ORDER: tuple[str, ...] = (
    "NAME",
    "SYNOPSIS",
    "DESCRIPTION",
    "OPTIONS",
    "ARGUMENTS",
    "EXAMPLES",
    "EXIT STATUS",
    "RETURN VALUE",
    "ERRORS",
    "ENVIRONMENT",
    "FILES",
    "VERSIONS",
    "CONFORMING TO",
    "NOTES",
    "BUGS",
    "SEE ALSO",
    "HISTORY",
    "AUTHOR",
    "COPYRIGHT",
)

_SECTION_RANK = {name: rank for rank, name in enumerate(SECTION_ORDER)}
_SECTION_RANK["AUTHORS"] = _SECTION_RANK["AUTHOR"]

_TITLE_RE = re.compile(r"^\.TH(\s|$)")
_SECTION_RE = re.compile(r"^\.SH(?:\s+(.*))?$")


def has_title_header(text: str) -> bool:
    """Return True if any line is a ``.TH`` title header."""
    return any(_TITLE_RE.match(line) for line in text.splitlines())


def _section_name(line: str) -> str | None:
    match = _SECTION_RE.match(line)
    if not match or not match.group(1):
        return None
    return match.group(1).replace('"', "").strip().upper() or None


def section_headers(page: ManPage) -> list[str]:
    """Return section names in file order, unquoted and upper-cased."""
    return [name for name in map(_section_name, page.lines) if name]


def validate_structure(page: ManPage) -> ValidationReport:
    """Check the required and recommended structural markers."""
    report = ValidationReport(page=str(page.path))
    headers = set(section_headers(page))

    if not has_title_header(page.text):
        report.add_error("missing title header")
    if "NAME" not in headers:
        report.add_error("missing NAME section")
    if "SYNOPSIS" not in headers:
        report.add_warning("missing SYNOPSIS section")
    if "DESCRIPTION" not in headers:
        report.add_warning("missing DESCRIPTION section")

    return report


def check_section_order(page: ManPage) -> list[Finding]:
    """Warn about each section that appears after a later-ranked one.

    Sections outside the conventional list are ignored.
    """
    findings = []
    highest = -1
    for name in section_headers(page):
        rank = _SECTION_RANK.get(name)
        if rank is None:
            continue
        if rank < highest:
            findings.append(
                Finding(
                    severity="warning",
                    message=f"section '{name}' appears out of standard order",
                )
            )
        highest = max(highest, rank)
    return findings


def title_name(page: ManPage) -> str | None:
    """Return the page name from the ``.TH`` line, if there is one."""
    for line in page.lines:
        if not _TITLE_RE.match(line):
            continue
        try:
            parts = shlex.split(line)
        except ValueError:
            parts = line.split()
        return parts[1] if len(parts) > 1 else ""
    return None


def _name_line(page: ManPage) -> str | None:
    lines = page.lines
    for index, line in enumerate(lines):
        if _section_name(line) != "NAME":
            continue
        for following in lines[index + 1 :]:
            if following.startswith(".SH"):
                return None
            if following.strip() and not following.startswith('.\\"'):
                return following
        return None
    return None


def check_content(page: ManPage) -> list[Finding]:
    """Consistency checks between the title header and the NAME section."""
    findings = []
    name = title_name(page)

    if name == "":
        findings.append(
            Finding(
                severity="error",
                message="cannot extract command name from title header",
            )
        )
    elif name is not None:
        name_line = _name_line(page)
        if name_line is not None:
            plain = name_line.replace("\\", "").lower()
            if name.replace("\\", "").lower() not in plain:
                findings.append(
                    Finding(
                        severity="warning",
                        message=f"NAME section doesn't reference command '{name}'",
                    )
                )

    trailing = sum(1 for line in page.lines if line != line.rstrip())
    if trailing:
        findings.append(
            Finding(
                severity="warning",
                message=f"{trailing} line(s) contain trailing whitespace",
            )
        )
    return findings


def render_check(page: ManPage, command: list[str]) -> Finding | None:
    """Run the page through an external renderer.

    Returns an error finding if the renderer fails or is missing, a warning
    if it succeeds but prints diagnostics, and None on a clean render.
    """
    get_logger("validator").debug("render check: %s < %s", command, page.path)
    try:
        result = subprocess.run(
            command,
            input=page.text,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError:
        return Finding(
            severity="error", message=f"renderer not found: {command[0]}"
        )

    diagnostics = result.stderr.strip()
    if result.returncode != 0:
        get_logger("validator").warning(
            "render failed for %s (exit %d)", page.path, result.returncode
        )
        return Finding(
            severity="error", message="render failed", detail=result.stderr or None
        )
    if diagnostics:
        return Finding(
            severity="warning", message="renderer diagnostics", detail=result.stderr
        )
    return None


def validate_page(
    page: ManPage, renderer_command: list[str] | None = None
) -> ValidationReport:
    """Run every check on a page. A renderer of None skips the render check."""
    report = validate_structure(page)
    report.extend(check_section_order(page))
    report.extend(check_content(page))
    if renderer_command:
        finding = render_check(page, renderer_command)
        if finding is not None:
            report.findings.append(finding)
    return report
