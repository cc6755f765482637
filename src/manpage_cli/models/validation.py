"""Man page and validation result models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from manpage_cli.models.exceptions import NotFoundError


class Finding(BaseModel):
    """One validation problem."""

    severity: Literal["error", "warning"]
    message: str
    detail: str | None = Field(
        default=None, description="Verbatim diagnostic text from an external tool"
    )

    def __str__(self) -> str:
        label = "Error" if self.severity == "error" else "Warning"
        return f"{label}: {self.message}"


class ValidationReport(BaseModel):
    """Findings for one page. Warnings never fail validation."""

    page: str
    findings: list[Finding] = Field(default_factory=list)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == "error"]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == "warning"]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def ok(self) -> bool:
        return self.error_count == 0

    def add_error(self, message: str, detail: str | None = None) -> None:
        self.findings.append(Finding(severity="error", message=message, detail=detail))

    def add_warning(self, message: str, detail: str | None = None) -> None:
        self.findings.append(
            Finding(severity="warning", message=message, detail=detail)
        )

    def extend(self, findings: list[Finding]) -> None:
        self.findings.extend(findings)

    def summary(self) -> dict:
        return {
            "page": self.page,
            "ok": self.ok,
            "errors": self.error_count,
            "warnings": self.warning_count,
            "findings": [f.model_dump(exclude_none=True) for f in self.findings],
        }


class ManPage(BaseModel):
    """A man page's text, with the file it came from or is bound for."""

    path: Path
    text: str

    @classmethod
    def from_file(cls, path: Path) -> ManPage:
        """Read a page from disk.

        Raises:
            NotFoundError: If the file does not exist or cannot be read
        """
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError as e:
            raise NotFoundError(f"Man page not found: {path}") from e
        except IsADirectoryError as e:
            raise NotFoundError(f"Not a man page file: {path}") from e
        except OSError as e:
            raise NotFoundError(f"Cannot read {path}: {e.strerror}") from e
        return cls(path=path, text=text)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()
