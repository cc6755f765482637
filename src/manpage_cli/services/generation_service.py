"""The generate and install pipelines.

generate: resolve target and README, convert, check the title header,
write ``<target>.1`` next to the README, lint it, and optionally install.
Nothing is written unless the converter succeeded and its output carries
a ``.TH`` line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from manpage_cli.models.config_models import AppConfig
from manpage_cli.models.exceptions import (
    NotFoundError,
    PageWriteError,
    ValidationError,
)
from manpage_cli.models.validation import ManPage, ValidationReport
from manpage_cli.services import converter as converters
from manpage_cli.services.installer import install_page
from manpage_cli.services.resolver import (
    PAGE_SUFFIX,
    determine_install_context,
    generated_page_path,
    resolve_readme,
    resolve_target,
)
from manpage_cli.services.validator import (
    check_content,
    check_section_order,
    has_title_header,
    validate_structure,
)
from manpage_cli.utils.logger import get_logger
from manpage_cli.utils.ui.reporter import Reporter


@dataclass
class GenerationResult:
    """What a generate run produced."""

    target: Path
    readme: Path
    page: Path
    report: ValidationReport
    installed: Path | None = None


class GenerationService:
    """Run the generate and install pipelines with one configuration."""

    def __init__(
        self,
        config: AppConfig,
        reporter: Reporter | None = None,
        converter: converters.Converter | None = None,
    ):
        self.config = config
        self.reporter = reporter or Reporter()
        self.converter = converter
        self.logger = get_logger("generate")

    def _converter_for(self, target: Path, backend: str | None) -> converters.Converter:
        if self.converter is not None:
            return self.converter
        return converters.build_converter(target.name, self.config.converter, backend)

    def generate(
        self,
        target: str | os.PathLike[str],
        readme: str | os.PathLike[str] | None = None,
        install: bool = False,
        force_user: bool = False,
        backend: str | None = None,
    ) -> GenerationResult:
        """Generate a man page for ``target`` and optionally install it.

        Raises:
            NotFoundError: If the target or README is missing
            InvalidTargetError: If the target is not a readable regular file
            ConversionFailure: If the converter fails or prints nothing
            ValidationError: If the output has no title header
            PageWriteError: If the page cannot be written
            InstallError: If installing was requested and failed
        """
        target_path = resolve_target(target, self.config.resolver)
        readme_path = resolve_readme(target_path, readme, self.config.resolver)
        page_path = generated_page_path(target_path, readme_path)

        self.reporter.info(f"Generating man page for {target_path.name}")
        self.reporter.detail(f"Target: {target_path}")
        self.reporter.detail(f"README: {readme_path}")

        try:
            readme_text = readme_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise NotFoundError(f"Cannot read {readme_path}: {e.strerror}") from e

        text = self._converter_for(target_path, backend).convert(readme_text)
        if not has_title_header(text):
            self.logger.error("converter output for %s has no .TH line", target_path)
            raise ValidationError(
                f"Generated page for {target_path.name} has no title header (.TH)"
            )

        page = ManPage(path=page_path, text=text)
        report = validate_structure(page)
        report.extend(check_section_order(page))
        report.extend(check_content(page))

        try:
            page_path.write_text(text, encoding="utf-8")
        except OSError as e:
            self.logger.error("writing %s failed: %s", page_path, e)
            raise PageWriteError(
                f"Cannot write {page_path}: {e.strerror or e}"
            ) from e
        self.logger.info("wrote %s", page_path)
        for finding in report.findings:
            self.reporter.warning(f"{page_path.name}: {finding.message}")
        self.reporter.success(f"Created {page_path}")

        result = GenerationResult(
            target=target_path, readme=readme_path, page=page_path, report=report
        )
        if install:
            result.installed = self.install_page(page_path, force_user)
        return result

    def locate_page(self, target: str | os.PathLike[str]) -> Path:
        """Find the generated page for ``target``.

        Looks next to the target's README first and then next to the target.

        Raises:
            NotFoundError: If no generated page exists
        """
        target_path = resolve_target(target, self.config.resolver)
        candidates = []
        try:
            readme = resolve_readme(target_path, settings=self.config.resolver)
        except NotFoundError:
            pass
        else:
            candidates.append(generated_page_path(target_path, readme))
        candidates.append(target_path.parent / f"{target_path.name}{PAGE_SUFFIX}")

        for candidate in candidates:
            if candidate.is_file():
                return candidate
        raise NotFoundError(
            f"No man page found for {target_path.name}; "
            f"run 'manpage generate {target}' first"
        )

    def install(
        self, target: str | os.PathLike[str], force_user: bool = False
    ) -> Path:
        """Install the previously generated page for ``target``."""
        return self.install_page(self.locate_page(target), force_user)

    def install_page(self, page: Path, force_user: bool = False) -> Path:
        context = determine_install_context(force_user)
        self.reporter.detail(f"Install context: {context.value}")
        destination = install_page(page, context, self.config.install, self.reporter)
        self.reporter.success(f"Installed {destination}")
        return destination
