#!/usr/bin/env python3
"""Generate the man page for manpage itself from README.md.

Usage:
    uv run scripts/generate_man.py [--output-dir DIR]

Uses the built-in template converter so no AI tool is needed. The
generated file is written to man/man1/manpage.1 by default.
"""

import argparse
import sys
from pathlib import Path

# Allow running from repo root or scripts/ directory
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root / "src"))

from manpage_cli import __version__
from manpage_cli.models.validation import ManPage
from manpage_cli.services.converter import TemplateConverter
from manpage_cli.services.validator import validate_page


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate the manpage man page.")
    parser.add_argument(
        "--output-dir",
        default=str(repo_root / "man" / "man1"),
        help="Directory to write the generated man page into (default: man/man1/)",
    )
    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    readme = (repo_root / "README.md").read_text(encoding="utf-8")
    text = TemplateConverter("manpage", version=__version__).convert(readme)

    generated = output_dir / "manpage.1"
    generated.write_text(text, encoding="utf-8")

    report = validate_page(ManPage(path=generated, text=text))
    for finding in report.findings:
        print(f"{finding}", file=sys.stderr)
    if not report.ok:
        sys.exit(1)
    print(f"Man page written to: {generated}")


if __name__ == "__main__":
    main()
