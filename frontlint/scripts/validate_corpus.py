"""Validate the front matter of every article in the corpus.

Prints one line per violation (or a JSON report with ``--format json``) and
exits with status 1 when any error-level violation or duplicate url exists.

Configuration:
- Corpus roots come from positional arguments or FRONTLINT_ROOTS
  (``os.pathsep`` separated, default ``content``).
- --redirects FILE or FRONTLINT_REDIRECTS points at a Netlify-style TOML file
  whose ``[[redirects]]`` rules are checked against article urls.
- --workers N or FRONTLINT_WORKERS sets the size of the validation thread pool.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Sequence

from frontlint.models.errors import FrontlintError
from frontlint.models.report import CorpusReport
from frontlint.services.corpus import CorpusValidator
from frontlint.services.redirects import Redirect, load_redirects

LOGGER = logging.getLogger("frontlint.validate")


def configure_logging() -> None:
    """Configure root logging based on ``FRONTLINT_LOG_LEVEL``."""
    level_name = os.getenv("FRONTLINT_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def default_roots() -> list[Path]:
    raw = os.getenv("FRONTLINT_ROOTS") or "content"
    return [Path(part) for part in raw.split(os.pathsep) if part.strip()]


def resolve_redirects(value: str | None) -> list[Redirect]:
    """Load redirect rules, turning configuration problems into ``SystemExit``."""
    if not value:
        return []
    try:
        return load_redirects(Path(value))
    except (OSError, FrontlintError, ValueError) as exc:
        raise SystemExit(f"Unable to load redirects from {value}: {exc}") from exc


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate article front matter.")
    parser.add_argument(
        "roots",
        nargs="*",
        type=Path,
        help="Corpus directories or files (default from FRONTLINT_ROOTS or 'content').",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format written to stdout.",
    )
    parser.add_argument(
        "--redirects",
        default=os.getenv("FRONTLINT_REDIRECTS"),
        help="Netlify-style TOML file with [[redirects]] rules (default from FRONTLINT_REDIRECTS).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Validation threads (default from FRONTLINT_WORKERS or 1).",
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also validate files inside hidden directories.",
    )
    return parser.parse_args(argv)


def format_text_report(report: CorpusReport) -> list[str]:
    lines: list[str] = []
    for document in report.documents:
        for violation in document.violations:
            field = f" [{violation.field}]" if violation.field else ""
            lines.append(
                f"{document.source}: {violation.severity.value}: {violation.kind.value}{field}: {violation.message}"
            )
    for conflict in report.conflicts:
        lines.append(f"duplicate url '{conflict.url}': {', '.join(conflict.sources)}")
    lines.append(
        f"{len(report.documents)} article(s), {report.error_count} error(s), "
        f"{report.warning_count} warning(s), {len(report.conflicts)} url conflict(s)"
    )
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = _parse_args(argv)
    roots = args.roots or default_roots()
    redirects = resolve_redirects(args.redirects)

    validator = CorpusValidator(redirects=redirects, workers=args.workers)
    LOGGER.info("VALIDATE_START roots=%s workers=%d", ", ".join(map(str, roots)), validator.workers)
    report = validator.validate_roots(roots, skip_hidden=not args.include_hidden)

    if args.format == "json":
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        for line in format_text_report(report):
            print(line)

    if not report.ok:
        LOGGER.error("Front-matter validation failed")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
