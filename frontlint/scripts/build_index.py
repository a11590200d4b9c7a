"""Write a JSON index of article metadata for feed builders and search.

Only articles that pass validation are indexed. The run fails when the corpus
has errors unless ``--allow-invalid`` is given.
"""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Sequence

from frontlint.scripts.validate_corpus import configure_logging, default_roots, resolve_redirects
from frontlint.services.corpus import CorpusValidator
from frontlint.services.indexer import DEFAULT_SUMMARY_LENGTH, build_index, write_index

LOGGER = logging.getLogger("frontlint.index")


def _default_summary_length() -> int:
    value = os.getenv("FRONTLINT_SUMMARY_LENGTH")
    if not value:
        return DEFAULT_SUMMARY_LENGTH
    if not value.isdigit():
        LOGGER.warning("Ignoring invalid summary length in FRONTLINT_SUMMARY_LENGTH: %r", value)
        return DEFAULT_SUMMARY_LENGTH
    return int(value)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a JSON index of article metadata.")
    parser.add_argument("roots", nargs="*", type=Path, help="Corpus directories or files.")
    parser.add_argument("--output", "-o", type=Path, required=True, help="Destination JSON file.")
    parser.add_argument(
        "--summary-length",
        type=int,
        default=_default_summary_length(),
        help="Words used for excerpts derived from the body (default from FRONTLINT_SUMMARY_LENGTH or 20).",
    )
    parser.add_argument(
        "--redirects",
        default=os.getenv("FRONTLINT_REDIRECTS"),
        help="Netlify-style TOML file with [[redirects]] rules.",
    )
    parser.add_argument("--workers", type=int, default=None, help="Validation threads.")
    parser.add_argument(
        "--allow-invalid",
        action="store_true",
        help="Write the index even when some articles fail validation.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = _parse_args(argv)
    roots = args.roots or default_roots()

    validator = CorpusValidator(redirects=resolve_redirects(args.redirects), workers=args.workers)
    report = validator.validate_roots(roots)

    if not report.ok and not args.allow_invalid:
        for document in report.documents:
            for violation in document.errors:
                LOGGER.error("%s: %s", document.source, violation.message)
        LOGGER.error("Refusing to write an index for an invalid corpus (use --allow-invalid to override)")
        return 1

    entries = build_index(report, summary_length=args.summary_length)
    write_index(entries, args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
