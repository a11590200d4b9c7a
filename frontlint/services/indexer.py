"""Build a JSON index of validated article metadata."""

from __future__ import annotations

from datetime import datetime
import json
import logging
from pathlib import Path
from typing import Any

from frontlint.models.report import CorpusReport
from frontlint.utils.text import markdown_to_plain_text, truncate_words

LOGGER = logging.getLogger(__name__)

DEFAULT_SUMMARY_LENGTH = 20


def build_index(report: CorpusReport, *, summary_length: int = DEFAULT_SUMMARY_LENGTH) -> list[dict[str, Any]]:
    """Return one entry per valid article, newest first.

    Articles without an ``excerpt``/``description`` get one derived from the
    first ``summary_length`` words of their body.
    """

    entries: list[tuple[datetime, dict[str, Any]]] = []
    for document in report.documents:
        if not document.ok or document.metadata is None:
            continue
        metadata = document.metadata
        entry = metadata.to_index_entry()
        entry["source"] = document.source
        if not entry["excerpt"]:
            excerpt = truncate_words(markdown_to_plain_text(document.body), summary_length)
            entry["excerpt"] = excerpt or None
        entries.append((metadata.date, entry))

    entries.sort(key=lambda item: (item[0], item[1]["url"]), reverse=True)
    skipped = len(report.documents) - len(entries)
    if skipped:
        LOGGER.info("Left %d invalid article(s) out of the index", skipped)
    return [entry for _, entry in entries]


def write_index(entries: list[dict[str, Any]], path: Path) -> Path:
    """Write ``entries`` to ``path`` as UTF-8 JSON and return the path."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(entries, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    LOGGER.info("Wrote %d index entries to %s", len(entries), path)
    return path
