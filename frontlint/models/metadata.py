"""Domain model for the front-matter record that prefaces every article."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import re
from typing import Any, Sequence


DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} [+-]\d{2}:?\d{2}$")
_URL_SAFE_RE = re.compile(r"^[A-Za-z0-9\-._~/]+$")


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a ``YYYY-MM-DD HH:MM:SS ±HHMM`` value into an offset-aware datetime."""

    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _TIMESTAMP_RE.match(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT)
    except ValueError:
        return None


def format_timestamp(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def listify_strings(value: Any) -> list[str] | None:
    """Normalise a value into a list of non-empty strings.

    A bare string becomes a one-element list. Returns ``None`` when the value is
    neither a string nor a sequence so callers can report a type problem.
    """

    if isinstance(value, str):
        trimmed = value.strip()
        return [trimmed] if trimmed else []

    if isinstance(value, Sequence):
        result: list[str] = []
        for item in value:
            if isinstance(item, (int, float)) and not isinstance(item, bool):
                item = str(item)
            if isinstance(item, str):
                trimmed = item.strip()
                if trimmed:
                    result.append(trimmed)
        return result

    return None


def is_url_safe(value: str) -> bool:
    return bool(_URL_SAFE_RE.match(value))


def normalise_url(value: str) -> str:
    """Return the comparison key for a slug: no surrounding slashes, lower case."""

    return value.strip().strip("/").lower()


@dataclass(slots=True)
class ArticleMetadata:
    """Normalised representation of an article's front matter."""

    title: str
    categories: list[str]
    date: datetime
    authors: list[str]
    url: str
    modified: datetime | None = None
    excerpt: str | None = None
    image: str | None = None
    tags: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def url_key(self) -> str:
        return normalise_url(self.url)

    @property
    def last_updated(self) -> datetime:
        return self.modified or self.date

    def to_front_matter(self) -> dict[str, Any]:
        """Return the mapping written back into a document's front matter."""

        payload: dict[str, Any] = {
            "title": self.title,
            "categories": list(self.categories),
            "date": format_timestamp(self.date),
        }
        if self.modified is not None:
            payload["modified"] = format_timestamp(self.modified)
        payload["authors"] = list(self.authors)
        if self.excerpt is not None:
            payload["excerpt"] = self.excerpt
        if self.image is not None:
            payload["image"] = self.image
        if self.tags:
            payload["tags"] = list(self.tags)
        payload["url"] = self.url
        for key, value in self.extra.items():
            payload.setdefault(key, value)
        return payload

    def to_index_entry(self) -> dict[str, Any]:
        """Return a JSON friendly mapping used by the corpus index."""

        return {
            "title": self.title,
            "url": self.url,
            "categories": list(self.categories),
            "authors": list(self.authors),
            "tags": list(self.tags),
            "date": self.date.isoformat(),
            "modified": self.modified.isoformat() if self.modified else None,
            "excerpt": self.excerpt,
            "image": self.image,
        }
