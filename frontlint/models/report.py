"""Data structures describing validation outcomes for documents and the corpus."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from frontlint.models.metadata import ArticleMetadata


class ViolationKind(str, Enum):
    MISSING_FIELD = "missing_field"
    MALFORMED_DATE = "malformed_date"
    NON_MONOTONIC_MODIFIED = "non_monotonic_modified"
    DUPLICATE_URL = "duplicate_url"
    EMPTY_LIST = "empty_list"
    MALFORMED_FRONT_MATTER = "malformed_front_matter"
    INVALID_FIELD = "invalid_field"
    SHADOWED_BY_REDIRECT = "shadowed_by_redirect"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(slots=True, frozen=True)
class Violation:
    """A single broken constraint found in a document's front matter."""

    kind: ViolationKind
    message: str
    field: str | None = None
    severity: Severity = Severity.ERROR
    related: tuple[str, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "field": self.field,
            "message": self.message,
            "related": list(self.related),
        }


@dataclass(slots=True)
class DocumentReport:
    """Validation outcome for one article."""

    source: str
    metadata: ArticleMetadata | None = None
    violations: list[Violation] = field(default_factory=list)
    body: str = field(default="", repr=False)
    declared_url: str | None = None

    @property
    def errors(self) -> list[Violation]:
        return [violation for violation in self.violations if violation.is_error]

    @property
    def warnings(self) -> list[Violation]:
        return [violation for violation in self.violations if not violation.is_error]

    @property
    def ok(self) -> bool:
        """Return ``True`` when the document produced a record and has no errors."""

        return self.metadata is not None and not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "ok": self.ok,
            "url": self.metadata.url if self.metadata else None,
            "violations": [violation.to_dict() for violation in self.violations],
        }


@dataclass(slots=True, frozen=True)
class UrlConflict:
    """Every document that declared the same publishing url."""

    url: str
    sources: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "sources": list(self.sources)}


@dataclass(slots=True)
class CorpusReport:
    """Structured summary of a corpus validation run."""

    documents: list[DocumentReport] = field(default_factory=list)
    conflicts: list[UrlConflict] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(len(document.errors) for document in self.documents)

    @property
    def warning_count(self) -> int:
        return sum(len(document.warnings) for document in self.documents)

    @property
    def ok(self) -> bool:
        return self.error_count == 0 and not self.conflicts

    @property
    def valid_records(self) -> list[ArticleMetadata]:
        return [document.metadata for document in self.documents if document.ok and document.metadata]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "documents": len(self.documents),
            "errors": self.error_count,
            "warnings": self.warning_count,
            "reports": [document.to_dict() for document in self.documents if document.violations],
            "conflicts": [conflict.to_dict() for conflict in self.conflicts],
        }
