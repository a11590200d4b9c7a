"""Exception hierarchy shared by the front-matter tooling."""

from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - for static type checking only
    from frontlint.models.report import Violation


class FrontlintError(Exception):
    """Base error for the front-matter tooling."""


class FrontMatterError(FrontlintError):
    """Raised when a document has no decodable front-matter block."""


class MetadataValidationError(FrontlintError):
    """Raised when a document's front matter breaks one or more constraints."""

    def __init__(self, source: str, violations: Sequence["Violation"]) -> None:
        self.source = source
        self.violations = list(violations)
        details = "; ".join(violation.message for violation in self.violations)
        super().__init__(f"{source}: {details}")
