"""Validation of article front matter against the metadata schema.

Validation is fail-slow: every field is checked and every broken constraint is
collected before a result is returned, so one run surfaces all problems in a
document at once.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Mapping, TYPE_CHECKING

from frontlint.models.errors import FrontMatterError, MetadataValidationError
from frontlint.models.metadata import (
    DATE_FORMAT,
    ArticleMetadata,
    is_url_safe,
    listify_strings,
    parse_timestamp,
)
from frontlint.models.report import DocumentReport, Violation, ViolationKind
from frontlint.services.front_matter import split_front_matter

if TYPE_CHECKING:  # pragma: no cover - for static type checking only
    from frontlint.services.registry import UrlRegistry


logger = logging.getLogger(__name__)

EXCERPT_KEYS = ("excerpt", "description")
KNOWN_KEYS = frozenset(
    {"title", "categories", "date", "modified", "authors", "image", "url", "tags"}
)


def _missing(field_name: str) -> Violation:
    return Violation(
        kind=ViolationKind.MISSING_FIELD,
        field=field_name,
        message=f"missing required field '{field_name}'",
    )


def _invalid(field_name: str, message: str) -> Violation:
    return Violation(kind=ViolationKind.INVALID_FIELD, field=field_name, message=message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_text(data: Mapping[str, Any], field_name: str, violations: list[Violation]) -> str | None:
    value = data.get(field_name)
    if _is_blank(value):
        violations.append(_missing(field_name))
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        violations.append(_invalid(field_name, f"field '{field_name}' must be a string"))
        return None
    return value.strip()


def _check_list(
    data: Mapping[str, Any], field_name: str, violations: list[Violation], *, required: bool
) -> list[str] | None:
    if field_name not in data or data[field_name] is None:
        if required:
            violations.append(_missing(field_name))
        return None if required else []

    values = listify_strings(data[field_name])
    if values is None:
        violations.append(_invalid(field_name, f"field '{field_name}' must be a string or a list of strings"))
        return None
    if required and not values:
        violations.append(
            Violation(
                kind=ViolationKind.EMPTY_LIST,
                field=field_name,
                message=f"field '{field_name}' must declare at least one entry",
            )
        )
        return None
    return values


def _check_timestamp(
    data: Mapping[str, Any], field_name: str, violations: list[Violation], *, required: bool
) -> datetime | None:
    value = data.get(field_name)
    if _is_blank(value):
        if required:
            violations.append(_missing(field_name))
        return None

    parsed = parse_timestamp(value)
    if parsed is None:
        violations.append(
            Violation(
                kind=ViolationKind.MALFORMED_DATE,
                field=field_name,
                message=f"field '{field_name}' value {value!r} does not match 'YYYY-MM-DD HH:MM:SS ±HHMM'",
            )
        )
    return parsed


def _optional_text(data: Mapping[str, Any], keys: tuple[str, ...], violations: list[Violation]) -> str | None:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            violations.append(_invalid(key, f"field '{key}' must be a string"))
            return None
        return value.strip() or None
    return None


def validate_metadata(data: Mapping[str, Any], *, source: str) -> DocumentReport:
    """Check a decoded front-matter mapping and build the normalised record."""

    violations: list[Violation] = []

    title = _check_text(data, "title", violations)
    categories = _check_list(data, "categories", violations, required=True)
    date = _check_timestamp(data, "date", violations, required=True)
    modified = _check_timestamp(data, "modified", violations, required=False)
    authors = _check_list(data, "authors", violations, required=True)
    url = _check_text(data, "url", violations)
    tags = _check_list(data, "tags", violations, required=False)
    excerpt_key = next((key for key in EXCERPT_KEYS if data.get(key) is not None), None)
    excerpt = _optional_text(data, EXCERPT_KEYS, violations)
    image = _optional_text(data, ("image",), violations)

    if url is not None and not is_url_safe(url):
        violations.append(_invalid("url", f"url {url!r} contains characters that are not URL-safe"))
        url = None

    if date is not None and modified is not None and modified < date:
        violations.append(
            Violation(
                kind=ViolationKind.NON_MONOTONIC_MODIFIED,
                field="modified",
                message=(
                    f"modified {modified.strftime(DATE_FORMAT)} precedes date {date.strftime(DATE_FORMAT)}"
                ),
            )
        )

    if violations:
        return DocumentReport(source=source, metadata=None, violations=violations)

    # Only the key that supplied the excerpt is consumed; a second one is kept verbatim.
    extra = {key: value for key, value in data.items() if key not in KNOWN_KEYS and key != excerpt_key}
    metadata = ArticleMetadata(
        title=title,
        categories=categories,
        date=date,
        modified=modified,
        authors=authors,
        url=url,
        excerpt=excerpt,
        image=image,
        tags=tags or [],
        extra=extra,
    )
    return DocumentReport(source=source, metadata=metadata, violations=[])


def _declared_url(data: Mapping[str, Any]) -> str | None:
    value = data.get("url")
    if isinstance(value, str) and value.strip() and is_url_safe(value.strip()):
        return value.strip()
    return None


def register_url(report: DocumentReport, registry: "UrlRegistry") -> None:
    """Record the document's url in ``registry``, attaching a duplicate violation if taken."""

    if report.declared_url is None:
        return
    duplicate = registry.register(report.declared_url, report.source)
    if duplicate is not None:
        report.violations.append(duplicate)


def validate_document(text: str, *, source: str, registry: "UrlRegistry | None" = None) -> DocumentReport:
    """Parse and validate a raw document, registering its url when a registry is given."""

    try:
        data, body = split_front_matter(text)
    except FrontMatterError as exc:
        return DocumentReport(
            source=source,
            violations=[Violation(kind=ViolationKind.MALFORMED_FRONT_MATTER, message=str(exc))],
        )

    report = validate_metadata(data, source=source)
    report.body = body
    report.declared_url = _declared_url(data)
    if registry is not None:
        register_url(report, registry)

    if report.violations:
        logger.debug("%s: %d violation(s)", source, len(report.violations))
    return report


def parse_article_metadata(text: str, *, source: str = "<document>") -> ArticleMetadata:
    """Return the record for ``text`` or raise with every violated constraint."""

    report = validate_document(text, source=source)
    if report.metadata is None or report.errors:
        raise MetadataValidationError(source, report.violations)
    return report.metadata
