"""Tests for front-matter schema validation."""

from __future__ import annotations

from datetime import timedelta, timezone

import pytest

from frontlint.models.errors import MetadataValidationError
from frontlint.models.report import ViolationKind
from frontlint.services.registry import UrlRegistry
from frontlint.services.validator import parse_article_metadata, validate_document
from frontlint.tests.factories import REFERENCE_ARTICLE, make_article


def _kinds(report) -> list[ViolationKind]:
    return [violation.kind for violation in report.violations]


def test_reference_article_validates_without_violations() -> None:
    report = validate_document(REFERENCE_ARTICLE, source="collections.md")

    assert report.violations == []
    assert report.ok
    metadata = report.metadata
    assert metadata is not None
    assert metadata.title == "X"
    assert metadata.categories == ["Java"]
    assert metadata.authors == ["pratikdas"]
    assert metadata.url == "common-operations-on-java-collections"
    assert metadata.modified is None
    assert metadata.date.utcoffset() == timedelta(hours=10)
    assert metadata.date.astimezone(timezone.utc).hour == 20


@pytest.mark.parametrize("field_name", ["title", "categories", "authors", "url", "date"])
def test_missing_required_field_is_reported(field_name: str) -> None:
    report = validate_document(make_article(**{field_name: None}), source="post.md")

    assert report.metadata is None
    assert [(v.kind, v.field) for v in report.violations] == [(ViolationKind.MISSING_FIELD, field_name)]


def test_all_violations_are_collected_in_one_pass() -> None:
    text = make_article(title=None, authors="[]", date="15.01.2022", url="bad url!")

    report = validate_document(text, source="post.md")

    assert sorted(kind.value for kind in _kinds(report)) == [
        "empty_list",
        "invalid_field",
        "malformed_date",
        "missing_field",
    ]


@pytest.mark.parametrize("field_name", ["categories", "authors"])
def test_empty_required_list_is_reported(field_name: str) -> None:
    report = validate_document(make_article(**{field_name: "[]"}), source="post.md")

    assert _kinds(report) == [ViolationKind.EMPTY_LIST]
    assert report.violations[0].field == field_name


def test_single_string_list_fields_are_accepted() -> None:
    report = validate_document(make_article(categories="Node", authors="arpendu"), source="post.md")

    assert report.ok
    assert report.metadata.categories == ["Node"]
    assert report.metadata.authors == ["arpendu"]


@pytest.mark.parametrize(
    "value",
    [
        "2022-01-15",
        "2022-01-15 06:00:00",
        "2022-02-30 06:00:00 +1000",
        "yesterday",
        "2022-01-15T06:00:00+10:00",
        "2022-1-5 6:0:0 +1000",
        "2022-01-15 06:00:00 Z",
        "2022-01-15 06:00:00 +10:00:00",
    ],
)
def test_malformed_dates_are_reported(value: str) -> None:
    report = validate_document(make_article(date=value), source="post.md")

    assert _kinds(report) == [ViolationKind.MALFORMED_DATE]
    assert report.violations[0].field == "date"


def test_colon_offset_is_accepted() -> None:
    report = validate_document(make_article(date="2022-01-15 06:00:00 +10:00"), source="post.md")

    assert report.ok


def test_modified_before_date_is_non_monotonic() -> None:
    text = make_article(date="2022-01-15 06:00:00 +1000", modified="2022-01-14 06:00:00 +1000")

    report = validate_document(text, source="post.md")

    assert _kinds(report) == [ViolationKind.NON_MONOTONIC_MODIFIED]


def test_modified_compares_across_offsets() -> None:
    # 2022-01-15 06:00 +1000 is 2022-01-14 20:00 UTC.
    text = make_article(date="2022-01-15 06:00:00 +1000", modified="2022-01-14 21:00:00 +0000")

    report = validate_document(text, source="post.md")

    assert report.ok
    assert report.metadata.last_updated == report.metadata.modified


def test_malformed_modified_is_reported_without_comparison() -> None:
    report = validate_document(make_article(modified="soon"), source="post.md")

    assert _kinds(report) == [ViolationKind.MALFORMED_DATE]
    assert report.violations[0].field == "modified"


def test_description_is_used_as_excerpt() -> None:
    report = validate_document(make_article(extra="description: Short intro."), source="post.md")

    assert report.metadata.excerpt == "Short intro."


def test_non_string_image_is_invalid() -> None:
    report = validate_document(make_article(extra="image: [a, b]"), source="post.md")

    assert _kinds(report) == [ViolationKind.INVALID_FIELD]
    assert report.violations[0].field == "image"


def test_missing_delimiters_are_reported_as_malformed_front_matter() -> None:
    report = validate_document("# Just a heading\n", source="post.md")

    assert _kinds(report) == [ViolationKind.MALFORMED_FRONT_MATTER]
    assert report.metadata is None


def test_registry_reports_duplicate_against_first_document() -> None:
    registry = UrlRegistry()
    first = validate_document(make_article(url="jackson"), source="a.md", registry=registry)
    second = validate_document(make_article(url="/jackson/"), source="b.md", registry=registry)

    assert first.ok
    assert not second.ok
    assert _kinds(second) == [ViolationKind.DUPLICATE_URL]
    assert second.violations[0].related == ("a.md",)
    assert "a.md" in second.violations[0].message


def test_parse_article_metadata_raises_with_every_violation() -> None:
    with pytest.raises(MetadataValidationError) as excinfo:
        parse_article_metadata(make_article(title=None, url=None), source="post.md")

    error = excinfo.value
    assert error.source == "post.md"
    assert {violation.field for violation in error.violations} == {"title", "url"}
    assert "missing required field 'title'" in str(error)
