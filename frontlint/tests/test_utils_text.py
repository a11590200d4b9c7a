"""Tests for article text utility helpers."""
from __future__ import annotations

from frontlint.utils.text import markdown_to_plain_text, truncate_words


def test_markdown_to_plain_text_strips_headings_and_links() -> None:
    source = "### Heading\nSummary with a [link](https://example.com) and **bold** text."
    result = markdown_to_plain_text(source)
    assert result == "Heading Summary with a link and bold text."


def test_markdown_to_plain_text_handles_non_string_values() -> None:
    assert markdown_to_plain_text(None) == ""
    assert markdown_to_plain_text(42) == ""


def test_markdown_to_plain_text_normalises_whitespace() -> None:
    source = "Line one.\n\n* Bullet item\n* Second item"
    assert markdown_to_plain_text(source) == "Line one. Bullet item Second item"


def test_markdown_to_plain_text_drops_tables_shortcodes_and_html() -> None:
    source = (
        "| Method | Purpose |\n"
        "|---|---|\n"
        "| add | inserts |\n"
        '{{< figure src="flow.png" >}}\n'
        "<div class=\"note\">Read on.</div>"
    )
    assert markdown_to_plain_text(source) == "Method Purpose add inserts Read on."


def test_truncate_words() -> None:
    assert truncate_words("one two three", 2) == "one two…"
    assert truncate_words("one  two", 5) == "one two"
    assert truncate_words("one two", 0) == "one two"
