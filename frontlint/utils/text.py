"""Utilities for working with article body text."""
from __future__ import annotations

import re
from typing import Any


_MARKDOWN_HEADING_RE = re.compile(r"(^|\n)#{1,6}\s*")
_MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_MARKDOWN_IMAGE_RE = re.compile(r"!\[[^\]]*\]\(([^)]+)\)")
_MARKDOWN_CODE_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)
_MARKDOWN_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_MARKDOWN_EMPHASIS_RE = re.compile(r"([*_]{1,3})([^*_]+)\1")
_BLOCKQUOTE_RE = re.compile(r"(^|\n)>\s*")
_TABLE_RULE_RE = re.compile(r"(^|\n)\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?(?=\n|$)")
_HTML_TAG_RE = re.compile(r"<[^>\n]+>")
_SHORTCODE_RE = re.compile(r"\{\{[<%].*?[%>]\}\}", re.DOTALL)


def markdown_to_plain_text(value: Any) -> str:
    """Convert an article body into plain text suitable for an excerpt.

    Fenced code samples, images, HTML tags, Hugo shortcodes and table rules are
    dropped entirely; links keep their label; headings, emphasis markers,
    blockquotes and list markers are stripped. Non-string inputs return an
    empty string.
    """

    if not isinstance(value, str):
        return ""

    text = value
    text = _MARKDOWN_CODE_BLOCK_RE.sub(" ", text)
    text = _SHORTCODE_RE.sub(" ", text)
    text = _HTML_TAG_RE.sub(" ", text)
    text = _MARKDOWN_IMAGE_RE.sub(" ", text)
    text = _MARKDOWN_LINK_RE.sub(r"\1", text)
    text = _MARKDOWN_INLINE_CODE_RE.sub(r"\1", text)
    text = _MARKDOWN_HEADING_RE.sub(r"\1", text)
    text = _MARKDOWN_EMPHASIS_RE.sub(r"\2", text)
    text = _BLOCKQUOTE_RE.sub(r"\1", text)
    text = _TABLE_RULE_RE.sub(r"\1", text)
    text = text.replace("|", " ")

    text = re.sub(r"(^|\n)[\-*+]\s+", r"\1", text)
    text = re.sub(r"(^|\n)\d+\.\s+", r"\1", text)

    text = text.replace("\r", " ")
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def truncate_words(text: str, limit: int) -> str:
    """Return the first ``limit`` words of ``text``, marking truncation with an ellipsis."""

    words = text.split()
    if limit <= 0 or len(words) <= limit:
        return " ".join(words)
    return " ".join(words[:limit]) + "…"


__all__ = ["markdown_to_plain_text", "truncate_words"]
