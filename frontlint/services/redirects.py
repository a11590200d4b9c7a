"""Lightweight helpers for reading Netlify-style redirect rules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import Any, Iterable

from frontlint.models.errors import FrontlintError
from frontlint.models.metadata import normalise_url
from frontlint.models.report import DocumentReport, Severity, Violation, ViolationKind


@dataclass(slots=True, frozen=True)
class Redirect:
    """A single ``[[redirects]]`` rule."""

    source: str
    target: str
    status: int = 301
    force: bool = False

    @property
    def source_key(self) -> str:
        return normalise_url(self.source)


def _coerce_redirect(entry: Any, index: int) -> Redirect:
    if not isinstance(entry, dict):
        raise FrontlintError(f"redirect #{index} is not a table")
    try:
        source = str(entry["from"])
        target = str(entry["to"])
    except KeyError as exc:
        raise FrontlintError(f"redirect #{index} is missing key {exc}") from exc
    return Redirect(
        source=source,
        target=target,
        status=int(entry.get("status", 301)),
        force=bool(entry.get("force", False)),
    )


def load_redirects(path: Path) -> list[Redirect]:
    """Parse the ``[[redirects]]`` array of tables from ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Redirects file '{path}' does not exist")

    with path.open("rb") as handle:
        try:
            raw = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise FrontlintError(f"{path} is not valid TOML: {exc}") from exc

    return [_coerce_redirect(entry, index) for index, entry in enumerate(raw.get("redirects", []), start=1)]


def check_redirect_shadowing(documents: Iterable[DocumentReport], redirects: Iterable[Redirect]) -> int:
    """Warn on every document whose url is captured by a forced redirect rule.

    Netlify serves existing content ahead of a redirect unless the rule sets
    ``force = true``, so unforced rules never shadow an article.

    Returns the number of warnings attached.
    """

    by_source = {redirect.source_key: redirect for redirect in redirects if redirect.force}
    attached = 0
    for document in documents:
        if document.declared_url is None:
            continue
        redirect = by_source.get(normalise_url(document.declared_url))
        if redirect is None:
            continue
        document.violations.append(
            Violation(
                kind=ViolationKind.SHADOWED_BY_REDIRECT,
                field="url",
                severity=Severity.WARNING,
                message=f"url '{document.declared_url}' is redirected to '{redirect.target}' ({redirect.status})",
            )
        )
        attached += 1
    return attached
