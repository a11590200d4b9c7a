"""Validate every article in one or more corpus directories."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
import logging
import os
from pathlib import Path

from frontlint.models.report import CorpusReport, DocumentReport, Violation, ViolationKind
from frontlint.services.redirects import Redirect, check_redirect_shadowing
from frontlint.services.registry import UrlRegistry
from frontlint.services.validator import register_url, validate_document

LOGGER = logging.getLogger(__name__)


Reader = Callable[[Path], str]

DEFAULT_EXTENSIONS = frozenset({".md", ".markdown"})


def _is_hidden(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def discover_articles(
    roots: Iterable[Path],
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    skip_hidden: bool = True,
) -> list[Path]:
    """Return article files under ``roots`` in a stable, sorted order."""

    allowed = {extension.lower() for extension in extensions}
    found: set[Path] = set()
    for root in roots:
        root = Path(root).expanduser()
        if root.is_file():
            found.add(root.resolve())
            continue
        if not root.is_dir():
            LOGGER.warning("Skipping missing corpus root %s", root)
            continue
        for candidate in root.rglob("*"):
            if not candidate.is_file() or candidate.suffix.lower() not in allowed:
                continue
            if skip_hidden and _is_hidden(candidate, root):
                continue
            found.add(candidate.resolve())
    return sorted(found, key=str)


def _default_reader(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class CorpusValidator:
    """Validate articles independently, then check cross-document url uniqueness."""

    _WORKERS_ENV_VAR = "FRONTLINT_WORKERS"
    _DEFAULT_WORKERS = 1

    def __init__(
        self,
        *,
        redirects: Sequence[Redirect] | None = None,
        workers: int | None = None,
        reader: Reader | None = None,
    ) -> None:
        self._redirects = list(redirects or [])
        self._workers = self._resolve_workers(workers)
        self._reader = reader or _default_reader

    @property
    def workers(self) -> int:
        return self._workers

    def validate(self, paths: Sequence[Path]) -> CorpusReport:
        """Validate ``paths`` and return the combined report."""

        if self._workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as executor:
                documents = list(executor.map(self._validate_path, paths))
        else:
            documents = [self._validate_path(path) for path in paths]

        # Single writer: urls are registered in path order on this thread.
        registry = UrlRegistry()
        for document in documents:
            register_url(document, registry)

        if self._redirects:
            shadowed = check_redirect_shadowing(documents, self._redirects)
            if shadowed:
                LOGGER.info("%d article(s) are shadowed by redirect rules", shadowed)

        report = CorpusReport(documents=documents, conflicts=registry.conflicts())
        for conflict in report.conflicts:
            LOGGER.warning("Duplicate url '%s' declared by %s", conflict.url, ", ".join(conflict.sources))
        LOGGER.info(
            "Validated %d article(s): %d error(s), %d warning(s)",
            len(documents),
            report.error_count,
            report.warning_count,
        )
        return report

    def validate_roots(
        self,
        roots: Iterable[Path],
        *,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        skip_hidden: bool = True,
    ) -> CorpusReport:
        paths = discover_articles(roots, extensions=extensions, skip_hidden=skip_hidden)
        if not paths:
            LOGGER.warning("No articles found to validate.")
        return self.validate(paths)

    def _validate_path(self, path: Path) -> DocumentReport:
        source = str(path)
        LOGGER.debug("Validating %s", source)
        try:
            text = self._reader(path)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Unable to read %s: %s", source, exc)
            return DocumentReport(
                source=source,
                violations=[
                    Violation(kind=ViolationKind.MALFORMED_FRONT_MATTER, message=f"unable to read document: {exc}")
                ],
            )

        report = validate_document(text, source=source)
        if report.errors:
            LOGGER.warning("%s has %d front-matter error(s)", source, len(report.errors))
        return report

    def _resolve_workers(self, workers: int | None) -> int:
        if workers is not None:
            return max(1, int(workers))
        return _load_workers_from_env(self._WORKERS_ENV_VAR, self._DEFAULT_WORKERS)


def _load_workers_from_env(variable_name: str, default: int) -> int:
    """Return the worker count specified by the environment, falling back to ``default``."""

    raw_value = os.getenv(variable_name)
    if not raw_value:
        return default

    try:
        workers = int(raw_value)
    except ValueError:
        LOGGER.warning("Ignoring invalid worker count in %s", variable_name)
        return default

    if workers <= 0:
        LOGGER.warning("Ignoring non-positive worker count in %s", variable_name)
        return default

    return workers
