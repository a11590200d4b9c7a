"""Corpus-wide bookkeeping of declared publishing urls."""

from __future__ import annotations

from dataclasses import dataclass, field

from frontlint.models.metadata import normalise_url
from frontlint.models.report import UrlConflict, Violation, ViolationKind


@dataclass(slots=True)
class UrlRegistry:
    """Record which documents declared which url.

    The registry is not thread-safe. Register from a single writer, or build one
    registry per batch and :meth:`merge` them afterwards.
    """

    _declarations: dict[str, list[tuple[str, str]]] = field(default_factory=dict, init=False)

    def register(self, url: str, source: str) -> Violation | None:
        """Record ``url`` for ``source``; return a duplicate violation if it was already taken."""

        key = normalise_url(url)
        declarations = self._declarations.setdefault(key, [])
        declarations.append((url, source))
        if len(declarations) == 1:
            return None

        _, first_source = declarations[0]
        return Violation(
            kind=ViolationKind.DUPLICATE_URL,
            field="url",
            message=f"url '{url}' is already declared by {first_source}",
            related=(first_source,),
        )

    def merge(self, other: "UrlRegistry") -> list[Violation]:
        """Fold ``other`` into this registry and return violations for new collisions."""

        violations: list[Violation] = []
        for declarations in other._declarations.values():
            for url, source in declarations:
                duplicate = self.register(url, source)
                if duplicate is not None:
                    violations.append(duplicate)
        return violations

    def sources_for(self, url: str) -> list[str]:
        return [source for _, source in self._declarations.get(normalise_url(url), [])]

    def conflicts(self) -> list[UrlConflict]:
        """Return one entry per url declared by more than one document."""

        return [
            UrlConflict(url=declarations[0][0], sources=tuple(source for _, source in declarations))
            for declarations in self._declarations.values()
            if len(declarations) > 1
        ]

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and normalise_url(url) in self._declarations

    def __len__(self) -> int:
        return len(self._declarations)
