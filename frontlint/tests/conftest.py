"""Shared fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from frontlint.tests.factories import make_article


@pytest.fixture
def write_article(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes an article below ``tmp_path/content``."""

    content_root = tmp_path / "content"

    def _write(name: str, text: str | None = None, **fields: str | None) -> Path:
        path = content_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text if text is not None else make_article(**fields), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    root.mkdir(exist_ok=True)
    return root
