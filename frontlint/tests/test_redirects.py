from __future__ import annotations

from pathlib import Path

import pytest

from frontlint.models.errors import FrontlintError
from frontlint.services.redirects import Redirect, load_redirects


NETLIFY_TOML = """
[build]
  publish = "public"

[[redirects]]
  from = "/feed.xml"
  to = "/index.xml"
  status = 301
  force = true

[[redirects]]
  from = "/write-for-me"
  to = "/contribute/become-an-author"
"""


def test_load_redirects_reads_every_rule(tmp_path: Path) -> None:
    path = tmp_path / "netlify.toml"
    path.write_text(NETLIFY_TOML, encoding="utf-8")

    redirects = load_redirects(path)

    assert redirects == [
        Redirect(source="/feed.xml", target="/index.xml", status=301, force=True),
        Redirect(source="/write-for-me", target="/contribute/become-an-author", status=301, force=False),
    ]
    assert redirects[1].source_key == "write-for-me"


def test_load_redirects_without_rules_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "netlify.toml"
    path.write_text("[build]\npublish = 'public'\n", encoding="utf-8")

    assert load_redirects(path) == []


def test_load_redirects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_redirects(tmp_path / "absent.toml")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("[[redirects]]\nfrom = '/a'\n", "missing key"),
        ("redirects = [1]\n", "not a table"),
        ("[[redirects\n", "not valid TOML"),
    ],
)
def test_load_redirects_rejects_bad_rules(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "netlify.toml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(FrontlintError, match=message):
        load_redirects(path)
