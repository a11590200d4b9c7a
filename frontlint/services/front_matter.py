"""Reading and writing the YAML front-matter block at the head of an article."""

from __future__ import annotations

from typing import Any

import yaml

from frontlint.models.errors import FrontMatterError
from frontlint.models.metadata import ArticleMetadata


DELIMITER = "---"


class _FrontMatterLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as strings.

    Dates are validated against an exact format later on, so PyYAML must not
    silently turn ``2022-01-15`` into a ``date`` object.
    """


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split ``text`` into its decoded front-matter mapping and the body."""

    normalised = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    lines = normalised.split("\n")
    if not lines or lines[0].strip() != DELIMITER:
        raise FrontMatterError("document does not start with a '---' front-matter delimiter")

    end_idx = next((i for i in range(1, len(lines)) if lines[i].strip() == DELIMITER), None)
    if end_idx is None:
        raise FrontMatterError("front-matter block is never closed with '---'")

    block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :]).lstrip("\n")

    try:
        loaded = yaml.load(block, Loader=_FrontMatterLoader)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"front matter is not valid YAML: {exc}") from exc

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        raise FrontMatterError("front matter must be a mapping of keys to values")
    return {str(key): value for key, value in loaded.items()}, body


def render_front_matter(metadata: ArticleMetadata, body: str = "") -> str:
    """Serialise ``metadata`` back into a front-matter document."""

    front_matter = yaml.safe_dump(
        metadata.to_front_matter(), allow_unicode=True, sort_keys=False, default_flow_style=False
    ).strip()
    payload = f"{DELIMITER}\n{front_matter}\n{DELIMITER}\n"
    if body.strip():
        payload += f"\n{body.strip()}\n"
    return payload
