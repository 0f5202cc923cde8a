"""
YAML front matter codec.

A note is split into its front matter block and the body. The block is
decoded with PyYAML, updated as a mapping and encoded again; the body is
written back untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from lunarsync.core.exceptions import FrontmatterError

FRONTMATTER_RE = re.compile(r"\A---\r?\n(?:([\s\S]*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)")

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class TextDateLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates such as 2023-02-10 as strings."""


TextDateLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass
class NoteDocument:
    """A note split into front matter and body. ``metadata`` is None when there is no block."""

    metadata: dict[str, Any] | None
    body: str

    @property
    def has_frontmatter(self) -> bool:
        return self.metadata is not None


def split_frontmatter(text: str, path: Path | str | None = None) -> NoteDocument:
    """
    Decode the front matter block at the top of ``text``.

    Raises:
        FrontmatterError: If the block is not valid YAML or not a mapping
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return NoteDocument(metadata=None, body=text)

    try:
        loaded = yaml.load(match.group(1) or "", Loader=TextDateLoader)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Front matter contains invalid YAML: {e}", path) from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise FrontmatterError(
            "Front matter must be a mapping",
            path,
            details={"type": type(loaded).__name__},
        )

    return NoteDocument(metadata=loaded, body=text[match.end():])


def render_frontmatter(metadata: dict[str, Any], body: str) -> str:
    """Encode ``metadata`` as a front matter block followed by ``body``."""
    if not metadata:
        return f"---\n---\n{body}"

    dumped = yaml.safe_dump(
        metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    ).rstrip()
    return f"---\n{dumped}\n---\n{body}"


def changed_entries(metadata: dict[str, Any], updates: dict[str, str]) -> dict[str, str]:
    """Entries of ``updates`` whose value differs from what ``metadata`` already holds."""
    return {
        key: value
        for key, value in updates.items()
        if key not in metadata or metadata[key] != value
    }
