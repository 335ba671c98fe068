"""YAML frontmatter parsing for content files.

Content files may start with a metadata block between ``---`` delimiters:

    ---
    title: Getting Started
    description: First steps
    ---

    # Body...

Only ``title`` and ``description`` are interpreted by the build.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)??---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


@dataclass
class Document:
    """Content file split into metadata and markdown body."""

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def title(self) -> str | None:
        return _string_field(self.metadata, "title")

    @property
    def description(self) -> str | None:
        return _string_field(self.metadata, "description")


def parse_frontmatter(text: str, source: Path | None = None) -> Document:
    """Split text into frontmatter metadata and body.

    Malformed YAML does not abort the build: a warning is logged and the
    metadata is treated as empty, with the body still stripped of the block.

    Args:
        text: Raw file content
        source: File the text came from, used in warnings

    Returns:
        Document with metadata (possibly empty) and markdown body
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return Document(metadata={}, body=text)

    body = text[match.end():]
    try:
        data = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed frontmatter in {source or '<text>'}: {e}")
        return Document(metadata={}, body=body)

    if data is None:
        return Document(metadata={}, body=body)
    if not isinstance(data, dict):
        logger.warning(f"Ignoring frontmatter in {source or '<text>'}: expected a mapping")
        return Document(metadata={}, body=body)

    return Document(metadata=data, body=body)


def read_document(path: Path) -> Document:
    """Read and parse a content file.

    Raises:
        OSError: If the file cannot be read
    """
    return parse_frontmatter(path.read_text(encoding="utf-8"), path)


def _string_field(metadata: dict[str, Any], key: str) -> str | None:
    value = metadata.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None
