"""Search index entries for the client-side search."""

import json
import re
from dataclasses import asdict, dataclass
from pathlib import Path

SEARCH_INDEX_FILENAME = "search-index.json"

_ENTITIES = (
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)

# Applied in order after tags are gone; leftovers stay as literal text
_MARKDOWN_REMNANTS = (
    (re.compile(r"#{1,6}\s*"), ""),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^\s*[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^\s*\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"^>", re.MULTILINE), ""),
)

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SearchEntry:
    """One page in the search index."""

    title: str
    url: str
    description: str
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def html_to_text(html: str) -> str:
    """Strip rendered HTML down to plain text for searching.

    Best effort: common tags, entities and markdown markers are removed and
    anything unmatched is kept as literal text.
    """
    text = _TAG.sub(" ", html)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    for pattern, replacement in _MARKDOWN_REMNANTS:
        text = pattern.sub(replacement, text)
    return _WHITESPACE.sub(" ", text).strip()


def write_search_index(entries: list[SearchEntry], output_dir: Path) -> Path:
    """Write entries as a JSON array in traversal order.

    Returns:
        Path of the written index file
    """
    path = output_dir / SEARCH_INDEX_FILENAME
    path.write_text(
        json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return path
