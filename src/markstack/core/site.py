"""Content tree for the site.

Represents the content directory as a tree of sections and pages with
resolved titles and O(1) lookups by source path. URL assignment and
navigation are built on top of this tree, never inside it.
"""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from markstack.core.frontmatter import read_document
from markstack.core.slugs import format_title
from markstack.core.types import INDEX_FILENAME, MARKDOWN_SUFFIX

logger = logging.getLogger(__name__)


def normalize_path(path: Path) -> Path:
    """Absolute, lexically normalised path. Symlinks are not followed."""
    return Path(os.path.normpath(path.absolute()))


class NodeKind(Enum):
    """Kind of content node."""

    PAGE = "page"
    SECTION = "section"


@dataclass
class ContentNode:
    """One filesystem entry under the content root."""

    kind: NodeKind
    name: str
    title: str
    source_path: Path
    description: str | None = None
    index_path: Path | None = None
    children: list["ContentNode"] = field(default_factory=list)

    @property
    def is_section(self) -> bool:
        return self.kind is NodeKind.SECTION


@dataclass(frozen=True)
class SourceDocument:
    """A markdown file the build turns into an output page."""

    node: ContentNode
    source_path: Path

    @property
    def is_index(self) -> bool:
        return self.source_path.name == INDEX_FILENAME


class Site:
    """Scanned content tree with lookups by source path.

    Both a directory and its index page map to the same Section node.
    """

    __slots__ = ("_index", "_root", "_source_dir")

    def __init__(self, source_dir: Path, root: ContentNode) -> None:
        """Initialize site structure.

        Args:
            source_dir: Resolved content root
            root: Root section node
        """
        self._source_dir = source_dir
        self._root = root
        self._index: dict[Path, ContentNode] = {}
        for node in self.iter_nodes():
            self._index[node.source_path] = node
            if node.index_path is not None:
                self._index[node.index_path] = node

    @property
    def source_dir(self) -> Path:
        return self._source_dir

    @property
    def root(self) -> ContentNode:
        return self._root

    def get_node(self, path: Path) -> ContentNode | None:
        """Get the node owning a source path.

        Args:
            path: File or directory path (absolute or relative to the content root)

        Returns:
            ContentNode if found, None otherwise
        """
        return self._index.get(self._normalize_path(path))

    def iter_nodes(self) -> Iterator[ContentNode]:
        """Iterate all nodes in pre-order, children in display order."""
        stack = [self._root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_documents(self) -> Iterator[SourceDocument]:
        """Iterate markdown files in pre-order.

        A section's index page comes before the section's children.
        """
        for node in self.iter_nodes():
            if node.is_section:
                if node.index_path is not None:
                    yield SourceDocument(node=node, source_path=node.index_path)
            else:
                yield SourceDocument(node=node, source_path=node.source_path)

    def _normalize_path(self, path: Path) -> Path:
        if not path.is_absolute():
            path = self._source_dir / path
        return normalize_path(path)


class SiteLoader:
    """Scans a content directory into a Site.

    Titles come from frontmatter when present, otherwise from the entry
    name. Hidden entries are skipped and only markdown files become pages.
    """

    def __init__(self, source_dir: Path) -> None:
        """Initialize loader.

        Args:
            source_dir: Content root directory
        """
        self._source_dir = source_dir

    @property
    def source_dir(self) -> Path:
        return self._source_dir

    def load(self) -> Site:
        """Scan the content directory.

        Returns:
            Site rooted at the content directory

        Raises:
            FileNotFoundError: If the content directory does not exist
            OSError: If any directory cannot be read
        """
        if not self._source_dir.is_dir():
            raise FileNotFoundError(f"Content directory not found: {self._source_dir}")

        root_dir = normalize_path(self._source_dir)
        root = self._scan_section(root_dir)
        logger.debug(f"Scanned content tree at {root_dir}")
        return Site(root_dir, root)

    def _scan_section(self, dir_path: Path) -> ContentNode:
        index_path = dir_path / INDEX_FILENAME
        title = format_title(dir_path.name)
        description = None
        has_index = index_path.is_file()
        if has_index:
            document = read_document(index_path)
            title = document.title or title
            description = document.description

        sections: list[ContentNode] = []
        pages: list[ContentNode] = []
        # scandir errors propagate: a partial tree would produce broken links
        for entry in sorted(dir_path.iterdir()):
            if entry.name.startswith("."):
                continue
            if entry.is_dir():
                # a link back to an ancestor would recurse forever
                if entry.is_symlink():
                    logger.warning(f"Skipping symlinked directory {entry}")
                    continue
                sections.append(self._scan_section(entry))
            elif entry.suffix == MARKDOWN_SUFFIX and entry.name != INDEX_FILENAME:
                pages.append(self._scan_page(entry))

        return ContentNode(
            kind=NodeKind.SECTION,
            name=dir_path.name,
            title=title,
            source_path=dir_path,
            description=description,
            index_path=index_path if has_index else None,
            children=_sort_nodes(sections) + _sort_nodes(pages),
        )

    def _scan_page(self, file_path: Path) -> ContentNode:
        document = read_document(file_path)
        return ContentNode(
            kind=NodeKind.PAGE,
            name=file_path.name,
            title=document.title or format_title(file_path.stem),
            source_path=file_path,
            description=document.description,
        )


def _sort_nodes(nodes: list[ContentNode]) -> list[ContentNode]:
    return sorted(nodes, key=lambda node: (node.title.casefold(), node.title))
