"""URL resolution for content nodes.

Every section and page gets a URL built from the slugs of its own title
and its ancestors' titles, not from filesystem names:

    content/_index.md            -> /
    content/guide/               -> /guide/
    content/guide/_index.md      -> /guide/
    content/guide/start.md       -> /guide/getting-started

The table is built in one pass over the complete tree before any page is
rendered, so navigation for one page can resolve the URL of any other.
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from markstack.core.errors import EmptySlugError, UrlCollisionError
from markstack.core.site import ContentNode, Site, normalize_path
from markstack.core.slugs import slugify
from markstack.core.types import INDEX_FILENAME, MARKDOWN_SUFFIX, URLPath

logger = logging.getLogger(__name__)

ROOT_URL = URLPath("/")

_REPEATED_SLASHES = re.compile(r"/+")


class UrlTable:
    """Read-only mapping from normalised source path to URL.

    Directories and their index pages share an entry value.
    """

    __slots__ = ("_source_dir", "_urls")

    def __init__(self, source_dir: Path, urls: Mapping[Path, URLPath]) -> None:
        self._source_dir = source_dir
        self._urls = MappingProxyType(dict(urls))

    def __len__(self) -> int:
        return len(self._urls)

    def __contains__(self, path: object) -> bool:
        return path in self._urls

    def get(self, path: Path) -> URLPath | None:
        """Exact lookup without fallback."""
        return self._urls.get(normalize_path(path))

    def items(self) -> list[tuple[Path, URLPath]]:
        return list(self._urls.items())

    def resolve(self, path: Path) -> URLPath:
        """Get the URL for a source path.

        Falls back to the containing directory's URL, then to a URL derived
        from the relative filesystem path. Either fallback means the table
        is out of step with the content tree and is logged as a warning.

        Args:
            path: File or directory path

        Returns:
            URL path
        """
        resolved = normalize_path(path)
        url = self._urls.get(resolved)
        if url is not None:
            return url

        parent_url = self._urls.get(resolved.parent)
        if parent_url is not None:
            logger.warning(f"No URL recorded for {resolved}, using directory URL {parent_url}")
            return parent_url

        fallback = self._fallback_url(resolved)
        logger.warning(f"No URL recorded for {resolved}, using path-derived URL {fallback}")
        return fallback

    def _fallback_url(self, path: Path) -> URLPath:
        try:
            relative = path.relative_to(self._source_dir).as_posix()
        except ValueError:
            relative = path.name
        if relative.endswith(MARKDOWN_SUFFIX):
            relative = relative[: -len(MARKDOWN_SUFFIX)]
        index_stem = INDEX_FILENAME[: -len(MARKDOWN_SUFFIX)]
        if relative == index_stem or relative.endswith(f"/{index_stem}"):
            relative = relative[: -len(index_stem)]
        url = f"/{relative}"
        if not url.endswith("/"):
            url += "/"
        return URLPath(_REPEATED_SLASHES.sub("/", url))


class UrlTableBuilder:
    """Builder for constructing UrlTable instances.

    Rejects a URL already owned by a different node.
    """

    def __init__(self, source_dir: Path) -> None:
        self._source_dir = source_dir
        self._urls: dict[Path, URLPath] = {}
        self._owners: dict[str, Path] = {}

    def add(self, path: Path, url: URLPath, *, owner: Path | None = None) -> None:
        """Record a URL for a source path.

        Args:
            path: Source path to map
            url: URL for the path
            owner: Node the URL belongs to (defaults to path); an index page
                passes its directory so both can share one URL

        Raises:
            UrlCollisionError: If the URL already belongs to another node
        """
        path = normalize_path(path)
        owner = normalize_path(owner) if owner is not None else path
        # "/guide" and "/guide/" both write guide/index.html
        key = url.rstrip("/") or "/"
        existing = self._owners.get(key)
        if existing is not None and existing != owner:
            raise UrlCollisionError(url, existing, path)
        self._owners[key] = owner
        self._urls[path] = url

    def build(self) -> UrlTable:
        return UrlTable(self._source_dir, self._urls)


class UrlResolver:
    """Assigns a URL to every node of a scanned site."""

    def resolve(self, site: Site) -> UrlTable:
        """Build the URL table for a site.

        Args:
            site: Scanned content tree

        Returns:
            Immutable UrlTable covering every section, index page and page

        Raises:
            UrlCollisionError: If two nodes slugify to the same URL
            EmptySlugError: If a title has no URL-safe characters
        """
        builder = UrlTableBuilder(site.source_dir)
        self._add_section(builder, site.root, ROOT_URL)
        table = builder.build()
        logger.debug(f"Resolved {len(table)} URLs")
        return table

    def _add_section(self, builder: UrlTableBuilder, section: ContentNode, url: URLPath) -> None:
        builder.add(section.source_path, url)
        if section.index_path is not None:
            builder.add(section.index_path, url, owner=section.source_path)

        for child in section.children:
            slug = _slug_for(child)
            if child.is_section:
                self._add_section(builder, child, URLPath(f"{url}{slug}/"))
            else:
                builder.add(child.source_path, URLPath(f"{url}{slug}"))


def _slug_for(node: ContentNode) -> str:
    slug = slugify(node.title)
    if not slug:
        raise EmptySlugError(node.title, node.source_path)
    return slug
