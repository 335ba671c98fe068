"""Navigation for generated pages.

Builds breadcrumbs and the sidebar tree for a page from the scanned site
and its URL table. Navigation is a view layer over the content tree: the
unannotated sidebar is built once per build and copied with per-page
``expanded``/``current`` flags.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TypedDict

from markstack.core.site import ContentNode, NodeKind, Site, normalize_path
from markstack.core.types import INDEX_FILENAME, URLPath
from markstack.core.urls import ROOT_URL, UrlTable

HOME_TITLE = "Home"


class NavItemDict(TypedDict, total=False):
    """Dictionary representation of a navigation item."""

    type: str
    title: str
    url: str
    name: str
    expanded: bool
    current: bool
    children: list["NavItemDict"]


@dataclass(frozen=True)
class BreadcrumbItem:
    """Breadcrumb navigation item."""

    title: str
    url: URLPath

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "url": self.url}


HOME_BREADCRUMB = BreadcrumbItem(title=HOME_TITLE, url=ROOT_URL)


@dataclass(frozen=True)
class NavItem:
    """Sidebar entry for a section (folder) or page (file)."""

    kind: NodeKind
    title: str
    url: URLPath
    name: str
    expanded: bool = False
    current: bool = False
    children: tuple["NavItem", ...] = ()

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.SECTION

    def to_dict(self) -> NavItemDict:
        """Convert to dictionary for JSON serialization."""
        result: NavItemDict = {
            "type": "folder" if self.is_folder else "file",
            "title": self.title,
            "url": self.url,
            "name": self.name,
        }
        if self.is_folder:
            result["expanded"] = self.expanded
            result["children"] = [child.to_dict() for child in self.children]
        else:
            result["current"] = self.current
        return result


@dataclass
class NavigationContext:
    """Breadcrumbs and sidebar for one page.

    ``sidebar`` is the root section item; its children are the top-level
    entries. None means the page has no sidebar.
    """

    breadcrumbs: list[BreadcrumbItem]
    sidebar: NavItem | None = None
    current_url: URLPath = ROOT_URL

    @property
    def sidebar_items(self) -> tuple[NavItem, ...]:
        return self.sidebar.children if self.sidebar is not None else ()


@dataclass
class NavigationBuilder:
    """Builds per-page navigation from a site and its complete URL table."""

    site: Site
    urls: UrlTable
    _sidebar: NavItem | None = field(default=None, init=False, repr=False)

    def build(self, source_path: Path, url: URLPath) -> NavigationContext:
        """Build navigation for a content page.

        Args:
            source_path: Page source file
            url: The page's resolved URL

        Returns:
            NavigationContext with breadcrumbs and annotated sidebar
        """
        return NavigationContext(
            breadcrumbs=self.breadcrumbs(source_path),
            sidebar=self.sidebar(url),
            current_url=url,
        )

    def build_home(self) -> NavigationContext:
        """Navigation for the homepage: full sidebar, no current page."""
        return NavigationContext(
            breadcrumbs=[HOME_BREADCRUMB],
            sidebar=self.sidebar(None),
            current_url=ROOT_URL,
        )

    def breadcrumbs(self, source_path: Path) -> list[BreadcrumbItem]:
        """Build breadcrumbs from Home down to a page.

        Walks the path segments below the content root. Directories without
        a URL entry are skipped rather than producing a broken link, and an
        index page adds nothing beyond its directory.

        Args:
            source_path: Page source file

        Returns:
            Breadcrumbs starting with Home and ending with the page itself
        """
        breadcrumbs = [HOME_BREADCRUMB]
        absolute = self._absolute(source_path)
        try:
            parts = absolute.relative_to(self.site.source_dir).parts
        except ValueError:
            return breadcrumbs

        current = self.site.source_dir
        for part in parts:
            current = current / part
            if part == INDEX_FILENAME:
                continue

            url = self.urls.get(current)
            node = self.site.get_node(current)
            if url is None or node is None:
                continue
            breadcrumbs.append(BreadcrumbItem(title=node.title, url=url))

        return breadcrumbs

    def sidebar(self, current_url: URLPath | None) -> NavItem:
        """Build the full sidebar annotated for the current page.

        Args:
            current_url: URL of the page being rendered, None for no page

        Returns:
            Root NavItem covering the entire content tree
        """
        if self._sidebar is None:
            self._sidebar = self._build_item(self.site.root)
        return _annotate(self._sidebar, current_url)

    def _build_item(self, node: ContentNode) -> NavItem:
        return NavItem(
            kind=node.kind,
            title=node.title,
            url=self.urls.resolve(node.source_path),
            name=node.name,
            children=tuple(self._build_item(child) for child in node.children),
        )

    def _absolute(self, path: Path) -> Path:
        if not path.is_absolute():
            path = self.site.source_dir / path
        return normalize_path(path)


def _annotate(item: NavItem, current_url: URLPath | None) -> NavItem:
    if item.is_folder:
        return replace(
            item,
            expanded=current_url is not None and current_url.startswith(item.url),
            children=tuple(_annotate(child, current_url) for child in item.children),
        )
    return replace(item, current=current_url is not None and item.url == current_url)


def not_found_navigation(url: URLPath) -> NavigationContext:
    """Navigation for the 404 page: no sidebar."""
    return NavigationContext(
        breadcrumbs=[HOME_BREADCRUMB, BreadcrumbItem(title="404", url=url)],
        sidebar=None,
        current_url=url,
    )
