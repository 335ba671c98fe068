"""Static site build.

A build runs in two phases. Phase 1 scans the content tree and resolves
the complete URL table. Phase 2 renders every document, reading but never
changing the table, then writes the homepage, the 404 page and the search
index. All state lives on the Build object and is reset on every run.
"""

import html
import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path

from markstack.config import Config
from markstack.core.frontmatter import Document, read_document
from markstack.core.navigation import NavigationBuilder, NavigationContext, not_found_navigation
from markstack.core.renderer import MarkdownRenderer
from markstack.core.search import SearchEntry, html_to_text, write_search_index
from markstack.core.site import Site, SiteLoader, SourceDocument
from markstack.core.templates import TemplateRenderer, render_breadcrumbs, render_sidebar
from markstack.core.types import URLPath
from markstack.core.urls import ROOT_URL, UrlResolver, UrlTable

logger = logging.getLogger(__name__)

BASE_TEMPLATE = "base"
NOT_FOUND_URL = URLPath("/404/")
NOT_FOUND_FILENAME = "404.html"


@dataclass
class BuildResult:
    """Summary of a completed build."""

    output_dir: Path
    pages: list[URLPath]
    search_entries: list[SearchEntry]
    elapsed: float


@dataclass
class _Page:
    """Fields for one rendered output document."""

    title: str
    description: str
    url: URLPath
    content: str
    navigation: NavigationContext
    is_homepage: bool = False


@dataclass
class Build:
    """Owns all state for a site build.

    Re-running ``run`` discards the previous tree, URL table and search
    index before scanning again.
    """

    config: Config
    renderer: MarkdownRenderer = field(default_factory=MarkdownRenderer)
    site: Site | None = field(default=None, init=False)
    urls: UrlTable | None = field(default=None, init=False)
    search_entries: list[SearchEntry] = field(default_factory=list, init=False)
    _pages: list[URLPath] = field(default_factory=list, init=False)

    def run(self) -> BuildResult:
        """Build the whole site from scratch.

        Returns:
            BuildResult describing the written output

        Raises:
            FileNotFoundError: If the content directory does not exist
            UrlCollisionError: If two documents resolve to the same URL
            EmptySlugError: If a title cannot be turned into a URL segment
            OSError: If content cannot be read or output cannot be written
        """
        started = time.perf_counter()
        self._reset()

        build_config = self.config.build
        output_dir = build_config.output_dir
        self._prepare_output(output_dir)

        # Phase 1: complete tree and URL table before any page is rendered
        site = SiteLoader(build_config.content_dir).load()
        urls = UrlResolver().resolve(site)
        self.site = site
        self.urls = urls

        # Phase 2: render documents against the finished table
        navigation = NavigationBuilder(site, urls)
        templates = TemplateRenderer(build_config.templates_dir)
        homepage_document: Document | None = None

        for source in site.iter_documents():
            if source.is_index and source.node is site.root:
                homepage_document = read_document(source.source_path)
                self._add_search_entry(source, homepage_document, ROOT_URL)
                continue
            self._build_document(source, urls, navigation, templates, output_dir)

        self._build_homepage(homepage_document, navigation, templates, output_dir)
        self._build_not_found(templates, output_dir)

        index_path = write_search_index(self.search_entries, output_dir)
        logger.info(f"Generated: /{index_path.name} ({len(self.search_entries)} pages)")

        elapsed = time.perf_counter() - started
        logger.info(f"Build complete in {elapsed * 1000:.0f}ms")
        return BuildResult(
            output_dir=output_dir,
            pages=list(self._pages),
            search_entries=list(self.search_entries),
            elapsed=elapsed,
        )

    def _reset(self) -> None:
        self.site = None
        self.urls = None
        self.search_entries = []
        self._pages = []

    def _prepare_output(self, output_dir: Path) -> None:
        content_dir = self.config.build.content_dir.resolve()
        resolved_output = output_dir.resolve()
        if content_dir.is_relative_to(resolved_output):
            raise ValueError(f"Output directory {output_dir} must not contain the content directory")
        # the scanner would pick the output up as a section
        if resolved_output.is_relative_to(content_dir):
            raise ValueError(f"Output directory {output_dir} must not be inside the content directory")

        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)

        static_dir = self.config.build.static_dir
        if static_dir.is_dir():
            shutil.copytree(static_dir, output_dir, dirs_exist_ok=True)
            logger.info(f"Copied static files from {static_dir}")

    def _build_document(
        self,
        source: SourceDocument,
        urls: UrlTable,
        navigation: NavigationBuilder,
        templates: TemplateRenderer,
        output_dir: Path,
    ) -> None:
        document = read_document(source.source_path)
        url = urls.resolve(source.source_path)
        page = _Page(
            title=source.node.title,
            description=document.description or self.config.site.description,
            url=url,
            content=self.renderer.render(document.body),
            navigation=navigation.build(source.source_path, url),
        )
        self._write(templates, page, _output_path(output_dir, url))
        self.search_entries.append(
            SearchEntry(
                title=page.title,
                url=url,
                description=page.description,
                content=html_to_text(page.content),
            )
        )

    def _add_search_entry(self, source: SourceDocument, document: Document, url: URLPath) -> None:
        content = self.renderer.render(document.body)
        self.search_entries.append(
            SearchEntry(
                title=source.node.title,
                url=url,
                description=document.description or self.config.site.description,
                content=html_to_text(content),
            )
        )

    def _build_homepage(
        self,
        document: Document | None,
        navigation: NavigationBuilder,
        templates: TemplateRenderer,
        output_dir: Path,
    ) -> None:
        site_config = self.config.site
        content = ""
        if site_config.show_hero and (site_config.title or site_config.subtitle):
            content += '<div class="homepage-hero">'
            if site_config.title:
                content += f"<h1>{html.escape(site_config.title)}</h1>"
            if site_config.subtitle:
                content += f"<p>{html.escape(site_config.subtitle)}</p>"
            content += "</div>"

        description = site_config.description
        if document is not None:
            description = document.description or description
            if document.body.strip():
                content += f'<div class="homepage-content">{self.renderer.render(document.body)}</div>'

        page = _Page(
            title="Home",
            description=description,
            url=ROOT_URL,
            content=content,
            navigation=navigation.build_home(),
            is_homepage=True,
        )
        self._write(templates, page, output_dir / "index.html")

    def _build_not_found(self, templates: TemplateRenderer, output_dir: Path) -> None:
        page = _Page(
            title="Page Not Found",
            description="The requested page could not be found.",
            url=NOT_FOUND_URL,
            content=(
                '<div class="error-page"><h1>404</h1><p>Page not found</p>'
                f'<a href="{html.escape(self.config.site.base_url)}/" class="btn">Return Home</a></div>'
            ),
            navigation=not_found_navigation(NOT_FOUND_URL),
        )
        self._write(templates, page, output_dir / NOT_FOUND_FILENAME)

    def _write(self, templates: TemplateRenderer, page: _Page, output_path: Path) -> None:
        site_config = self.config.site
        merged = templates.merge(
            BASE_TEMPLATE,
            {
                "siteTitle": html.escape(site_config.header_title),
                "title": html.escape(page.title),
                "description": html.escape(page.description),
                "url": html.escape(site_config.url + page.url),
                "baseUrl": site_config.base_url,
                "breadcrumbs": render_breadcrumbs(page.navigation.breadcrumbs, site_config.base_url),
                "sidebar": render_sidebar(page.navigation.sidebar_items, site_config.base_url),
                "pageClass": " is-homepage" if page.is_homepage else "",
                "copyrightText": html.escape(site_config.copyright),
                "content": page.content,
            },
        )
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(merged, encoding="utf-8")
        self._pages.append(page.url)
        logger.info(f"Generated: {page.url}")


def _output_path(output_dir: Path, url: URLPath) -> Path:
    """Output file for a URL: ``<url>/index.html``, root at ``/index.html``."""
    relative = url.strip("/")
    if not relative:
        return output_dir / "index.html"
    return output_dir / relative / "index.html"


def run_build(config: Config) -> BuildResult:
    """Run a single full build."""
    return Build(config).run()
