"""Tests for template merging and navigation fragments."""

from pathlib import Path

import pytest
from markstack.core.navigation import HOME_BREADCRUMB, BreadcrumbItem, NavItem
from markstack.core.site import NodeKind
from markstack.core.templates import TemplateRenderer, render_breadcrumbs, render_sidebar
from markstack.core.types import URLPath

from tests.test_assets import requires_bundled_templates


class TestTemplateRenderer:
    """Tests for TemplateRenderer.merge()."""

    def test__project_template__placeholders_replaced(self, tmp_path: Path) -> None:
        (tmp_path / "page.html").write_text("<h1>{{title}}</h1><main>{{content}}</main>")
        templates = TemplateRenderer(tmp_path)

        merged = templates.merge("page", {"title": "Guide", "content": "<p>Body</p>"})

        assert merged == "<h1>Guide</h1><main><p>Body</p></main>"

    def test__unknown_placeholder__left_untouched(self, tmp_path: Path) -> None:
        (tmp_path / "page.html").write_text("{{title}} {{unknown}}")

        merged = TemplateRenderer(tmp_path).merge("page", {"title": "T"})

        assert merged == "T {{unknown}}"

    def test__field_values__not_expanded_again(self, tmp_path: Path) -> None:
        """Substitution is a single pass over the template."""
        (tmp_path / "page.html").write_text("{{content}}|{{title}}")

        merged = TemplateRenderer(tmp_path).merge(
            "page", {"content": "literal {{title}}", "title": "T"}
        )

        assert merged == "literal {{title}}|T"

    def test__repeated_placeholder__replaced_everywhere(self, tmp_path: Path) -> None:
        (tmp_path / "page.html").write_text("{{baseUrl}}/a {{baseUrl}}/b")

        merged = TemplateRenderer(tmp_path).merge("page", {"baseUrl": "/docs"})

        assert merged == "/docs/a /docs/b"

    def test__missing_template__raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Template not found: nope.html"):
            TemplateRenderer(tmp_path).merge("nope", {})

    @requires_bundled_templates
    def test__no_project_template__uses_bundled_base(self, tmp_path: Path) -> None:
        templates = TemplateRenderer(tmp_path / "missing")

        merged = templates.merge("base", {"title": "Guide", "siteTitle": "KB"})

        assert "<title>Guide | KB</title>" in merged

    @requires_bundled_templates
    def test__project_template__overrides_bundled(self, tmp_path: Path) -> None:
        (tmp_path / "base.html").write_text("custom {{title}}")

        assert TemplateRenderer(tmp_path).merge("base", {"title": "X"}) == "custom X"


class TestRenderBreadcrumbs:
    """Tests for render_breadcrumbs()."""

    def test__trail__home_link_then_links_then_current(self) -> None:
        html = render_breadcrumbs(
            [
                HOME_BREADCRUMB,
                BreadcrumbItem(title="Guide", url=URLPath("/guide/")),
                BreadcrumbItem(title="Getting Started", url=URLPath("/guide/getting-started")),
            ],
            "/docs",
        )

        assert html.startswith('<a href="/docs/" class="breadcrumb-home" title="Home">Home</a>')
        assert '<a href="/docs/guide/">Guide</a>' in html
        assert html.endswith('<span class="breadcrumb-current">Getting Started</span>')
        assert html.count('<span class="breadcrumb-separator">/</span>') == 2

    def test__titles__escaped(self) -> None:
        html = render_breadcrumbs(
            [HOME_BREADCRUMB, BreadcrumbItem(title="Q&A <new>", url=URLPath("/qa"))]
        )

        assert "Q&amp;A &lt;new&gt;" in html


class TestRenderSidebar:
    """Tests for render_sidebar()."""

    def test__no_items__empty(self) -> None:
        assert render_sidebar(()) == ""

    def test__nested_items__rendered_with_state(self) -> None:
        page = NavItem(
            kind=NodeKind.PAGE,
            title="Start",
            url=URLPath("/guide/start"),
            name="start.md",
            current=True,
        )
        folder = NavItem(
            kind=NodeKind.SECTION,
            title="Guide",
            url=URLPath("/guide/"),
            name="guide",
            expanded=True,
            children=(page,),
        )
        other = NavItem(kind=NodeKind.SECTION, title="Empty", url=URLPath("/empty/"), name="empty")

        html = render_sidebar((folder, other), "/docs")

        assert '<ul class="sidebar-list sidebar-level-0">' in html
        assert '<ul class="sidebar-list sidebar-level-1">' in html
        assert 'class="sidebar-item sidebar-folder sidebar-expanded" data-state="expanded"' in html
        assert 'class="sidebar-item sidebar-folder" data-state="collapsed"' in html
        assert (
            '<li class="sidebar-item sidebar-file sidebar-current">'
            '<a href="/docs/guide/start">Start</a></li>'
        ) in html
        assert html.count("sidebar-toggle") == 1
