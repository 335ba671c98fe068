"""Template merge and navigation HTML fragments.

Templates are plain HTML files with ``{{name}}`` placeholders. This is
placeholder substitution only; there are no loops or conditionals.
"""

import html
import re
from collections.abc import Mapping
from pathlib import Path

from markstack.assets import get_templates_dir
from markstack.core.navigation import BreadcrumbItem, NavItem

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


class TemplateRenderer:
    """Merges fields into named templates.

    Looks in the project's templates directory first, then in the
    templates bundled with the package.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        """Initialize renderer.

        Args:
            templates_dir: Project templates directory, may not exist
        """
        self._search_dirs = [d for d in (templates_dir, get_templates_dir()) if d is not None]
        self._cache: dict[str, str] = {}

    def merge(self, name: str, fields: Mapping[str, str]) -> str:
        """Substitute fields into a template.

        Unknown placeholders are left untouched.

        Args:
            name: Template name without the .html extension
            fields: Placeholder values

        Returns:
            Merged HTML

        Raises:
            FileNotFoundError: If no template with that name exists
        """
        template = self._load(name)
        return _PLACEHOLDER.sub(lambda m: fields.get(m.group(1), m.group(0)), template)

    def _load(self, name: str) -> str:
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        for directory in self._search_dirs:
            candidate = directory / f"{name}.html"
            if candidate.is_file():
                template = candidate.read_text(encoding="utf-8")
                self._cache[name] = template
                return template

        raise FileNotFoundError(f"Template not found: {name}.html")


def render_breadcrumbs(breadcrumbs: list[BreadcrumbItem], base_url: str = "") -> str:
    """Render breadcrumbs as links separated by slashes.

    The first item is the home link and the last is the current page.
    """
    items: list[str] = []
    last = len(breadcrumbs) - 1
    for i, item in enumerate(breadcrumbs):
        title = html.escape(item.title)
        url = html.escape(base_url + item.url, quote=True)
        if i == 0:
            items.append(f'<a href="{url}" class="breadcrumb-home" title="{title}">{title}</a>')
        elif i == last:
            items.append(f'<span class="breadcrumb-current">{title}</span>')
        else:
            items.append(f'<a href="{url}">{title}</a>')
    return '<span class="breadcrumb-separator">/</span>'.join(items)


def render_sidebar(items: tuple[NavItem, ...] | list[NavItem], base_url: str = "", level: int = 0) -> str:
    """Render sidebar items as nested lists."""
    if not items:
        return ""

    parts = [f'<ul class="sidebar-list sidebar-level-{level}">\n']
    for item in items:
        kind = "folder" if item.is_folder else "file"
        classes = ["sidebar-item", f"sidebar-{kind}"]
        if item.current:
            classes.append("sidebar-current")
        if item.expanded:
            classes.append("sidebar-expanded")

        title = html.escape(item.title)
        url = html.escape(base_url + item.url, quote=True)
        class_attr = " ".join(classes)

        if item.is_folder:
            state = "expanded" if item.expanded else "collapsed"
            parts.append(f'<li class="{class_attr}" data-state="{state}">')
            parts.append('<div class="sidebar-folder-header">')
            if item.children:
                parts.append('<button class="sidebar-toggle" aria-label="Toggle folder"></button>')
            parts.append(f'<a href="{url}">{title}</a></div>')
            if item.children:
                parts.append(f'<div class="sidebar-children {state}">')
                parts.append(render_sidebar(item.children, base_url, level + 1))
                parts.append("</div>")
            parts.append("</li>\n")
        else:
            parts.append(f'<li class="{class_attr}"><a href="{url}">{title}</a></li>\n')

    parts.append("</ul>")
    return "".join(parts)
