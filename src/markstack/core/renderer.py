"""Markdown rendering.

Wraps mistune with GitHub-flavoured extensions: heading anchors, alerts
(``> [!NOTE]``), footnotes, task lists, tables and strikethrough. Fenced
code is highlighted with Pygments; ``mermaid`` blocks are left for the
client-side renderer.
"""

import logging
import re

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

ALERT_TYPES = ("NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION")

_ALERT_MARKER = re.compile(
    r"^(?P<open>\s*<p>)\[!(?P<type>" + "|".join(ALERT_TYPES) + r")\][ \t]*\n?",
    re.IGNORECASE,
)
_TAG = re.compile(r"<[^>]*>")
_NON_WORD = re.compile(r"[^\w]+", re.ASCII)


def heading_id(text: str) -> str:
    """Anchor id for a heading: lowercase with non-word runs as hyphens."""
    return _NON_WORD.sub("-", _TAG.sub("", text).lower())


class MarkStackRenderer(mistune.HTMLRenderer):
    """HTML renderer with anchors, alerts and highlighted code."""

    def __init__(self) -> None:
        super().__init__(escape=False)
        self._formatter = HtmlFormatter(nowrap=True)
        self._heading_ids: set[str] = set()

    def reset_heading_ids(self) -> None:
        """Forget heading ids used by the previous document."""
        self._heading_ids.clear()

    def heading(self, text: str, level: int, **attrs) -> str:
        anchor_id = self._unique_id(heading_id(text))
        anchor = f'<a class="heading-anchor" aria-hidden="true" href="#{anchor_id}">#</a>'
        return f'<h{level} id="{anchor_id}">{anchor} {text}</h{level}>\n'

    def _unique_id(self, base: str) -> str:
        # repeated headings get -1, -2, ... suffixes
        anchor_id = base
        n = 1
        while anchor_id in self._heading_ids:
            anchor_id = f"{base}-{n}"
            n += 1
        self._heading_ids.add(anchor_id)
        return anchor_id

    def block_quote(self, text: str) -> str:
        match = _ALERT_MARKER.match(text)
        if match is None:
            return super().block_quote(text)

        alert_type = match.group("type").upper()
        title = f'<span class="alert-title">{alert_type}</span>\n'
        body = match.group("open") + title + text[match.end():]
        return f'<blockquote class="alert alert-{alert_type.lower()}">\n{body}</blockquote>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        lang = info.split(None, 1)[0] if info and info.strip() else None
        if lang == "mermaid":
            return f'<pre class="mermaid">{mistune.escape(code)}</pre>\n'
        if lang:
            try:
                lexer = get_lexer_by_name(lang)
            except ClassNotFound:
                logger.debug(f"No lexer for code block language {lang!r}")
            else:
                highlighted = highlight(code, lexer, self._formatter)
                return (
                    f'<pre class="highlight" data-language="{mistune.escape(lang)}">'
                    f"<code>{highlighted}</code></pre>\n"
                )
        return f'<pre class="highlight"><code>{mistune.escape(code)}</code></pre>\n'


class MarkdownRenderer:
    """Renders markdown bodies to HTML.

    Rendering never fails the build: malformed markdown produces imperfect
    HTML rather than an error.
    """

    def __init__(self) -> None:
        self._renderer = MarkStackRenderer()
        self._markdown = mistune.create_markdown(
            renderer=self._renderer,
            plugins=["table", "strikethrough", "footnotes", "task_lists", "url"],
        )

    def render(self, markdown_text: str) -> str:
        """Render a markdown body (frontmatter already stripped) to HTML."""
        logger.debug(f"Rendering {len(markdown_text)} characters of markdown")
        self._renderer.reset_heading_ids()
        return str(self._markdown(markdown_text))
