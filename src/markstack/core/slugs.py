"""Title and slug helpers shared by the scanner, URL resolver and editor."""

import re

_TITLE_SEPARATORS = re.compile(r"[-_]")
_WORD_START = re.compile(r"\b\w")
_SLUG_INVALID = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def format_title(name: str) -> str:
    """Convert a file or folder name into a display title.

    "my_page" -> "My Page", "getting-started" -> "Getting Started".
    Only the first letter of each word is touched.
    """
    spaced = _TITLE_SEPARATORS.sub(" ", name)
    return _WORD_START.sub(lambda m: m.group(0).upper(), spaced)


def slugify(title: str) -> str:
    """Convert a title into a URL-safe slug.

    Returns an empty string when the title has no ASCII alphanumerics.
    """
    slug = title.lower()
    slug = _SLUG_INVALID.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
