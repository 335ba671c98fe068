"""Build errors raised by the content pipeline."""

from pathlib import Path


class MarkStackError(Exception):
    """Base class for content pipeline errors."""


class UrlCollisionError(MarkStackError):
    """Two distinct content nodes resolved to the same URL."""

    def __init__(self, url: str, first: Path, second: Path) -> None:
        self.url = url
        self.first = first
        self.second = second
        super().__init__(f"URL collision on {url!r}: {first} and {second}")


class EmptySlugError(MarkStackError):
    """A title produced an empty slug, so no URL segment can be derived."""

    def __init__(self, title: str, source_path: Path) -> None:
        self.title = title
        self.source_path = source_path
        super().__init__(f"Title {title!r} of {source_path} has no URL-safe characters")
