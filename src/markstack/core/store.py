"""Filesystem operations behind the editor API.

All paths are relative to the content root. Any path that resolves
outside the root is rejected before touching the filesystem.
"""

import logging
import re
import shutil
from pathlib import Path
from typing import TypedDict

from markstack.core.slugs import format_title
from markstack.core.types import INDEX_FILENAME, MARKDOWN_SUFFIX

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
_FILENAME_INVALID = re.compile(r"[^a-z0-9\-_.]")
_FOLDER_INVALID = re.compile(r"[^a-z0-9\-_]")


class TreeItemDict(TypedDict, total=False):
    """Editor file tree entry."""

    name: str
    path: str
    type: str
    children: list["TreeItemDict"]


class AccessDeniedError(PermissionError):
    """Path resolves outside the content root."""


class InvalidNameError(ValueError):
    """Name is empty after normalisation."""


def normalize_filename(name: str) -> str:
    """Normalise a file name: "Hello World" -> "hello-world.md"."""
    normalized = _normalize(name, _FILENAME_INVALID)
    if not normalized:
        return ""
    if not normalized.endswith(MARKDOWN_SUFFIX):
        normalized += MARKDOWN_SUFFIX
    return normalized


def normalize_folder_name(name: str) -> str:
    """Normalise a folder name: "My Folder!" -> "my-folder"."""
    return _normalize(name, _FOLDER_INVALID)


def _normalize(name: str, invalid: re.Pattern[str]) -> str:
    normalized = _WHITESPACE.sub("-", name.lower())
    normalized = invalid.sub("", normalized)
    normalized = _HYPHENS.sub("-", normalized)
    return normalized.strip("-")


def index_template(folder_name: str) -> str:
    title = format_title(folder_name)
    return (
        f"---\ntitle: {title}\ndescription: Description for {title}\n---\n\n"
        f"# {title}\n\nWelcome to the {title} section.\n"
    )


def page_template(file_name: str) -> str:
    title = format_title(file_name.removesuffix(MARKDOWN_SUFFIX))
    return (
        f"---\ntitle: {title}\ndescription: Description for {title}\n---\n\n"
        f"# {title}\n\nStart writing your content here.\n"
    )


class ContentStore:
    """Read/write access to the content directory for the editor."""

    def __init__(self, content_dir: Path) -> None:
        self._content_dir = content_dir

    @property
    def content_dir(self) -> Path:
        return self._content_dir

    def tree(self) -> list[TreeItemDict]:
        """List folders and markdown files, folders first, each sorted by name."""
        return self._scan(self._content_dir, "")

    def read(self, path: str) -> str:
        """Read a file.

        Raises:
            AccessDeniedError: If the path escapes the content root
            FileNotFoundError: If the file does not exist
        """
        full_path = self._resolve(path)
        if not full_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return full_path.read_text(encoding="utf-8")

    def write(self, path: str, content: str) -> None:
        """Write a file, creating parent directories."""
        full_path = self._resolve(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        logger.info(f"Saved {path}")

    def create_folder(self, parent_path: str | None, name: str) -> str:
        """Create a folder with an index page.

        Returns:
            Relative path of the new folder

        Raises:
            InvalidNameError: If the name normalises to nothing
            FileExistsError: If the folder already exists
        """
        folder_name = normalize_folder_name(name)
        if not folder_name:
            raise InvalidNameError("Invalid folder name")

        folder_path = _join(parent_path, folder_name)
        full_path = self._resolve(folder_path)
        if full_path.exists():
            raise FileExistsError("Folder already exists")

        full_path.mkdir(parents=True)
        (full_path / INDEX_FILENAME).write_text(index_template(folder_name), encoding="utf-8")
        logger.info(f"Created folder {folder_path}")
        return folder_path

    def create_file(self, parent_path: str | None, name: str) -> str:
        """Create a page from the starter template.

        Returns:
            Relative path of the new file
        """
        file_name = normalize_filename(name)
        if not file_name:
            raise InvalidNameError("Invalid file name")

        file_path = _join(parent_path, file_name)
        full_path = self._resolve(file_path)
        if full_path.exists():
            raise FileExistsError("File already exists")

        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(page_template(file_name), encoding="utf-8")
        logger.info(f"Created file {file_path}")
        return file_path

    def rename(self, old_path: str, new_name: str, *, is_folder: bool) -> str:
        """Rename a file or folder within its parent directory.

        Returns:
            Relative path after renaming
        """
        normalized = normalize_folder_name(new_name) if is_folder else normalize_filename(new_name)
        if not normalized:
            raise InvalidNameError("Invalid name")

        parent = Path(old_path).parent.as_posix()
        new_path = _join(None if parent == "." else parent, normalized)

        full_old_path = self._resolve(old_path)
        full_new_path = self._resolve(new_path)
        if not full_old_path.exists():
            raise FileNotFoundError("Source not found")
        if full_new_path.exists():
            raise FileExistsError("Target already exists")

        full_old_path.rename(full_new_path)
        logger.info(f"Renamed {old_path} to {new_path}")
        return new_path

    def delete(self, path: str) -> None:
        """Delete a file or a folder with everything in it."""
        full_path = self._resolve(path)
        if full_path == self._content_dir.resolve():
            raise AccessDeniedError("Cannot delete the content root")
        if not full_path.exists():
            raise FileNotFoundError("Not found")

        if full_path.is_dir():
            shutil.rmtree(full_path)
        else:
            full_path.unlink()
        logger.info(f"Deleted {path}")

    def _resolve(self, path: str) -> Path:
        root = self._content_dir.resolve()
        full_path = (root / path).resolve()
        if not full_path.is_relative_to(root):
            raise AccessDeniedError(f"Access denied: {path}")
        return full_path

    def _scan(self, dir_path: Path, relative: str) -> list[TreeItemDict]:
        if not dir_path.is_dir():
            return []

        folders: list[TreeItemDict] = []
        files: list[TreeItemDict] = []
        for entry in dir_path.iterdir():
            if entry.name.startswith("."):
                continue
            entry_path = f"{relative}/{entry.name}" if relative else entry.name
            if entry.is_dir():
                folders.append(
                    {
                        "name": entry.name,
                        "path": entry_path,
                        "type": "folder",
                        "children": self._scan(entry, entry_path),
                    }
                )
            elif entry.suffix == MARKDOWN_SUFFIX:
                files.append({"name": entry.name, "path": entry_path, "type": "file"})

        folders.sort(key=lambda item: item["name"].casefold())
        files.sort(key=lambda item: item["name"].casefold())
        return folders + files


def _join(parent_path: str | None, name: str) -> str:
    return f"{parent_path.strip('/')}/{name}" if parent_path and parent_path.strip("/") else name
