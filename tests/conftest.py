"""Shared test fixtures."""

from pathlib import Path

import pytest
from markstack.config import BuildConfig, Config, EditorConfig, SiteConfig


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create an empty content directory."""
    content = tmp_path / "content"
    content.mkdir(exist_ok=True)
    return content


@pytest.fixture
def test_config(tmp_path: Path, content_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories."""
    return Config(
        site=SiteConfig(),
        build=BuildConfig(
            content_dir=content_dir,
            output_dir=tmp_path / "dist",
            static_dir=tmp_path / "static",
            templates_dir=tmp_path / "templates",
        ),
        editor=EditorConfig(page=tmp_path / "editor.html"),
    )


@pytest.fixture
def docs_tree(content_dir: Path) -> Path:
    """Content tree with a titled root, a section and a nested page."""
    (content_dir / "_index.md").write_text("---\ntitle: Docs\n---\n\nWelcome home.\n")
    guide = content_dir / "guide"
    guide.mkdir()
    (guide / "_index.md").write_text("---\ntitle: Guide\n---\n\n# Guide\n\nAll about it.\n")
    (guide / "start.md").write_text(
        "---\ntitle: Getting Started\ndescription: First steps\n---\n\n# Title\n**bold** text\n"
    )
    return content_dir
