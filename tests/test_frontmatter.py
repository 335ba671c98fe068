"""Tests for frontmatter parsing."""

import logging
from pathlib import Path

import pytest
from markstack.core.frontmatter import parse_frontmatter, read_document


class TestParseFrontmatter:
    """Tests for parse_frontmatter()."""

    def test__with_frontmatter__splits_metadata_and_body(self) -> None:
        document = parse_frontmatter("---\ntitle: Guide\ndescription: All of it\n---\n\n# Body\n")

        assert document.title == "Guide"
        assert document.description == "All of it"
        assert document.body == "\n# Body\n"

    def test__without_frontmatter__returns_whole_text(self) -> None:
        document = parse_frontmatter("# Just markdown\n")

        assert document.metadata == {}
        assert document.title is None
        assert document.body == "# Just markdown\n"

    def test__non_string_title__is_coerced(self) -> None:
        document = parse_frontmatter("---\ntitle: 2024\n---\nBody")

        assert document.title == "2024"

    def test__blank_title__counts_as_missing(self) -> None:
        document = parse_frontmatter("---\ntitle: '  '\n---\nBody")

        assert document.title is None

    def test__malformed_yaml__degrades_to_empty_metadata(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            document = parse_frontmatter("---\ntitle: [unclosed\n---\nBody text", Path("bad.md"))

        assert document.metadata == {}
        assert document.body == "Body text"
        assert "bad.md" in caplog.text

    def test__list_frontmatter__is_ignored(self) -> None:
        document = parse_frontmatter("---\n- a\n- b\n---\nBody")

        assert document.metadata == {}
        assert document.body == "Body"


class TestReadDocument:
    """Tests for read_document()."""

    def test__file__parsed(self, tmp_path: Path) -> None:
        path = tmp_path / "page.md"
        path.write_text("---\ntitle: Page\n---\nHello")

        document = read_document(path)

        assert document.title == "Page"
        assert document.body == "Hello"


class TestEmptyFrontmatter:
    """Tests for a frontmatter block with nothing between the delimiters."""

    def test__empty_block__stripped_from_body(self) -> None:
        document = parse_frontmatter("---\n---\nBody")

        assert document.metadata == {}
        assert document.body == "Body"

    def test__empty_block__later_rule_not_consumed(self) -> None:
        """A horizontal rule further down stays in the body."""
        document = parse_frontmatter("---\n---\nIntro\n---\nMore")

        assert document.body == "Intro\n---\nMore"
