"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from markstack.config import CONFIG_FILENAME, Config


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("""
[site]
title = "Team Wiki"
subtitle = "Everything we know"
url = "https://wiki.example.com/"
base_url = "/wiki/"
description = "Internal docs"
show_hero = false
copyright = "(c) Example"

[build]
content_dir = "pages"
output_dir = "public"
static_dir = "assets"
templates_dir = "layouts"

[editor]
host = "0.0.0.0"
port = 4000
page = "tools/editor.html"
""")

        config = Config.load(config_file)

        assert config.site.title == "Team Wiki"
        assert config.site.header_title == "Team Wiki"
        assert config.site.subtitle == "Everything we know"
        assert config.site.url == "https://wiki.example.com"
        assert config.site.base_url == "/wiki"
        assert config.site.description == "Internal docs"
        assert config.site.show_hero is False
        assert config.site.copyright == "(c) Example"
        assert config.build.content_dir == tmp_path / "pages"
        assert config.build.output_dir == tmp_path / "public"
        assert config.build.static_dir == tmp_path / "assets"
        assert config.build.templates_dir == tmp_path / "layouts"
        assert config.editor.host == "0.0.0.0"
        assert config.editor.port == 4000
        assert config.editor.page == tmp_path / "tools" / "editor.html"
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Missing sections fall back to defaults relative to the config file."""
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.site.title == "Knowledge Base"
        assert config.site.show_hero is True
        assert config.build.content_dir == tmp_path / "content"
        assert config.build.output_dir == tmp_path / "dist"
        assert config.editor.port == 3001
        assert config.editor.page == tmp_path / "editor.html"

    def test__missing_explicit_path__raises_error(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for missing explicit config file."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "nonexistent.toml")

    def test__invalid_toml__raises_value_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[site\ntitle = ")

        with pytest.raises(ValueError, match="Invalid TOML"):
            Config.load(config_file)

    def test__no_path_no_discovery__returns_defaults(self) -> None:
        """Return defaults when no config file found."""
        with patch.object(Config, "_discover_config", return_value=None):
            config = Config.load()

        assert config.build.content_dir == Path("content")
        assert config.build.output_dir == Path("dist")
        assert config.editor.host == "127.0.0.1"
        assert config.config_path is None


class TestConfigDiscovery:
    """Tests for config file discovery."""

    def test__config_in_current_dir__found(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[site]\ntitle = 'X'")

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            discovered = Config._discover_config()

        assert discovered == config_file

    def test__config_in_parent_dir__found(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[site]\ntitle = 'X'")
        subdir = tmp_path / "content" / "guide"
        subdir.mkdir(parents=True)

        with patch("pathlib.Path.cwd", return_value=subdir):
            discovered = Config._discover_config()

        assert discovered == config_file


class TestSiteConfigParsing:
    """Tests for site config section parsing."""

    def test__header_title__overrides_title(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[site]\ntitle = "Wiki"\nheader_title = "Wiki Home"')

        config = Config.load(config_file)

        assert config.site.title == "Wiki"
        assert config.site.header_title == "Wiki Home"

    @pytest.mark.parametrize(
        ("body", "message"),
        [
            ("title = 1", "site.title must be a string"),
            ("header_title = []", "site.header_title must be a string"),
            ('show_hero = "yes"', "site.show_hero must be a boolean"),
        ],
    )
    def test__invalid_value__raises_error(self, tmp_path: Path, body: str, message: str) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text(f"[site]\n{body}")

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)

    def test__invalid_section_type__raises_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('site = "wiki"')

        with pytest.raises(ValueError, match="site section must be a dictionary"):
            Config.load(config_file)


class TestBuildConfigParsing:
    """Tests for build config section parsing."""

    def test__invalid_content_dir_type__raises_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[build]\ncontent_dir = 42")

        with pytest.raises(ValueError, match="build.content_dir must be a string"):
            Config.load(config_file)


class TestEditorConfigParsing:
    """Tests for editor config section parsing."""

    def test__invalid_port_type__raises_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[editor]\nport = "3001"')

        with pytest.raises(ValueError, match="editor.port must be an integer"):
            Config.load(config_file)

    def test__boolean_port__raises_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[editor]\nport = true")

        with pytest.raises(ValueError, match="editor.port must be an integer"):
            Config.load(config_file)


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__overrides__applied_to_copy(self, test_config: Config, tmp_path: Path) -> None:
        """Overrides produce a new Config and leave the original alone."""
        overridden = test_config.with_overrides(
            content_dir=tmp_path / "other",
            port=9000,
        )

        assert overridden.build.content_dir == tmp_path / "other"
        assert overridden.build.output_dir == test_config.build.output_dir
        assert overridden.editor.port == 9000
        assert overridden.editor.host == test_config.editor.host
        assert test_config.build.content_dir == tmp_path / "content"
        assert test_config.editor.port == 3001

    def test__no_overrides__returns_equal_config(self, test_config: Config) -> None:
        assert test_config.with_overrides() == test_config
