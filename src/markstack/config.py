"""Configuration management for MarkStack.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "markstack.toml"

DEFAULT_SITE_TITLE = "Knowledge Base"
DEFAULT_DESCRIPTION = "Documentation and knowledge base"


@dataclass
class SiteConfig:
    """Site metadata used in generated pages."""

    title: str = DEFAULT_SITE_TITLE
    header_title: str = DEFAULT_SITE_TITLE
    subtitle: str = ""
    url: str = ""
    base_url: str = ""
    description: str = DEFAULT_DESCRIPTION
    show_hero: bool = True
    copyright: str = ""


@dataclass
class BuildConfig:
    """Build input and output directories."""

    content_dir: Path = field(default_factory=lambda: Path("content"))
    output_dir: Path = field(default_factory=lambda: Path("dist"))
    static_dir: Path = field(default_factory=lambda: Path("static"))
    templates_dir: Path = field(default_factory=lambda: Path("templates"))


@dataclass
class EditorConfig:
    """Editor server configuration."""

    host: str = "127.0.0.1"
    port: int = 3001
    page: Path = field(default_factory=lambda: Path("editor.html"))


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    build: BuildConfig
    editor: EditorConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for markstack.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            site=SiteConfig(),
            build=BuildConfig(),
            editor=EditorConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            site=cls._parse_site(data.get("site")),
            build=cls._parse_build(data.get("build"), config_dir),
            editor=cls._parse_editor(data.get("editor"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site configuration section.

        ``header_title`` falls back to ``title`` when not set.
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        strings: dict[str, str] = {}
        for key, default in (
            ("title", DEFAULT_SITE_TITLE),
            ("subtitle", ""),
            ("url", ""),
            ("base_url", ""),
            ("description", DEFAULT_DESCRIPTION),
            ("copyright", ""),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"site.{key} must be a string")
            strings[key] = value

        header_title = data.get("header_title", strings["title"])
        if not isinstance(header_title, str):
            raise ValueError("site.header_title must be a string")

        show_hero = data.get("show_hero", True)
        if not isinstance(show_hero, bool):
            raise ValueError("site.show_hero must be a boolean")

        return SiteConfig(
            title=strings["title"],
            header_title=header_title,
            subtitle=strings["subtitle"],
            url=strings["url"].rstrip("/"),
            base_url=strings["base_url"].rstrip("/"),
            description=strings["description"],
            show_hero=show_hero,
            copyright=strings["copyright"],
        )

    @classmethod
    def _parse_build(cls, data: object, config_dir: Path) -> BuildConfig:
        """Parse build configuration section.

        Args:
            data: Raw build section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            BuildConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        paths: dict[str, Path] = {}
        for key, default in (
            ("content_dir", "content"),
            ("output_dir", "dist"),
            ("static_dir", "static"),
            ("templates_dir", "templates"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"build.{key} must be a string")
            paths[key] = config_dir / value

        return BuildConfig(**paths)

    @classmethod
    def _parse_editor(cls, data: object, config_dir: Path) -> EditorConfig:
        """Parse editor configuration section.

        Args:
            data: Raw editor section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            EditorConfig instance
        """
        if data is None:
            return EditorConfig(page=config_dir / "editor.html")

        if not isinstance(data, dict):
            raise ValueError("editor section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("editor.host must be a string")

        port = data.get("port", 3001)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("editor.port must be an integer")

        page = data.get("page", "editor.html")
        if not isinstance(page, str):
            raise ValueError("editor.page must be a string")

        return EditorConfig(host=host, port=port, page=config_dir / page)

    def with_overrides(
        self,
        *,
        content_dir: Path | None = None,
        output_dir: Path | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            content_dir: Override build.content_dir
            output_dir: Override build.output_dir
            host: Override editor.host
            port: Override editor.port

        Returns:
            New Config instance with overrides applied
        """
        build = self.build
        if content_dir is not None or output_dir is not None:
            build = replace(
                self.build,
                content_dir=content_dir if content_dir is not None else self.build.content_dir,
                output_dir=output_dir if output_dir is not None else self.build.output_dir,
            )

        editor = self.editor
        if host is not None or port is not None:
            editor = replace(
                self.editor,
                host=host if host is not None else self.editor.host,
                port=port if port is not None else self.editor.port,
            )

        return replace(self, build=build, editor=editor)
