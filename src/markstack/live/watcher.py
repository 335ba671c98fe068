"""Rebuild-on-change watch mode.

Monitors the content, static and templates directories and reruns the
full build once per detected batch of changes. There is no incremental
rebuild: each run starts from a fresh scan.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from watchfiles import Change, watch

from markstack.build import Build, BuildResult
from markstack.config import Config
from markstack.core.errors import MarkStackError

logger = logging.getLogger(__name__)


def is_visible(change: Change, path: str) -> bool:
    """Filter out hidden files and directories."""
    return not Path(path).name.startswith(".")


class BuildWatcher:
    """Runs a build, then rebuilds on every change to the inputs."""

    def __init__(
        self,
        config: Config,
        *,
        on_build: Callable[[BuildResult], None] | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            config: Application configuration
            on_build: Called after every successful build
            stop_event: Set to stop watching
        """
        self._config = config
        self._build = Build(config)
        self._on_build = on_build
        self._stop_event = stop_event

    @property
    def watch_paths(self) -> list[Path]:
        """Input directories that currently exist."""
        build = self._config.build
        return [d for d in (build.content_dir, build.static_dir, build.templates_dir) if d.is_dir()]

    def rebuild(self) -> BuildResult | None:
        """Run one full build.

        Content and output errors are logged rather than raised, so a bad
        edit does not end the watch session.
        """
        try:
            result = self._build.run()
        except (MarkStackError, OSError, ValueError) as e:
            logger.error(f"Build failed: {e}")
            return None

        if self._on_build is not None:
            self._on_build(result)
        return result

    def run(self) -> None:
        """Build once, then rebuild on each change until stopped."""
        self.rebuild()

        paths = self.watch_paths
        logger.info(f"Watching for changes in {', '.join(str(p) for p in paths)}")
        for changes in watch(*paths, watch_filter=is_visible, stop_event=self._stop_event):
            for change_type, path in sorted(changes):
                logger.info(f"{change_type.name.capitalize()}: {path}")
            self.rebuild()
