"""CLI interface for MarkStack.

Command-line tool for building the static site and running the editor.
"""

import logging
import sys
from pathlib import Path

import click

from markstack.config import Config


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(
    config_path: Path | None,
    *,
    content_dir: Path | None = None,
    output_dir: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> Config:
    """Load config and apply CLI overrides, exiting on invalid config."""
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    return config.with_overrides(
        content_dir=content_dir,
        output_dir=output_dir,
        host=host,
        port=port,
    )


@click.group()
@click.version_option(package_name="markstack")
def cli() -> None:
    """MarkStack - markdown knowledge base generator."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover markstack.toml)",
)
@click.option(
    "--content-dir",
    "-s",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Content directory (overrides config)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory (overrides config)",
)
@click.option(
    "--watch",
    "-w",
    is_flag=True,
    help="Rebuild whenever content, static files or templates change",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def build(
    config_path: Path | None,
    content_dir: Path | None,
    output_dir: Path | None,
    watch: bool,
    verbose: bool,
) -> None:
    """Build the static site."""
    _configure_logging(verbose)
    config = _load_config(config_path, content_dir=content_dir, output_dir=output_dir)

    click.echo(f"Content directory: {config.build.content_dir}")
    click.echo(f"Output directory: {config.build.output_dir}")

    if watch:
        from markstack.live.watcher import BuildWatcher

        click.echo("Watching for changes...")
        watcher = BuildWatcher(
            config,
            on_build=lambda result: click.echo(
                click.style(f"Built {len(result.pages)} pages", fg="green"),
            ),
        )
        watcher.run()
        return

    from markstack.build import run_build

    try:
        result = run_build(config)
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        if verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    click.echo(
        click.style(
            f"\nBuild complete: {len(result.pages)} pages, "
            f"{len(result.search_entries)} search entries in {result.elapsed * 1000:.0f}ms",
            fg="green",
            bold=True,
        ),
    )
    click.echo(f"Output: {result.output_dir}")


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover markstack.toml)",
)
@click.option(
    "--content-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def editor(
    config_path: Path | None,
    content_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the content editor server."""
    from markstack.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path, content_dir=content_dir, host=host, port=port)

    click.echo(f"Starting editor on {config.editor.host}:{config.editor.port}")
    click.echo(f"Content directory: {config.build.content_dir}")
    run_server(config)


if __name__ == "__main__":
    cli()
