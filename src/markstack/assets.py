"""Discovery of resources bundled with the markstack package."""

from importlib.resources import files
from pathlib import Path


def get_templates_dir() -> Path:
    """Return path to the bundled page templates.

    Returns:
        Path to the templates directory shipped with the package.

    Raises:
        FileNotFoundError: If the templates are not bundled.
    """
    templates = files("markstack").joinpath("templates")
    if not templates.is_dir():
        msg = "Bundled templates not found. Reinstall markstack with 'pip install -e .'."
        raise FileNotFoundError(msg)
    return Path(str(templates))
