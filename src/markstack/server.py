"""aiohttp server for the MarkStack editor.

Application factory and route registration. The server exposes file CRUD
over the content directory; the site itself is produced by ``markstack build``.
"""

from pathlib import Path

from aiohttp import web

from markstack.api.files import create_files_routes
from markstack.api.tree import create_tree_routes
from markstack.app_keys import editor_page_key, static_dir_key, store_key
from markstack.config import Config
from markstack.core.store import ContentStore

STATIC_PREFIXES = ("static", "css", "js", "svg")


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[store_key] = ContentStore(config.build.content_dir)
    app[static_dir_key] = config.build.static_dir
    app[editor_page_key] = config.editor.page

    # API routes (must be registered before the catch-all API 404)
    app.router.add_routes(create_tree_routes())
    app.router.add_routes(create_files_routes())
    app.router.add_route("*", "/api/{path:.*}", api_not_found)

    for prefix in STATIC_PREFIXES:
        app.router.add_get(f"/{prefix}/{{path:.*}}", serve_static)

    app.router.add_get("/", serve_editor)
    app.router.add_get("/editor", serve_editor)
    app.router.add_get("/editor.html", serve_editor)

    return app


async def api_not_found(request: web.Request) -> web.Response:
    return web.json_response({"error": "Not found"}, status=404)


async def serve_editor(request: web.Request) -> web.FileResponse:
    """Serve the editor page."""
    page: Path = request.app[editor_page_key]
    if not page.is_file():
        raise web.HTTPNotFound(text="Editor page not found")
    return web.FileResponse(page)


async def serve_static(request: web.Request) -> web.FileResponse:
    """Serve files from the static directory.

    ``/static/x`` maps to ``<static_dir>/x``; ``/css/x``, ``/js/x`` and
    ``/svg/x`` keep their prefix directory.
    """
    static_dir: Path = request.app[static_dir_key].resolve()
    prefix = request.path.strip("/").split("/", 1)[0]
    relative = request.match_info["path"]
    if prefix != "static":
        relative = f"{prefix}/{relative}"

    file_path = (static_dir / relative).resolve()
    if not file_path.is_relative_to(static_dir):
        raise web.HTTPForbidden(text="Access denied")
    if not file_path.is_file():
        raise web.HTTPNotFound(text="Not found")
    return web.FileResponse(file_path)


def run_server(config: Config) -> None:
    """Run the editor server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.editor.host, port=config.editor.port)
