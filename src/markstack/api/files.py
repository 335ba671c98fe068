"""File CRUD API endpoints for the editor.

Errors are returned as ``{"error": message}`` with a matching status code;
successful writes return ``{"success": true, ...}``.
"""

import json
from typing import Any

from aiohttp import web

from markstack.app_keys import store_key
from markstack.core.store import AccessDeniedError, InvalidNameError


def create_files_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/file", get_file),
        web.post("/api/file", save_file),
        web.post("/api/create-folder", create_folder),
        web.post("/api/create-file", create_file),
        web.post("/api/rename", rename),
        web.delete("/api/delete", delete),
    ]


async def get_file(request: web.Request) -> web.Response:
    path = request.query.get("path")
    if not path:
        return _error(400, "Missing path parameter")

    store = request.app[store_key]
    try:
        content = store.read(path)
    except AccessDeniedError:
        return _error(403, "Access denied")
    except FileNotFoundError:
        return _error(404, "File not found")
    return web.json_response({"content": content})


async def save_file(request: web.Request) -> web.Response:
    body = await _json_body(request)
    path = _field(body, "path")
    if not path:
        return _error(400, "Missing path")

    store = request.app[store_key]
    try:
        store.write(path, _field(body, "content") or "")
    except AccessDeniedError:
        return _error(403, "Access denied")
    except OSError as e:
        return _error(500, str(e))
    return _success()


async def create_folder(request: web.Request) -> web.Response:
    body = await _json_body(request)
    store = request.app[store_key]
    try:
        path = store.create_folder(_field(body, "parentPath"), _field(body, "name") or "")
    except InvalidNameError as e:
        return _error(400, str(e))
    except AccessDeniedError:
        return _error(403, "Access denied")
    except FileExistsError as e:
        return _error(409, str(e))
    except OSError as e:
        return _error(500, str(e))
    return _success(path=path)


async def create_file(request: web.Request) -> web.Response:
    body = await _json_body(request)
    store = request.app[store_key]
    try:
        path = store.create_file(_field(body, "parentPath"), _field(body, "name") or "")
    except InvalidNameError as e:
        return _error(400, str(e))
    except AccessDeniedError:
        return _error(403, "Access denied")
    except FileExistsError as e:
        return _error(409, str(e))
    except OSError as e:
        return _error(500, str(e))
    return _success(path=path)


async def rename(request: web.Request) -> web.Response:
    body = await _json_body(request)
    old_path = _field(body, "oldPath")
    if not old_path:
        return _error(400, "Missing oldPath")

    store = request.app[store_key]
    try:
        new_path = store.rename(
            old_path,
            _field(body, "newName") or "",
            is_folder=bool(body.get("isFolder")),
        )
    except InvalidNameError as e:
        return _error(400, str(e))
    except AccessDeniedError:
        return _error(403, "Access denied")
    except FileNotFoundError as e:
        return _error(404, str(e))
    except FileExistsError as e:
        return _error(409, str(e))
    except OSError as e:
        return _error(500, str(e))
    return _success(newPath=new_path)


async def delete(request: web.Request) -> web.Response:
    path = request.query.get("path")
    if not path:
        return _error(400, "Missing path parameter")

    store = request.app[store_key]
    try:
        store.delete(path)
    except AccessDeniedError:
        return _error(403, "Access denied")
    except FileNotFoundError:
        return _error(404, "Not found")
    except OSError as e:
        return _error(500, str(e))
    return _success()


async def _json_body(request: web.Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise web.HTTPBadRequest(
            text=json.dumps({"error": "Invalid JSON"}),
            content_type="application/json",
        ) from None
    if not isinstance(body, dict):
        raise web.HTTPBadRequest(
            text=json.dumps({"error": "Invalid JSON"}),
            content_type="application/json",
        )
    return body


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


def _success(**data: Any) -> web.Response:
    return web.json_response({"success": True, **data})


def _field(body: dict[str, Any], key: str) -> str | None:
    value = body.get(key)
    return value if isinstance(value, str) else None
