"""File tree API endpoint."""

from aiohttp import web

from markstack.app_keys import store_key


def create_tree_routes() -> list[web.RouteDef]:
    return [web.get("/api/tree", get_tree)]


async def get_tree(request: web.Request) -> web.Response:
    store = request.app[store_key]
    return web.json_response(store.tree(), headers={"Cache-Control": "no-cache"})
