"""Application keys for type-safe app configuration access."""

from pathlib import Path

from aiohttp import web

from markstack.core.store import ContentStore

store_key = web.AppKey("store", ContentStore)
static_dir_key = web.AppKey("static_dir", Path)
editor_page_key = web.AppKey("editor_page", Path)
