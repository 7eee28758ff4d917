from __future__ import annotations

import logging
import mimetypes
from http import HTTPStatus

from aiohttp import web

from data_source.errors import FetchError, status_code_for
from data_source.resolver import SourceResolver

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
FILES_PREFIX = "/files/"


def guess_mime_type(name: str) -> str:
    mime, _ = mimetypes.guess_type(name, strict=False)
    return mime or DEFAULT_CONTENT_TYPE


def _status_line(status: int) -> str:
    return f"{status} {HTTPStatus(status).phrase}"


class DataSourceHandler:
    """Serve resolved file content over HTTP. Only GET and HEAD are answered."""

    def __init__(self, resolver: SourceResolver) -> None:
        self._resolver = resolver

    async def handle(self, request: web.Request) -> web.StreamResponse:
        if request.method not in ("GET", "HEAD"):
            return web.Response(status=405, text="Method not allowed")

        path = request.match_info.get("path")
        if path is None:
            path = request.path
            if path.startswith(FILES_PREFIX):
                path = path[len(FILES_PREFIX) :]
        path = path.lstrip("/")

        try:
            content, provenance = await self._resolver.get_file_content_async(path)
        except FetchError as e:
            status = status_code_for(e)
            logger.warning("File request failed. path=%s status=%d error=%s", path, status, e)
            body = f"{_status_line(status)}\n\n{path}\n\n{e}"
            return web.Response(status=status, text=body)

        logger.debug("File request served. path=%s size=%d provenance=%s", path, len(content), provenance)
        return web.Response(body=content, content_type=guess_mime_type(path))


def register_data_source_route(app: web.Application, prefix: str, resolver: SourceResolver) -> web.Application:
    """Mount the handler for every method under `<prefix>/{path}`."""
    handler = DataSourceHandler(resolver)
    route = prefix.rstrip("/") + "/{path:.*}"
    app.router.add_route("*", route, handler.handle)
    return app


def create_app(resolver: SourceResolver, *, prefix: str = "/files") -> web.Application:
    return register_data_source_route(web.Application(), prefix, resolver)
