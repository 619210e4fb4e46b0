"""
Site Router

Decides, for each incoming request, which handler serves it. Rules are tried
in a fixed order and the first match wins:

1. ApiRule       - paths beneath the API prefix go to the API collaborator
2. StaticRule    - paths naming an existing file under the static root
3. FallbackRule  - everything else gets the fallback file

The API collaborator is any ASGI application. It owns the response for its
branch entirely; nothing here inspects or rewrites it.
"""

import logging
import os
import stat
from typing import List, Optional

import anyio.to_thread
from starlette.responses import FileResponse, PlainTextResponse
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocketClose

from app.models.schemas import RouterSettings

logger = logging.getLogger(__name__)


def route_path(scope: Scope) -> str:
    """Return the request path relative to the scope's root_path."""
    path = scope["path"]
    root_path = scope.get("root_path", "")
    if not root_path or not path.startswith(root_path):
        return path
    if path == root_path:
        return ""
    if path[len(root_path)] == "/":
        return path[len(root_path):]
    return path


class RouteRule:
    """One entry of the router's ordered rule list."""

    name = "rule"

    async def matches(self, scope: Scope) -> bool:
        raise NotImplementedError

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        raise NotImplementedError


class ApiRule(RouteRule):
    """Forward everything beneath ``prefix`` to the API collaborator."""

    name = "api"

    def __init__(self, prefix: str, app: ASGIApp):
        self.prefix = prefix
        self.app = app

    async def matches(self, scope: Scope) -> bool:
        if scope["type"] not in ("http", "websocket"):
            return False
        path = route_path(scope)
        return path == self.prefix or path.startswith(self.prefix + "/")

    def child_scope(self, scope: Scope) -> Scope:
        """
        Copy of ``scope`` mounted at the prefix.

        As with Starlette's Mount, ``path`` and ``raw_path`` keep the full
        request path and ``root_path`` grows by the prefix, so the
        collaborator routes on the remainder but builds URLs under the prefix.
        """
        child = dict(scope)
        child["root_path"] = scope.get("root_path", "") + self.prefix
        return child

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(self.child_scope(scope), receive, send)


class StaticRule(RouteRule):
    """Serve existing files under the static root."""

    name = "static"

    def __init__(self, directory: str):
        self.directory = directory
        # html=True serves a directory's index.html
        self.files = StaticFiles(directory=directory, html=True, check_dir=False)

    async def matches(self, scope: Scope) -> bool:
        if scope["type"] != "http" or scope["method"] not in ("GET", "HEAD"):
            return False

        path = self.files.get_path(scope)
        _, stat_result = await anyio.to_thread.run_sync(self.files.lookup_path, path)
        if stat_result is None:
            return False
        if stat.S_ISREG(stat_result.st_mode):
            return True
        if stat.S_ISDIR(stat_result.st_mode):
            index_path = os.path.join(path, "index.html")
            _, index_stat = await anyio.to_thread.run_sync(self.files.lookup_path, index_path)
            return index_stat is not None and stat.S_ISREG(index_stat.st_mode)
        return False

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.files(scope, receive, send)


class FallbackRule(RouteRule):
    """Send one fixed file for anything no earlier rule claimed."""

    name = "fallback"

    def __init__(self, path: str, status_code: int = 200, methods: Optional[List[str]] = None):
        self.path = path
        self.status_code = status_code
        self.methods = set(methods) if methods else None
        # GET routes answer HEAD too
        if self.methods and "GET" in self.methods:
            self.methods.add("HEAD")

    async def matches(self, scope: Scope) -> bool:
        if scope["type"] != "http":
            return False
        return self.methods is None or scope["method"] in self.methods

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        # A missing fallback file raises from FileResponse; the app's
        # error handler turns that into a 500.
        response = FileResponse(self.path, status_code=self.status_code)
        await response(scope, receive, send)


class SiteRouter:
    """
    ASGI application dispatching requests over an ordered rule list.

    Args:
        settings: Immutable routing configuration
        api_app: ASGI application mounted beneath ``settings.api_prefix``
    """

    def __init__(self, settings: RouterSettings, api_app: ASGIApp):
        self.settings = settings
        self.rules: List[RouteRule] = [
            ApiRule(settings.api_prefix, api_app),
            StaticRule(settings.static_root),
            FallbackRule(
                settings.fallback_file,
                status_code=settings.fallback_status,
                methods=settings.fallback_methods,
            ),
        ]

    async def resolve(self, scope: Scope) -> Optional[RouteRule]:
        """Return the first rule matching ``scope``, or None."""
        for rule in self.rules:
            if await rule.matches(scope):
                return rule
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        rule = await self.resolve(scope)

        if rule is not None:
            logger.debug(f"{scope.get('method', scope['type'])} {scope['path']} -> {rule.name}")
            await rule.handle(scope, receive, send)
            return

        logger.debug(f"{scope.get('method', scope['type'])} {scope['path']} -> unmatched")
        if scope["type"] == "websocket":
            await WebSocketClose()(scope, receive, send)
        else:
            await PlainTextResponse("Not Found", status_code=404)(scope, receive, send)
