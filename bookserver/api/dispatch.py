from __future__ import annotations

from fastapi import FastAPI, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from ..domain.paths import normalize_request_path
from ..domain.routes import PathRouter


def raw_request_path(scope: Scope) -> str:
    """Return the path exactly as received, percent-escapes intact."""
    raw = scope.get("raw_path")
    if raw:
        return raw.decode("latin-1")
    return scope["path"]


class PathDispatcher:
    """ASGI fallback that answers every HTTP request from a PathRouter.

    Installed as the router's default app, so no route (and no method list)
    sits in front of it: any method on any path reaches dispatch().
    Non-HTTP scopes go to `fallback`.
    """

    def __init__(self, path_router: PathRouter, fallback: ASGIApp):
        self.path_router = path_router
        self.fallback = fallback

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.fallback(scope, receive, send)
            return

        path = normalize_request_path(raw_request_path(scope))
        descriptor = self.path_router.dispatch(path)
        response = Response(
            content=descriptor.render(),
            status_code=descriptor.status,
            media_type=descriptor.content_type,
        )
        await response(scope, receive, send)


def install_dispatcher(app: FastAPI, path_router: PathRouter) -> PathDispatcher:
    """Make `path_router` answer everything the app has no route for."""
    dispatcher = PathDispatcher(path_router, app.router.default)
    app.router.default = dispatcher
    app.router.redirect_slashes = False
    return dispatcher
