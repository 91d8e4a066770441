"""Explicit server lifecycle around uvicorn.

Nothing binds at import time: build an HttpServer, then call start().
"""
from __future__ import annotations

import socket

import uvicorn
from fastapi import FastAPI

from .config import Settings
from .logging_conf import get_logger
from .main import create_app

logger = get_logger("bookserver.server")


class _AnnouncingServer(uvicorn.Server):
    """uvicorn.Server that logs the listening URL once the socket is bound."""

    def __init__(self, config: uvicorn.Config, url: str):
        super().__init__(config)
        self._url = url

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(
                f"Server is running at {self._url}",
                extra={"event": "server_listening", "url": self._url},
            )


class HttpServer:
    """An owned HTTP server instance.

    Construction builds the app and the uvicorn config; start() binds and
    blocks until stop() is called or the process is signalled.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        settings: Settings | None = None,
    ):
        base = settings or Settings()
        self.settings = base.override(host=host, port=port)
        self.app: FastAPI = create_app(self.settings)
        self.config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            log_config=None,  # logging_conf owns the handlers
            log_level=self.settings.log_level.lower(),
            access_log=False,  # request_logger middleware covers this
        )
        self.server = _AnnouncingServer(self.config, self.url)

    @property
    def host(self) -> str:
        return self.settings.host

    @property
    def port(self) -> int:
        return self.settings.port

    @property
    def url(self) -> str:
        return self.settings.url

    @property
    def started(self) -> bool:
        return self.server.started

    def start(self) -> None:
        """Bind and serve. Blocks until shutdown."""
        logger.info(
            "server.start",
            extra={"event": "server_start", "host": self.host, "port": self.port},
        )
        self.server.run()

    async def serve(self) -> None:
        """Async flavour of start() for callers that already own a loop."""
        await self.server.serve()

    def stop(self) -> None:
        """Ask a running server to finish in-flight requests and exit."""
        logger.info("server.stop", extra={"event": "server_stop"})
        self.server.should_exit = True
