"""Server lifecycle: bind, serve with uvicorn, shut down.

``start`` and ``stop`` are coroutines that each finish exactly once, either
normally or with an exception. A failed bind surfaces as ``BindError`` and
leaves the instance stopped, so the caller may try again.
"""

from __future__ import annotations

import asyncio
import logging
import os
import socket
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI

from .config import ServerConfig, build_config
from .exceptions import BindError, ServerStateError
from .main import create_app

logger = logging.getLogger(__name__)

STARTUP_POLL_SECONDS = 0.01
BACKLOG = 2048


class ShareXServer:
    """A ShareX upload endpoint bound to one port.

    Build it either from a ready ``ServerConfig`` or from keyword options
    (``password=...``, ``port=...``); invalid options raise ``ConfigError``.
    """

    def __init__(self, config: Optional[ServerConfig] = None, **options: Any) -> None:
        if config is not None and options:
            raise TypeError("pass either a ServerConfig or keyword options, not both")
        self.config = config if config is not None else build_config(**options)
        self._app = create_app(self.config)
        self._port = self.config.port
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None
        self._socket: Optional[socket.socket] = None

    @property
    def app(self) -> FastAPI:
        return self._app

    @property
    def port(self) -> int:
        """Configured port, or the actual one once started with port 0."""
        return self._port

    @property
    def running(self) -> bool:
        return self._server is not None

    def _bind(self) -> socket.socket:
        host, port = self.config.host, self.config.port
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            if os.name != "nt":
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            sock.listen(BACKLOG)
            sock.setblocking(False)
        except OSError as exc:
            sock.close()
            logger.error("Something went wrong when starting the server: %s", exc)
            raise BindError(f"could not bind to {host}:{port}: {exc.strerror or exc}") from exc
        return sock

    async def start(self) -> None:
        """Create the save path, bind the port and serve in the background."""
        if self._server is not None:
            raise ServerStateError("Server already started")

        await self._app.state.storage.ensure_root()
        sock = self._bind()

        uv_config = uvicorn.Config(
            self._app,
            lifespan="on",
            log_config=None,
            access_log=self.config.debug,
            proxy_headers=False,
        )
        server = uvicorn.Server(uv_config)
        self._server = server
        self._socket = sock
        self._task = asyncio.create_task(server.serve(sockets=[sock]))

        try:
            while not server.started:
                if self._task.done():
                    self._task.result()
                    raise ServerStateError("Server exited during startup")
                await asyncio.sleep(STARTUP_POLL_SECONDS)
        except BaseException:
            await self._shutdown()
            raise

        self._port = sock.getsockname()[1]
        logger.info("ShareX server started on port %d", self._port)

    async def stop(self) -> None:
        """Stop accepting connections and wait until the listener is closed.

        Stopping a server that is not running does nothing.
        """
        if self._server is None:
            return
        await self._shutdown()
        logger.info("ShareX server on port %d stopped", self._port)

    async def serve_forever(self) -> None:
        """Start, then run until uvicorn is told to exit (e.g. by SIGINT)."""
        await self.start()
        try:
            await asyncio.shield(self._task)
        finally:
            await self._shutdown()

    async def _shutdown(self) -> None:
        server, task, sock = self._server, self._task, self._socket
        self._server = self._task = self._socket = None
        try:
            if server is not None:
                server.should_exit = True
            if task is not None and not task.done():
                await task
        finally:
            if sock is not None:
                sock.close()
