"""One-shot startup: serve the images folder, get a public url, then generate.

A configured url (``NGROK_URL`` / ``NGROK_PREFIX``) means the images are
already reachable, so the publisher starts out READY and nothing is served
from this process. Otherwise it is AWAITING_PUBLIC_URL until the tunnel
call returns.
"""
from __future__ import annotations
import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

import uvicorn

from product_upload.errors import TunnelError
from .app import create_app
from .settings import Settings
from .tunnel import close_tunnels, open_tunnel


log = logging.getLogger(__name__)


class PublishState(str, Enum):
    AWAITING_PUBLIC_URL = "awaiting-public-url"
    READY = "ready"


class Publisher:
    def __init__(
        self,
        settings: Settings,
        generate: Callable[[str], object],
        tunnel_opener: Callable[[int, Optional[str]], str] = open_tunnel,
        host: str = "127.0.0.1",
    ):
        self.settings = settings
        self._generate = generate
        self._open_tunnel = tunnel_opener
        self.host = host
        self.public_url: Optional[str] = settings.public_url
        self.state = PublishState.READY if self.public_url else PublishState.AWAITING_PUBLIC_URL
        self.created_tunnel = False
        self.server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None

    async def start(self):
        """Run generation once a public url is known and return its result."""
        if self.state is PublishState.READY:
            return self._generate(self.public_url)

        await self._start_server()
        try:
            url = await asyncio.to_thread(
                self._open_tunnel, self.settings.server_port, self.settings.ngrok_authtoken or None
            )
        except TunnelError:
            await self.shutdown()
            raise
        self.public_url = url
        self.created_tunnel = True
        self.state = PublishState.READY
        return self._generate(url)

    async def _start_server(self) -> None:
        config = uvicorn.Config(
            create_app(self.settings.images_dir),
            host=self.host,
            port=self.settings.server_port,
            log_level="warning",
        )
        self.server = uvicorn.Server(config)
        self._serve_task = asyncio.create_task(self._serve())
        while not self.server.started:
            if self._serve_task.done():
                self._serve_task.result()
                raise OSError(f"Static server stopped before starting on port {self.settings.server_port}")
            await asyncio.sleep(0.05)
        log.info(f"Started static server on port {self.settings.server_port}")

    async def _serve(self) -> None:
        # uvicorn exits the process when it cannot bind; surface that as an error instead
        try:
            await self.server.serve()
        except SystemExit as e:
            raise OSError(
                f"Static server failed to start on port {self.settings.server_port} (exit code {e.code})"
            ) from None

    async def serve_forever(self) -> None:
        """Keep serving images until the process is stopped."""
        if self._serve_task is None:
            return
        try:
            await self._serve_task
        finally:
            if self.created_tunnel:
                close_tunnels()

    async def shutdown(self) -> None:
        if self.server is None or self._serve_task is None:
            return
        self.server.should_exit = True
        await self._serve_task

    async def run(self, report: Optional[Callable[[object, bool], None]] = None):
        result = await self.start()
        if report is not None:
            report(result, self.created_tunnel)
        await self.serve_forever()
        return result
