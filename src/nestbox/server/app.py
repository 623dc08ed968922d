"""ASGI application serving a ``ResourceFiles`` service.

Handles the lifespan protocol itself unless a downstream application
is given, in which case lifespan and every request the service
declines are forwarded there.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nestbox._internal.asgi import ASGIApp, Receive, Scope, Send
from nestbox.errors import NotFound
from nestbox.http.request import Request
from nestbox.server.errors import error_response
from nestbox.server.sender import send_response

if TYPE_CHECKING:
    from nestbox.service import ResourceFiles

logger = logging.getLogger("nestbox.server")


class ResourceFilesApp:
    """ASGI 3 entry point for embedded resources."""

    __slots__ = ("app", "files")

    def __init__(self, files: ResourceFiles, app: ASGIApp | None = None) -> None:
        self.files = files
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self.app is not None and scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            # Nothing to offer on websocket or other scopes without a downstream app.
            if scope["type"] == "websocket":
                await send({"type": "websocket.close", "code": 1000})
            return

        request = Request.from_asgi(scope)
        response = self.files.respond(request)
        if response is None:
            if self.app is not None:
                await self.app(scope, receive, send)
                return
            response = error_response(NotFound(), request)

        await send_response(response, send, head=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge startup and shutdown; the table is already built."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                logger.info("serving %d embedded resources", len(self.files.table))
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
