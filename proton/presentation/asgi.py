"""ASGI adapter exposing the kernel to ASGI servers and test clients."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, MutableMapping, Protocol

from fastapi import Request, Response

from proton.shared import get_logger

logger = get_logger(__name__)

Scope = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Dict[str, Any]]]
Send = Callable[[Dict[str, Any]], Awaitable[None]]


class _Kernel(Protocol):
    def handle(self, request: Request) -> Response:
        ...

    def terminate(self, request: Request, response: Response) -> None:
        ...


class ASGIAdapter:
    """
    Run the kernel request cycle for every ASGI ``http`` scope.

    The cycle itself stays synchronous; only the response transfer is
    awaited. ``terminate`` runs once the response has been sent.
    """

    def __init__(self, application: _Kernel) -> None:
        self.application = application

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            raise RuntimeError(f"Unsupported ASGI scope type: {scope['type']}")

        request = Request(scope, receive)
        response = self.application.handle(request)
        await response(scope, receive, send)

        self.application.terminate(request, response)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.info("asgi.lifespan.startup")
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                logger.info("asgi.lifespan.shutdown")
                await send({"type": "lifespan.shutdown.complete"})
                return
