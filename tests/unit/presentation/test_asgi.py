from __future__ import annotations

from typing import Any, Dict, List

import pytest
from fastapi import Request, Response

from proton.presentation.asgi import ASGIAdapter


class _StubKernel:
    def __init__(self) -> None:
        self.calls: List[str] = []

    def handle(self, request: Request) -> Response:
        self.calls.append(f"handle {request.method} {request.url.path}")
        return Response("stub", status_code=202)

    def terminate(self, request: Request, response: Response) -> None:
        self.calls.append(f"terminate {response.status_code}")


def _http_scope(path: str = "/") -> Dict[str, Any]:
    return {
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": [],
        "query_string": b"",
        "server": ("test", 80),
    }


@pytest.mark.asyncio
async def test_http_scope_runs_request_cycle() -> None:
    kernel = _StubKernel()
    sent: List[Dict[str, Any]] = []

    async def receive() -> Dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: Dict[str, Any]) -> None:
        sent.append(message)
        if message["type"] == "http.response.body":
            kernel.calls.append("body sent")

    await ASGIAdapter(kernel)(_http_scope("/ping"), receive, send)

    assert sent[0]["type"] == "http.response.start"
    assert sent[0]["status"] == 202
    assert kernel.calls == ["handle GET /ping", "body sent", "terminate 202"]


@pytest.mark.asyncio
async def test_lifespan_scope_is_acknowledged() -> None:
    messages = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
    sent: List[Dict[str, Any]] = []

    async def receive() -> Dict[str, Any]:
        return messages.pop(0)

    async def send(message: Dict[str, Any]) -> None:
        sent.append(message)

    await ASGIAdapter(_StubKernel())({"type": "lifespan"}, receive, send)

    assert sent == [
        {"type": "lifespan.startup.complete"},
        {"type": "lifespan.shutdown.complete"},
    ]


@pytest.mark.asyncio
async def test_unsupported_scope_raises() -> None:
    async def receive() -> Dict[str, Any]:
        return {}

    async def send(message: Dict[str, Any]) -> None:
        return None

    with pytest.raises(RuntimeError):
        await ASGIAdapter(_StubKernel())({"type": "websocket"}, receive, send)
