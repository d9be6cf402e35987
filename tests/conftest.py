from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi import Request, Response  # noqa: E402

from proton.main.application import Application  # noqa: E402


def build_request(
    method: str = "GET",
    path: str = "/",
    headers: Optional[Dict[str, str]] = None,
    query_string: bytes = b"",
    root_path: str = "",
) -> Request:
    raw_headers: List[Tuple[bytes, bytes]] = [
        (key.lower().encode("latin-1"), value.encode("latin-1"))
        for key, value in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "root_path": root_path,
        "headers": raw_headers,
        "query_string": query_string,
        "server": ("test", 80),
    }
    return Request(scope)


class RecordingSender:
    def __init__(self) -> None:
        self.sent: List[Response] = []

    def __call__(self, response: Response) -> None:
        self.sent.append(response)


@pytest.fixture()
def make_request() -> Callable[..., Request]:
    return build_request


@pytest.fixture()
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture()
def application(sender: RecordingSender) -> Application:
    return Application(
        debug=True,
        request_factory=lambda: build_request("GET", "/"),
        response_sender=sender,
    )
