"""
CGI transport - Infrastructure Layer

Default collaborators for ``Application.run``: build the inbound request
from a CGI environment and write the response back in CGI format.
"""

from __future__ import annotations

import os
import sys
from http import HTTPStatus
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

from fastapi import Request, Response

from proton.shared import get_logger

logger = get_logger(__name__)

# CGI variables carrying headers without the HTTP_ prefix
_UNPREFIXED_HEADERS = {"CONTENT_TYPE": b"content-type", "CONTENT_LENGTH": b"content-length"}


class CGIRequestFactory:
    """Builds a request from CGI meta-variables and a body stream."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[BinaryIO] = None,
    ) -> None:
        self._environ = environ
        self._stream = stream

    def __call__(self) -> Request:
        environ = self._environ if self._environ is not None else os.environ
        body = self._read_body(environ)

        async def receive() -> Dict[str, Any]:
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(self._build_scope(environ), receive)

    def _build_scope(self, environ: Mapping[str, str]) -> Dict[str, Any]:
        path = environ.get("PATH_INFO") or "/"
        protocol = environ.get("SERVER_PROTOCOL", "HTTP/1.1")
        https = environ.get("HTTPS", "off").lower() in ("on", "1")

        return {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": protocol.partition("/")[2] or "1.1",
            "method": environ.get("REQUEST_METHOD", "GET").upper(),
            "scheme": "https" if https else "http",
            # PATH_INFO is already percent-decoded by the server
            "path": path,
            "raw_path": quote(path, errors="surrogateescape").encode("ascii"),
            "root_path": "",
            "query_string": environ.get("QUERY_STRING", "").encode("latin-1"),
            "headers": self._headers(environ),
            "server": (
                environ.get("SERVER_NAME", "localhost"),
                int(environ.get("SERVER_PORT") or (443 if https else 80)),
            ),
            "client": (
                environ.get("REMOTE_ADDR", "127.0.0.1"),
                int(environ.get("REMOTE_PORT") or 0),
            ),
        }

    @staticmethod
    def _headers(environ: Mapping[str, str]) -> List[Tuple[bytes, bytes]]:
        headers: List[Tuple[bytes, bytes]] = []
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                name = key[5:].replace("_", "-").lower().encode("latin-1")
            elif key in _UNPREFIXED_HEADERS and value:
                name = _UNPREFIXED_HEADERS[key]
            else:
                continue
            headers.append((name, value.encode("latin-1")))
        return headers

    def _read_body(self, environ: Mapping[str, str]) -> bytes:
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            logger.warning(
                "transport.cgi.invalid_content_length",
                value=environ.get("CONTENT_LENGTH"),
            )
            length = 0

        if length <= 0:
            return b""

        stream = self._stream if self._stream is not None else sys.stdin.buffer
        return stream.read(length)


class CGIResponseSender:
    """Writes a buffered response as a CGI document."""

    def __init__(self, stream: Optional[BinaryIO] = None) -> None:
        self._stream = stream

    def __call__(self, response: Response) -> None:
        body = getattr(response, "body", None)
        if body is None:
            raise TypeError(
                f"{type(response).__name__} has no buffered body to send over CGI"
            )

        stream = self._stream if self._stream is not None else sys.stdout.buffer
        stream.write(self._status_line(response.status_code))
        for name, value in response.raw_headers:
            stream.write(name + b": " + value + b"\r\n")
        stream.write(b"\r\n")
        stream.write(body)
        stream.flush()

        logger.debug(
            "transport.cgi.sent", status_code=response.status_code, length=len(body)
        )

    @staticmethod
    def _status_line(status_code: int) -> bytes:
        try:
            phrase = HTTPStatus(status_code).phrase
        except ValueError:
            phrase = ""
        return f"Status: {status_code} {phrase}".rstrip().encode("latin-1") + b"\r\n"
