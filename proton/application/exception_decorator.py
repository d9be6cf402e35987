"""Default exception decorator: any error becomes a JSON error response."""

from __future__ import annotations

import traceback
from typing import Any, Callable, Dict

from fastapi import Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from proton.domain.errors import HttpError
from proton.shared import get_logger

logger = get_logger(__name__)

DEFAULT_STATUS_CODE = 500
_ENTITY_HEADERS = frozenset({"content-length", "content-type", "content-encoding"})


class JsonExceptionDecorator:
    """
    Render an error as ``{"error": {"message": ...}}``.

    The status code is the error's ``status_code`` when it declares one and
    500 otherwise. When ``debug()`` is true the formatted traceback is added
    under ``error.trace`` as a list of lines.
    """

    def __init__(self, debug: Callable[[], bool]) -> None:
        self._debug = debug

    def __call__(self, exc: Exception) -> Response:
        status_code = self._status_code(exc)

        error: Dict[str, Any] = {"message": str(exc)}
        if self._debug():
            error["trace"] = self._trace(exc)

        if status_code >= DEFAULT_STATUS_CODE:
            logger.error(
                "kernel.exception.decorated",
                error=str(exc),
                error_type=type(exc).__name__,
                status_code=status_code,
                exc_info=exc,
            )

        headers = self._headers(exc)
        headers["Content-Type"] = "application/json"

        return JSONResponse(
            content={"error": error},
            status_code=status_code,
            headers=headers,
        )

    @staticmethod
    def _status_code(exc: Exception) -> int:
        status_code = getattr(exc, "status_code", None)
        if isinstance(status_code, int) and not isinstance(status_code, bool):
            return status_code
        return DEFAULT_STATUS_CODE

    @staticmethod
    def _headers(exc: Exception) -> Dict[str, str]:
        # only HTTP errors carry headers meant for the client; the body
        # headers are computed by the response itself
        if not isinstance(exc, (HttpError, StarletteHTTPException)):
            return {}
        return {
            str(k): str(v)
            for k, v in (exc.headers or {}).items()
            if str(k).lower() not in _ENTITY_HEADERS
        }

    @staticmethod
    def _trace(exc: Exception) -> list[str]:
        formatted = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        return formatted.splitlines()
