from __future__ import annotations

import json
from urllib.error import HTTPError as UpstreamHTTPError

from fastapi import HTTPException

from proton.application.exception_decorator import JsonExceptionDecorator
from proton.domain.errors import HttpError, MethodNotAllowedError, NotFoundError


def _raise(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:
        return caught


def test_errors_without_status_become_500() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: False)

    response = decorator(_raise(ValueError("broken")))

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert json.loads(response.body) == {"error": {"message": "broken"}}


def test_declared_status_code_is_used() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: False)

    response = decorator(_raise(NotFoundError()))

    assert response.status_code == 404
    assert json.loads(response.body) == {"error": {"message": "Not Found"}}


def test_framework_http_exceptions_keep_their_status() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: False)

    response = decorator(_raise(HTTPException(status_code=403, detail="nope")))

    assert response.status_code == 403


def test_non_integer_status_codes_are_ignored() -> None:
    class _Odd(Exception):
        status_code = "teapot"

    response = JsonExceptionDecorator(debug=lambda: False)(_raise(_Odd("odd")))

    assert response.status_code == 500


def test_error_headers_are_copied() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: False)

    response = decorator(_raise(MethodNotAllowedError(["GET"])))

    assert response.status_code == 405
    assert response.headers["allow"] == "GET"
    assert response.headers["content-type"] == "application/json"


def test_debug_mode_adds_trace_lines() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: True)

    response = decorator(_raise(RuntimeError("A test exception")))
    body = json.loads(response.body)

    assert body["error"]["message"] == "A test exception"
    trace = body["error"]["trace"]
    assert isinstance(trace, list) and trace
    assert trace[-1] == "RuntimeError: A test exception"
    assert all("\n" not in line for line in trace)


def test_debug_flag_is_read_on_every_call() -> None:
    state = {"debug": False}
    decorator = JsonExceptionDecorator(debug=lambda: state["debug"])

    assert "trace" not in json.loads(decorator(_raise(RuntimeError("x"))).body)["error"]

    state["debug"] = True
    assert "trace" in json.loads(decorator(_raise(RuntimeError("x"))).body)["error"]


def test_framework_http_exception_headers_are_copied() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: False)

    exc = HTTPException(status_code=401, detail="login", headers={"WWW-Authenticate": "Bearer"})
    response = decorator(_raise(exc))

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_headers_of_other_errors_are_not_copied() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: False)
    upstream = UpstreamHTTPError(
        "http://upstream", 502, "Bad Gateway", hdrs={"Content-Length": "3"}, fp=None
    )

    response = decorator(_raise(upstream))

    assert response.status_code == 500
    assert response.headers["content-length"] == str(len(response.body))
    assert json.loads(response.body)["error"]["message"]


def test_body_headers_declared_by_http_errors_are_dropped() -> None:
    decorator = JsonExceptionDecorator(debug=lambda: False)
    exc = HttpError(
        "gone",
        headers={"Content-Length": "1", "content-type": "text/plain", "X-Trace": "abc"},
    )

    response = decorator(_raise(exc))

    assert response.headers["content-length"] == str(len(response.body))
    assert response.headers.getlist("content-type") == ["application/json"]
    assert response.headers["x-trace"] == "abc"
