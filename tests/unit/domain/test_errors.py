from __future__ import annotations

from proton.domain.errors import (
    BindingNotFoundError,
    HttpError,
    InvalidResponseError,
    KernelError,
    MethodNotAllowedError,
    NotFoundError,
)


def test_not_found_error_declares_404() -> None:
    error = NotFoundError()
    assert error.status_code == 404
    assert str(error) == "Not Found"
    assert isinstance(error, HttpError)


def test_method_not_allowed_exposes_allow_header() -> None:
    error = MethodNotAllowedError(["POST", "GET", "POST"])

    assert error.status_code == 405
    assert error.allowed_methods == ["GET", "POST"]
    assert error.headers == {"Allow": "GET, POST"}


def test_http_error_status_override() -> None:
    error = HttpError("teapot", status_code=418, details={"brew": "earl grey"})

    assert error.status_code == 418
    assert error.message == "teapot"
    assert error.details == {"brew": "earl grey"}
    assert HttpError("boom").status_code == 500


def test_lookup_and_type_error_compatibility() -> None:
    missing = BindingNotFoundError("db")
    assert isinstance(missing, LookupError)
    assert isinstance(missing, KernelError)
    assert missing.key == "db"
    assert "db" in str(missing)

    assert isinstance(InvalidResponseError("bad"), TypeError)
