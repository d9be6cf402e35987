"""
Kernel Errors

This module defines the error classes raised by the kernel and its
collaborators. HTTP-facing errors declare the status code they map to.
"""

from typing import Any, Dict, Iterable, Optional


class KernelError(Exception):
    """Base class for kernel errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class HttpError(KernelError):
    """Error carrying the HTTP status code it should be rendered with."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if status_code is not None:
            self.status_code = status_code
        self.headers = dict(headers or {})
        super().__init__(message, details)


class NotFoundError(HttpError):
    """Raised when no route matches the requested path."""

    status_code = 404

    def __init__(
        self, message: str = "Not Found", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details=details)


class MethodNotAllowedError(HttpError):
    """Raised when a path matches but not for the requested method."""

    status_code = 405

    def __init__(
        self,
        allowed_methods: Iterable[str],
        message: str = "Method Not Allowed",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.allowed_methods = sorted(set(allowed_methods))
        super().__init__(
            message,
            headers={"Allow": ", ".join(self.allowed_methods)},
            details=details,
        )


class BindingNotFoundError(KernelError, LookupError):
    """Raised when a key is not bound in the container."""

    def __init__(self, key: str, details: Optional[Dict[str, Any]] = None):
        self.key = key
        super().__init__(f"No binding registered for '{key}'", details)


class InvalidResponseError(KernelError, TypeError):
    """Raised when a decorator or route action does not produce a response."""
