"""Ports for the collaborators injected into the application facade."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from fastapi import Request, Response

if TYPE_CHECKING:
    from proton.infrastructure.container import ServiceContainer


class ExceptionDecorator(Protocol):
    """Turns any raised error into the response sent to the client."""

    def __call__(self, exc: Exception) -> Response:
        ...


class RequestFactory(Protocol):
    """Builds the inbound request from the hosting environment."""

    def __call__(self) -> Request:
        ...


class ResponseSender(Protocol):
    """Delivers a response to the transport."""

    def __call__(self, response: Response) -> None:
        ...


class ServiceProvider(Protocol):
    """Registers a group of related bindings into the container."""

    def register(self, container: "ServiceContainer") -> None:
        ...
