"""
Infrastructure Layer Package

Adapters implementing the kernel collaborators on top of third-party
libraries: the service container, the route table, the event emitter and
the CGI transport.
"""

from .container import ServiceContainer
from .events import Emitter
from .routing import Dispatcher, RouteCollection
from .transport import CGIRequestFactory, CGIResponseSender

__all__ = [
    "ServiceContainer",
    "Emitter",
    "Dispatcher",
    "RouteCollection",
    "CGIRequestFactory",
    "CGIResponseSender",
]
