"""
Presentation Layer Package

Adapters exposing the kernel to servers.
"""

from .asgi import ASGIAdapter

__all__ = ["ASGIAdapter"]
