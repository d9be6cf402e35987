"""
Domain Layer Package

Errors, value objects and the ports describing the kernel collaborators.
It holds no framework wiring of its own.
"""

from proton.domain import entities, errors, ports

__all__ = ["entities", "errors", "ports"]
