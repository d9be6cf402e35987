"""
Domain Entities Package

Value objects shared between the kernel and its collaborators.
"""

from .event import Event, ListenerPriority
from .route import Route

__all__ = ["Event", "ListenerPriority", "Route"]
