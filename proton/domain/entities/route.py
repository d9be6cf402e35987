"""Route registration value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """An HTTP method, a path pattern and the action bound to them.

    ``action`` is opaque here: a callable, a container key, or a
    ``"key:method"`` reference resolved by the router at dispatch time.
    """

    method: str
    path: str
    action: Any
