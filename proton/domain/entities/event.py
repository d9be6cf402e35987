"""Event descriptor handed to every listener."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ListenerPriority(IntEnum):
    """Delivery priority; higher values are delivered first."""

    LOW = -100
    NORMAL = 0
    HIGH = 100


@dataclass(slots=True)
class Event:
    name: str
    _propagation_stopped: bool = field(default=False, repr=False)

    def stop_propagation(self) -> None:
        """Prevent delivery to the remaining listeners of this emission."""
        self._propagation_stopped = True

    @property
    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped
