"""
Event emitter - Infrastructure Layer

Synchronous publish/subscribe with listener priorities.

- higher priority listeners run first
- listeners with equal priority run in subscription order
- a listener may stop propagation for the rest of an emission
- listener errors propagate to the emitting call site
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, DefaultDict, Iterable, List, Union

from proton.domain.entities import Event, ListenerPriority
from proton.shared import get_logger

logger = get_logger(__name__)

Listener = Callable[..., Any]


@dataclass(frozen=True)
class _Subscription:
    listener: Listener
    priority: int
    once: bool = False


def _event_name(name: Union[str, Enum]) -> str:
    return name.value if isinstance(name, Enum) else name


class Emitter:
    def __init__(self) -> None:
        self._subscriptions: DefaultDict[str, List[_Subscription]] = defaultdict(list)

    def add_listener(
        self,
        name: Union[str, Enum],
        listener: Listener,
        priority: int = ListenerPriority.NORMAL,
    ) -> None:
        self._subscribe(_Subscription(listener, int(priority)), _event_name(name))

    def add_one_time_listener(
        self,
        name: Union[str, Enum],
        listener: Listener,
        priority: int = ListenerPriority.NORMAL,
    ) -> None:
        """Register a listener that is removed after its first delivery."""
        self._subscribe(_Subscription(listener, int(priority), once=True), _event_name(name))

    def remove_listener(self, name: Union[str, Enum], listener: Listener) -> int:
        """
        Remove every subscription of ``listener`` to ``name``.
        Returns the number of removed subscriptions.
        """
        name = _event_name(name)
        subs = self._subscriptions.get(name, [])
        remaining = [s for s in subs if s.listener is not listener]
        removed = len(subs) - len(remaining)

        if remaining:
            self._subscriptions[name] = remaining
        else:
            self._subscriptions.pop(name, None)

        return removed

    def remove_all_listeners(self, name: Union[str, Enum]) -> None:
        self._subscriptions.pop(_event_name(name), None)

    def has_listeners(self, name: Union[str, Enum]) -> bool:
        return bool(self._subscriptions.get(_event_name(name)))

    def get_listeners(self, name: Union[str, Enum]) -> List[Listener]:
        return [s.listener for s in self._subscriptions.get(_event_name(name), [])]

    def emit(self, event: Union[str, Enum, Event], *args: Any) -> Event:
        """Deliver ``event`` to its listeners as ``listener(event, *args)``."""
        if not isinstance(event, Event):
            event = Event(name=_event_name(event))

        subs = list(self._subscriptions.get(event.name, []))
        if not subs:
            logger.debug("events.emit.no_listeners", event_name=event.name)
            return event

        for sub in subs:
            if sub.once:
                self._discard(event.name, sub)

            sub.listener(event, *args)

            if event.is_propagation_stopped:
                logger.debug("events.emit.stopped", event_name=event.name)
                break

        return event

    def emit_batch(self, events: Iterable[Union[str, Enum, Event]]) -> List[Event]:
        return [self.emit(event) for event in events]

    def _subscribe(self, sub: _Subscription, name: str) -> None:
        subs = self._subscriptions[name]
        subs.append(sub)
        # sort is stable: equal priorities keep subscription order
        subs.sort(key=lambda s: -s.priority)

        logger.debug(
            "events.listener.added",
            listener=repr(sub.listener),
            event_name=name,
            priority=sub.priority,
        )

    def _discard(self, name: str, sub: _Subscription) -> None:
        subs = self._subscriptions.get(name, [])
        if sub in subs:
            subs.remove(sub)
        if not subs:
            self._subscriptions.pop(name, None)
