"""
Service container - Infrastructure Layer

String-keyed bindings backed by ``dependency_injector`` providers.
Factory-style bindings build a new instance on every lookup; singleton
bindings share one instance for the lifetime of the container.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Set

from dependency_injector import providers

from proton.domain.errors import BindingNotFoundError
from proton.domain.ports import ServiceProvider
from proton.shared import get_logger

logger = get_logger(__name__)


class ServiceContainer:
    """Registry resolving string keys to instances."""

    def __init__(self) -> None:
        # keys are arbitrary strings, so they are never set as attributes
        self._providers: Dict[str, providers.Provider] = {}
        self._shared: Set[str] = set()

    @property
    def providers(self) -> Dict[str, providers.Provider]:
        return dict(self._providers)

    def add(self, key: str, value: Any) -> None:
        """Bind ``value`` under ``key``; classes are instantiated on every get."""
        self._providers[key] = self._make_provider(value, shared=False)
        self._shared.discard(key)

    def singleton(self, key: str, value: Any) -> None:
        """Bind ``value`` under ``key``; classes are instantiated once."""
        self._providers[key] = self._make_provider(value, shared=True)
        self._shared.add(key)

    def factory(self, key: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Bind a factory callable invoked with ``args``/``kwargs`` on every get."""
        self._providers[key] = providers.Factory(fn, *args, **kwargs)
        self._shared.discard(key)

    def get(self, key: str) -> Any:
        provider = self._providers.get(key)
        if provider is None:
            raise BindingNotFoundError(key)
        return provider()

    def has(self, key: str) -> bool:
        return key in self._providers

    def is_registered(self, key: str) -> bool:
        return self.has(key) and key not in self._shared

    def is_singleton(self, key: str) -> bool:
        return self.has(key) and key in self._shared

    def remove(self, key: str) -> None:
        if self._providers.pop(key, None) is None:
            return
        self._shared.discard(key)
        logger.debug("container.binding.removed", key=key)

    def add_service_provider(self, provider: ServiceProvider) -> None:
        provider.register(self)
        logger.debug("container.provider.registered", provider=type(provider).__name__)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    @staticmethod
    def _make_provider(value: Any, shared: bool) -> providers.Provider:
        if isinstance(value, providers.Provider):
            return value
        if isinstance(value, type):
            return providers.Singleton(value) if shared else providers.Factory(value)
        return providers.Object(value)
