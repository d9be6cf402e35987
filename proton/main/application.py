"""
Application facade - Main Layer

The long-lived kernel object. It owns the configuration map, the named
loggers, the service container, the route table, the event emitter and the
active exception decorator, and drives one request/response cycle at a time:

    request.received -> dispatch -> response.created -> (send) -> response.sent

Errors raised while the request is received or dispatched are turned into a
response by the exception decorator unless ``catch`` is disabled.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

import structlog
from fastapi import Request, Response

from proton.application import JsonExceptionDecorator
from proton.domain.entities import Event, ListenerPriority
from proton.domain.errors import InvalidResponseError
from proton.domain.ports import (
    ExceptionDecorator,
    RequestFactory,
    ResponseSender,
    ServiceProvider,
)
from proton.infrastructure import (
    CGIRequestFactory,
    CGIResponseSender,
    Emitter,
    RouteCollection,
    ServiceContainer,
)
from proton.shared import (
    APP_KEY,
    REQUEST_KEY,
    HttpMethod,
    LifecycleEvent,
    RequestType,
    get_logger,
)
from proton.shared.consts import EnumEnvironment

logger = get_logger(__name__)


class Application:
    """HTTP application kernel."""

    def __init__(
        self,
        debug: bool = True,
        request_factory: Optional[RequestFactory] = None,
        response_sender: Optional[ResponseSender] = None,
        emitter: Optional[Emitter] = None,
    ) -> None:
        self._config: Dict[str, Any] = {}
        self._loggers: Dict[str, structlog.stdlib.BoundLogger] = {}
        self._container: Optional[ServiceContainer] = None
        self._router: Optional[RouteCollection] = None
        self._emitter = emitter or Emitter()
        self._request_factory = request_factory or CGIRequestFactory()
        self._response_sender = response_sender or CGIResponseSender()

        self.set_config("debug", debug)
        self._exception_decorator: ExceptionDecorator = JsonExceptionDecorator(
            debug=lambda: self.get_config("debug", True) is True
        )

    # ------------------------------------------------------------------
    # Configuration and loggers
    # ------------------------------------------------------------------
    def set_config(self, key: str, value: Any) -> None:
        self._config[key] = value

    def get_config(self, key: str, default: Any = None) -> Any:
        value = self._config.get(key)
        return default if value is None else value

    def get_logger(self, name: str = "default") -> structlog.stdlib.BoundLogger:
        """Return the logger registered under ``name``, creating it once."""
        if name not in self._loggers:
            self._loggers[name] = get_logger(name).bind(
                environment=self.get_config("environment", EnumEnvironment.DEVELOPMENT.value)
            )
        return self._loggers[name]

    # ------------------------------------------------------------------
    # Container
    # ------------------------------------------------------------------
    def set_container(self, container: ServiceContainer) -> None:
        self._container = container
        self._container.singleton(APP_KEY, self)
        self._router = None

    def get_container(self) -> ServiceContainer:
        if self._container is None:
            self.set_container(ServiceContainer())
        return self._container

    def set_binding(self, key: str, value: Any) -> None:
        self.get_container().singleton(key, value)

    def get_binding(self, key: str) -> Any:
        return self.get_container().get(key)

    def has_binding(self, key: str) -> bool:
        container = self.get_container()
        return container.is_registered(key) or container.is_singleton(key)

    def remove_binding(self, key: str) -> None:
        self.get_container().remove(key)

    def register(self, provider: ServiceProvider) -> None:
        """Register a service provider's bindings into the container."""
        self.get_container().add_service_provider(provider)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------
    def get_router(self) -> RouteCollection:
        if self._router is None:
            self._router = RouteCollection(self.get_container())
        return self._router

    def route(self, method: Union[str, HttpMethod], path: str, action: Any) -> None:
        self.get_router().add_route(method, path, action)

    def get(self, path: str, action: Any) -> None:
        self.route(HttpMethod.GET, path, action)

    def post(self, path: str, action: Any) -> None:
        self.route(HttpMethod.POST, path, action)

    def put(self, path: str, action: Any) -> None:
        self.route(HttpMethod.PUT, path, action)

    def delete(self, path: str, action: Any) -> None:
        self.route(HttpMethod.DELETE, path, action)

    def patch(self, path: str, action: Any) -> None:
        self.route(HttpMethod.PATCH, path, action)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def get_event_emitter(self) -> Emitter:
        return self._emitter

    def subscribe(
        self,
        name: Union[str, LifecycleEvent],
        listener: Any,
        priority: int = ListenerPriority.NORMAL,
    ) -> None:
        self._emitter.add_listener(name, listener, priority)

    def emit(self, name: Union[str, LifecycleEvent, Event], *args: Any) -> Event:
        return self._emitter.emit(name, *args)

    # ------------------------------------------------------------------
    # Exception decoration
    # ------------------------------------------------------------------
    def set_exception_decorator(self, decorator: ExceptionDecorator) -> None:
        self._exception_decorator = decorator

    def get_exception_decorator(self) -> ExceptionDecorator:
        return self._exception_decorator

    # ------------------------------------------------------------------
    # Request cycle
    # ------------------------------------------------------------------
    def handle(
        self,
        request: Request,
        request_type: RequestType = RequestType.MAIN,
        catch: bool = True,
    ) -> Response:
        """
        Handle ``request`` and return the response.

        Args:
            request: The inbound request; it is bound into the container so
                route actions and services can resolve it.
            request_type: ``RequestType.MAIN`` or ``RequestType.SUB``.
            catch: When false, errors propagate to the caller untouched.

        Raises:
            ValueError: ``request_type`` is not a ``RequestType``.
            InvalidResponseError: The exception decorator did not return a
                response. Raised whatever the value of ``catch``.
        """
        request_type = RequestType(request_type)
        self.get_container().add(REQUEST_KEY, request)
        method = request.method
        path = _path_info(request)

        try:
            self.emit(LifecycleEvent.REQUEST_RECEIVED, request)

            dispatcher = self.get_router().get_dispatcher()
            response = dispatcher.dispatch(method, path)

            logger.debug(
                "kernel.request.handled",
                method=method,
                path=path,
                status_code=response.status_code,
                request_type=request_type.name,
            )
            self.emit(LifecycleEvent.RESPONSE_CREATED, request, response)
            return response

        except Exception as exc:
            if not catch:
                raise

            response = self._exception_decorator(exc)
            if not isinstance(response, Response):
                raise InvalidResponseError(
                    "Exception decorator did not return a Response, got "
                    f"{type(response).__name__}"
                ) from exc

            logger.warning(
                "kernel.request.failed",
                method=method,
                path=path,
                error=str(exc),
                error_type=type(exc).__name__,
                status_code=response.status_code,
            )

            self.emit(LifecycleEvent.RESPONSE_CREATED, request, response)
            return response

    def terminate(self, request: Request, response: Response) -> None:
        """Signal that ``response`` has been delivered for ``request``."""
        self.emit(LifecycleEvent.RESPONSE_SENT, request, response)

    def run(self, request: Optional[Request] = None) -> None:
        """Handle one request end to end: build, handle, send, terminate."""
        if request is None:
            request = self._request_factory()

        response = self.handle(request)
        self._response_sender(response)

        self.terminate(request, response)


def _path_info(request: Request) -> str:
    path = request.scope.get("path") or "/"
    root_path = request.scope.get("root_path") or ""
    if root_path and path.startswith(root_path):
        path = path[len(root_path):] or "/"
    return path
