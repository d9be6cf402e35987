"""
Route table and dispatcher - Infrastructure Layer

Routes are matched in registration order against starlette style path
patterns (``/users/{user_id:int}``). Actions are resolved lazily, so a
string action can point at a container binding registered after the route.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.convertors import Convertor
from starlette.routing import compile_path

from proton.domain.entities import Route
from proton.domain.errors import (
    InvalidResponseError,
    MethodNotAllowedError,
    NotFoundError,
)
from proton.infrastructure.container import ServiceContainer
from proton.shared import REQUEST_KEY, HttpMethod, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _CompiledRoute:
    route: Route
    regex: re.Pattern
    convertors: Dict[str, Convertor]

    def match(self, path: str) -> Optional[Dict[str, Any]]:
        found = self.regex.match(path)
        if found is None:
            return None
        return {
            name: self.convertors[name].convert(value)
            for name, value in found.groupdict().items()
        }


class RouteCollection:
    """Collects route registrations bound to a container."""

    def __init__(self, container: ServiceContainer) -> None:
        self._container = container
        self._routes: List[_CompiledRoute] = []

    @property
    def routes(self) -> List[Route]:
        return [compiled.route for compiled in self._routes]

    def add_route(self, method: str, path: str, action: Any) -> Route:
        route = Route(method=str(getattr(method, "value", method)).upper(), path=path, action=action)
        regex, _, convertors = compile_path(path)
        self._routes.append(_CompiledRoute(route=route, regex=regex, convertors=convertors))
        logger.debug("router.route.added", method=route.method, path=path)
        return route

    def get_dispatcher(self) -> "Dispatcher":
        return Dispatcher(list(self._routes), self._container)


class Dispatcher:
    """Resolves a (method, path) pair to a response."""

    def __init__(self, routes: List[_CompiledRoute], container: ServiceContainer) -> None:
        self._routes = routes
        self._container = container

    def dispatch(self, method: str, path: str) -> Response:
        method = method.upper()
        route, params = self._match(method, path)

        action = self._resolve_action(route.action)
        request = self._current_request()

        logger.debug("router.dispatch", method=method, path=path, route=route.path)
        result = action(request, **params)
        return self._to_response(result, route)

    def _match(self, method: str, path: str) -> Tuple[Route, Dict[str, Any]]:
        allowed: List[str] = []
        fallback: Optional[Tuple[Route, Dict[str, Any]]] = None

        for compiled in self._routes:
            params = compiled.match(path)
            if params is None:
                continue
            if compiled.route.method == method:
                return compiled.route, params
            if method == HttpMethod.HEAD and compiled.route.method == HttpMethod.GET:
                fallback = fallback or (compiled.route, params)
            allowed.append(compiled.route.method)

        if fallback is not None:
            return fallback
        if allowed:
            # GET routes also answer HEAD
            if HttpMethod.GET in allowed:
                allowed.append(HttpMethod.HEAD.value)
            raise MethodNotAllowedError(allowed)
        raise NotFoundError()

    def _resolve_action(self, action: Any) -> Callable[..., Any]:
        if callable(action):
            return action

        if isinstance(action, str):
            key, _, attribute = action.partition(":")
            target = self._container.get(key)
            if attribute:
                target = getattr(target, attribute)
            if callable(target):
                return target

        raise TypeError(f"Route action {action!r} is not callable")

    def _current_request(self) -> Optional[Request]:
        if self._container.has(REQUEST_KEY):
            return self._container.get(REQUEST_KEY)
        return None

    @staticmethod
    def _to_response(result: Any, route: Route) -> Response:
        if isinstance(result, Response):
            return result
        if isinstance(result, str):
            return HTMLResponse(result)
        if isinstance(result, bytes):
            return Response(result)
        if result is None:
            return Response(status_code=204)

        try:
            return JSONResponse(jsonable_encoder(result))
        except (TypeError, ValueError) as exc:
            raise InvalidResponseError(
                f"Action for {route.method} {route.path} returned "
                f"{type(result).__name__}, which cannot be rendered",
            ) from exc
