"""Navigation context consumed by the menu compiler."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Sequence
from urllib.parse import quote, unquote, urlparse

from .errors import RouteBuildError

_LOGGER = logging.getLogger(__name__)
_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class Router(Protocol):
    """Anything able to turn a route name into a URL."""

    def build(
        self,
        route_name: str,
        path_params: Mapping[str, object],
        *,
        strict: bool = False,
    ) -> Optional[str]: ...


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """The route matched for the current request."""

    name: str
    params: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Everything the menu compiler needs to know about the current request."""

    router: Router
    route: RouteMatch
    path: Sequence[str] = ()
    path_params: Mapping[str, object] = field(default_factory=dict)

    def segment(self, offset: int) -> Optional[str]:
        """Return the path segment at ``offset`` or ``None`` when out of range.

        Offsets count from the start of the path only; negative offsets are
        out of range.
        """

        if offset < 0 or offset >= len(self.path):
            return None
        return self.path[offset]


def split_path(path: str) -> List[str]:
    """Split a request path (or URL) into unquoted segments."""

    parsed = urlparse(path)
    return [unquote(segment) for segment in parsed.path.split("/") if segment]


class RouteTable:
    """A minimal router built from ``{name: "/pattern/{param}"}`` definitions."""

    def __init__(self, routes: Optional[Mapping[str, str]] = None) -> None:
        self._routes: Dict[str, str] = dict(routes or {})

    def add(self, name: str, pattern: str) -> None:
        self._routes[name] = pattern

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def build(
        self,
        route_name: str,
        path_params: Mapping[str, object],
        *,
        strict: bool = False,
    ) -> Optional[str]:
        """Fill the pattern of ``route_name`` with ``path_params``.

        Unknown routes and missing parameters yield ``None``, or raise
        :class:`RouteBuildError` when ``strict`` is set.
        """

        pattern = self._routes.get(route_name)
        if pattern is None:
            if strict:
                raise RouteBuildError(f"Unknown route '{route_name}'")
            return None

        missing = [name for name in _PLACEHOLDER.findall(pattern) if path_params.get(name) is None]
        if missing:
            if strict:
                raise RouteBuildError(
                    f"Route '{route_name}' requires parameters: {', '.join(missing)}"
                )
            _LOGGER.debug("Route %s missing parameters %s", route_name, missing)
            return None

        return _PLACEHOLDER.sub(lambda match: quote(str(path_params[match.group(1)]), safe=""), pattern)

    def match(self, path: str) -> Optional[RouteMatch]:
        """Return the first route whose pattern matches ``path``."""

        segments = split_path(path)
        for name, pattern in self._routes.items():
            params = _match_segments(split_path(pattern), segments)
            if params is not None:
                return RouteMatch(name=name, params=params)
        return None

    def context_for(self, path: str) -> RenderContext:
        """Build a :class:`RenderContext` for a request to ``path``."""

        route = self.match(path) or RouteMatch(name="")
        return RenderContext(
            router=self,
            route=route,
            path=split_path(path),
            path_params=dict(route.params),
        )


def _match_segments(pattern: Sequence[str], segments: Sequence[str]) -> Optional[Dict[str, str]]:
    if len(pattern) != len(segments):
        return None
    params: Dict[str, str] = {}
    for expected, actual in zip(pattern, segments):
        placeholder = _PLACEHOLDER.fullmatch(expected)
        if placeholder:
            params[placeholder.group(1)] = actual
        elif expected != actual:
            return None
    return params


__all__ = ["RenderContext", "RouteMatch", "RouteTable", "Router", "split_path"]
