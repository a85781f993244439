"""
Route registry with ordered first-match lookup.

Routes are tried in registration order; the first one whose ``parse``
succeeds wins. Routes are also indexed by name for reverse routing.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple, TYPE_CHECKING

from ..faults import ConfigInvalidFault, DuplicateRouteFault, RouteNotFoundFault
from ..patterns.cache import PatternCache
from .querystring import QueryStringCodec
from .route import Route

if TYPE_CHECKING:
    from ..config import RouterConfig

logger = logging.getLogger("routeforge.routing")

_REQUIRED_KEYS = ("method", "name", "pattern")


class RouteMatch(NamedTuple):
    """Result of a successful lookup. Unpacks as ``route, params``."""
    route: Route
    params: Dict[str, str]


class Router:
    """
    Ordered route registry.

    Usage::

        router = Router()
        router.add_route("GET", "user", "/users/<id>")
        route, params = router.find("/users/42", "GET")
        router.build("user", {"id": "7"})   # "/users/7"
    """

    def __init__(
        self,
        codec: Optional[QueryStringCodec] = None,
        cache: Optional[PatternCache] = None,
    ):
        self._routes: List[Route] = []
        self._routes_by_name: Dict[str, Route] = {}
        self._codec = codec
        self._cache = cache

    @classmethod
    def from_config(cls, config: "RouterConfig", codec: Optional[QueryStringCodec] = None) -> "Router":
        """
        Build a registry from a ``RouterConfig``.

        Each route definition is a mapping with ``method``, ``name`` and
        ``pattern``, and optionally ``conditions``, ``defaults`` and
        ``controller``. The controller is bound as the route payload.
        """
        cache = PatternCache(max_size=config.cache_max_size) if config.cache_enabled else None
        router = cls(codec=codec, cache=cache)

        for index, definition in enumerate(config.routes):
            key = f"routes[{index}]"
            if not isinstance(definition, Mapping):
                raise ConfigInvalidFault(key, "route definition must be a mapping")

            missing = [k for k in _REQUIRED_KEYS if k not in definition]
            if missing:
                raise ConfigInvalidFault(key, f"missing required keys: {', '.join(missing)}")

            route = router.add_route(
                definition["method"],
                definition["name"],
                definition["pattern"],
                definition.get("conditions"),
                definition.get("defaults"),
            )
            if definition.get("controller") is not None:
                route.bind({"controller": definition["controller"]})

        return router

    def add_route(
        self,
        method: str,
        name: str,
        pattern: str,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> Route:
        """
        Compile and register a route.

        Raises:
            DuplicateRouteFault: a route with this name already exists
            MethodInvalidFault, RouteDefinitionFault, PatternInvalidFault:
                the definition is invalid
        """
        if name in self._routes_by_name:
            raise DuplicateRouteFault(name)

        route = Route(method, name, pattern, conditions, defaults, codec=self._codec, cache=self._cache)

        self._routes.append(route)
        self._routes_by_name[name] = route
        logger.debug("Registered route #%d %s %s %r", len(self._routes), route.method, name, pattern)

        return route

    def find(self, path: str, method: str) -> Optional[RouteMatch]:
        """Return the first route (in registration order) matching path and method."""
        for route in self._routes:
            params = route.parse(path, method)
            if params is not None:
                logger.debug("Matched %s %s -> %s", method, path, route.name)
                return RouteMatch(route, params)

        logger.debug("No route matches %s %s", method, path)
        return None

    def get_route_by_name(self, name: str) -> Optional[Route]:
        """Return the route registered under ``name``, or None."""
        return self._routes_by_name.get(name)

    def build(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        Build a path for the named route.

        Raises:
            RouteNotFoundFault: no route is registered under ``name``
        """
        route = self._routes_by_name.get(name)
        if route is None:
            raise RouteNotFoundFault(name)
        return route.build(params)

    def bundle(self) -> List[Dict[str, Any]]:
        """Per-route descriptors, in registration order."""
        return [route.bundle() for route in self._routes]

    @property
    def routes(self) -> Tuple[Route, ...]:
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._routes))

    def __contains__(self, name: object) -> bool:
        return name in self._routes_by_name
