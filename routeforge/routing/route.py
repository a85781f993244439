"""
Compiled route: one pattern bound to an HTTP method and a name.

A route is compiled once, at construction, into a matcher and a path
builder. After that it is read-only; only the opaque payload attached
with ``bind()`` can change.
"""

import logging
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from ..faults import MethodInvalidFault, PatternInvalidFault, RouteDefinitionFault
from ..patterns.cache import PatternCache
from ..patterns.compiler.ast_nodes import PatternAST
from ..patterns.compiler.compiler import CompiledPattern, PatternCompiler
from ..patterns.compiler.parser import parse_pattern
from ..patterns.diagnostics.errors import PatternSemanticError, PatternSyntaxError
from ..patterns.grammar import (
    HTTP_METHODS,
    QUERY_STRING_PARAM,
    QUERY_STRING_SUFFIX,
    QUERY_STRING_VALUE_SOURCE,
)
from .querystring import QueryStringCodec, default_codec

logger = logging.getLogger("routeforge.routing")


class Route:
    """
    A compiled route.

    Usage::

        route = Route("GET", "article", "/articles(/<year>(/<month>))")
        route.parse("/articles/2024", "get")   # {"year": "2024"}
        route.build({"year": "2024", "month": "05"})  # "/articles/2024/05"
    """

    __slots__ = (
        "_method",
        "_name",
        "_pattern",
        "_conditions",
        "_defaults",
        "_compiled",
        "_param_set",
        "_codec",
        "_data",
    )

    def __init__(
        self,
        method: str,
        name: str,
        pattern: str,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
        *,
        codec: Optional[QueryStringCodec] = None,
        cache: Optional[PatternCache] = None,
    ):
        if not isinstance(method, str) or method.upper() not in HTTP_METHODS:
            raise MethodInvalidFault(method, list(HTTP_METHODS))

        if not isinstance(name, str) or not name:
            raise RouteDefinitionFault("name", "must be a non-empty string")

        if not isinstance(pattern, str) or not pattern:
            raise RouteDefinitionFault("pattern", "must be a non-empty string")

        if conditions is not None and not isinstance(conditions, MappingABC):
            raise RouteDefinitionFault("conditions", "must be a mapping")

        if defaults is not None and not isinstance(defaults, MappingABC):
            raise RouteDefinitionFault("defaults", "must be a mapping")

        conditions = dict(conditions or {})
        conditions[QUERY_STRING_PARAM] = QUERY_STRING_VALUE_SOURCE
        defaults = {key: str(value) for key, value in (defaults or {}).items()}

        self._method = method.upper()
        self._name = name
        self._pattern = pattern
        self._conditions = MappingProxyType(conditions)
        self._defaults = MappingProxyType(defaults)
        self._codec = codec or default_codec
        self._data: Any = None

        self._compiled = self._compile(pattern + QUERY_STRING_SUFFIX, conditions, defaults, cache)
        self._param_set = frozenset(self._compiled.param_order)

        logger.debug(
            "Compiled route %s %s %r -> %s",
            self._method, self._name, self._pattern, self._compiled.matcher.source,
        )

    def _compile(
        self,
        source: str,
        conditions: Dict[str, Any],
        defaults: Dict[str, str],
        cache: Optional[PatternCache],
    ) -> CompiledPattern:
        try:
            if cache is not None:
                return cache.compile_with_cache(source, conditions, defaults)
            return PatternCompiler().compile(parse_pattern(source), conditions, defaults)
        except (PatternSyntaxError, PatternSemanticError) as exc:
            raise PatternInvalidFault(
                self._pattern,
                exc.message,
                metadata={"diagnostic": exc.format(), "route": self._name},
            ) from exc

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def method(self) -> str:
        return self._method

    @property
    def name(self) -> str:
        return self._name

    @property
    def pattern(self) -> str:
        """Pattern text as given, without the implicit query-string suffix."""
        return self._pattern

    @property
    def conditions(self) -> Mapping[str, Any]:
        return self._conditions

    @property
    def defaults(self) -> Mapping[str, str]:
        return self._defaults

    @property
    def ast(self) -> PatternAST:
        return self._compiled.ast

    @property
    def compiled(self) -> CompiledPattern:
        return self._compiled

    @property
    def param_order(self) -> Tuple[str, ...]:
        return self._compiled.matcher.param_order

    @property
    def matcher_source(self) -> str:
        return self._compiled.matcher.source

    # ------------------------------------------------------------------
    # Payload
    # ------------------------------------------------------------------

    @property
    def data(self) -> Any:
        """Payload attached with ``bind()``, or None."""
        return self._data

    def bind(self, data: Any) -> "Route":
        """Attach an opaque payload to the route. Returns the route."""
        self._data = data
        return self

    # ------------------------------------------------------------------
    # Matching and building
    # ------------------------------------------------------------------

    def parse(self, path: str, method: str) -> Optional[Dict[str, str]]:
        """
        Match a concrete path and method.

        Returns the parameters, or None when the route does not match.
        Path values win over defaults, which win over query-string values.
        """
        if not isinstance(method, str) or method.upper() != self._method:
            return None

        if not isinstance(path, str):
            return None

        params = self._compiled.matcher.match(path)
        if params is None:
            return None

        for key, value in self._defaults.items():
            params.setdefault(key, value)

        query_string = params.pop(QUERY_STRING_PARAM, None)
        if query_string:
            for key, value in self._codec.decode(query_string).items():
                params.setdefault(key, value)

        return params

    def build(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        Build a concrete path from parameters.

        Parameters the pattern does not declare are encoded into the
        query string. Missing or None parameters render as their default
        or "", and None leftovers are left out of the query string.
        """
        path_params: Dict[str, Any] = {}
        query_params: Dict[str, Any] = {}

        for key, value in (params or {}).items():
            if key in self._param_set:
                path_params[key] = value
            else:
                query_params[key] = value

        query_string = self._codec.encode(query_params)
        if query_string:
            path_params[QUERY_STRING_PARAM] = query_string

        return self._compiled.builder(path_params)

    def bundle(self) -> Dict[str, Any]:
        """Descriptor another runtime can rebuild matching and building from."""
        data = self._data
        if isinstance(data, MappingABC):
            controller = data.get("controller")
        else:
            controller = getattr(data, "controller", None)

        return {
            "name": self._name,
            "method": self._method,
            "defaults": dict(self._defaults),
            "param_order": list(self.param_order),
            "matcher": self._compiled.matcher.source,
            "builder": self._compiled.builder.to_dict()["segments"],
            "controller": controller,
        }

    def __repr__(self) -> str:
        return f"Route({self._method} {self._name!r} {self._pattern!r})"
