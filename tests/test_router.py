"""
Tests for the route registry.
"""

import pytest

from routeforge.config import RouterConfig
from routeforge.faults import (
    ConfigInvalidFault,
    DuplicateRouteFault,
    PatternInvalidFault,
    RouteNotFoundFault,
)
from routeforge.patterns import PatternCache
from routeforge.routing import Route, RouteMatch, Router


class TestRegistration:
    """Test adding routes."""

    def test_add_route_returns_route(self):
        router = Router()
        route = router.add_route("GET", "home", "/")
        assert isinstance(route, Route)
        assert router.get_route_by_name("home") is route

    def test_duplicate_name_is_rejected(self, router):
        with pytest.raises(DuplicateRouteFault) as exc_info:
            router.add_route("POST", "user", "/other")

        assert exc_info.value.code == "ROUTE_DUPLICATE"
        assert len(router) == 6

    def test_invalid_route_is_not_registered(self):
        router = Router()
        with pytest.raises(PatternInvalidFault):
            router.add_route("GET", "bad", "/a(")
        assert "bad" not in router

    def test_registration_order_is_kept(self, router):
        assert [route.name for route in router] == [
            "home", "user", "user_create", "archive", "search", "paint",
        ]

    def test_routes_is_a_copy(self, router):
        routes = router.routes
        assert isinstance(routes, tuple)
        router.add_route("GET", "late", "/late")
        assert len(routes) == 6
        assert len(router.routes) == 7

    def test_contains_by_name(self, router):
        assert "user" in router
        assert "nope" not in router

    def test_shared_cache(self):
        cache = PatternCache()
        router = Router(cache=cache)
        router.add_route("GET", "show", "/items/<id>")
        router.add_route("PUT", "update", "/items/<id>")
        assert cache.get_stats().hits == 1


class TestFind:
    """Test first-match lookup."""

    def test_find_returns_route_match(self, router):
        found = router.find("/users/42", "GET")

        assert isinstance(found, RouteMatch)
        route, params = found
        assert route.name == "user"
        assert params == {"id": "42"}

    def test_find_no_match(self, router):
        assert router.find("/nowhere", "GET") is None

    def test_condition_rejects(self, router):
        assert router.find("/users/abc", "GET") is None
        assert router.find("/paint/green", "GET") is None

    def test_method_selects_route(self, router):
        assert router.find("/users", "POST").route.name == "user_create"
        assert router.find("/users", "GET") is None

    def test_first_match_wins(self):
        router = Router()
        router.add_route("GET", "specific", "/pages/about")
        router.add_route("GET", "generic", "/pages/<slug>")

        assert router.find("/pages/about", "GET").route.name == "specific"
        assert router.find("/pages/contact", "GET").route.name == "generic"

    def test_query_merged_into_params(self, router):
        found = router.find("/articles/2024?sort=new", "GET")
        assert found.params == {"year": "2024", "sort": "new"}

    def test_defaults_applied(self, router):
        assert router.find("/search", "GET").params == {"section": "all"}


class TestReverseRouting:
    """Test building paths by route name."""

    def test_build(self, router):
        assert router.build("user", {"id": 7}) == "/users/7"
        assert router.build("archive", {"year": "2024", "month": "05"}) == "/articles/2024/05"

    def test_build_with_query(self, router):
        assert router.build("search", {"q": "x"}) == "/search?q=x"

    def test_build_default_suppressed(self, router):
        assert router.build("search", {"section": "all"}) == "/search"

    def test_build_unknown_name(self, router):
        with pytest.raises(RouteNotFoundFault) as exc_info:
            router.build("missing")
        assert exc_info.value.code == "ROUTE_NOT_FOUND"
        assert str(exc_info.value) == "[ROUTE_NOT_FOUND] Route not found: missing"

    def test_get_route_by_name_missing(self, router):
        assert router.get_route_by_name("missing") is None


class TestBundle:
    """Test bundling the registry."""

    def test_bundle_order_and_names(self, router):
        bundle = router.bundle()
        assert [entry["name"] for entry in bundle] == [route.name for route in router]

    def test_bundle_empty_router(self):
        assert Router().bundle() == []


class TestFromConfig:
    """Test building a registry from RouterConfig."""

    def test_from_config(self):
        config = RouterConfig(routes=[
            {"method": "GET", "name": "user", "pattern": "/users/<id>",
             "conditions": {"id": r"\d+"}, "controller": "users.show"},
            {"method": "POST", "name": "create", "pattern": "/users"},
        ])
        router = Router.from_config(config)

        assert len(router) == 2
        assert router.get_route_by_name("user").data == {"controller": "users.show"}
        assert router.get_route_by_name("create").data is None
        assert router.find("/users/1", "GET").params == {"id": "1"}

    def test_cache_follows_config(self):
        cached = Router.from_config(RouterConfig(cache_max_size=5))
        uncached = Router.from_config(RouterConfig(cache_enabled=False))

        assert cached._cache.max_size == 5
        assert uncached._cache is None

    def test_missing_required_key(self):
        config = RouterConfig(routes=[{"method": "GET", "pattern": "/"}])
        with pytest.raises(ConfigInvalidFault) as exc_info:
            Router.from_config(config)

        assert exc_info.value.metadata["key"] == "routes[0]"
        assert "name" in exc_info.value.message

    def test_definition_must_be_mapping(self):
        with pytest.raises(ConfigInvalidFault):
            Router.from_config(RouterConfig(routes=["GET / home"]))
