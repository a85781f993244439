"""
Shared test fixtures and helpers for RouteForge test suite.
"""

import logging
import textwrap

import pytest

from routeforge.patterns.cache import PatternCache, set_global_cache
from routeforge.routing import Router


# ============================================================================
# Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def fresh_global_cache():
    """Give every test its own global pattern cache."""
    set_global_cache(None)
    yield
    set_global_cache(None)


@pytest.fixture(autouse=True)
def reset_routeforge_logger():
    """The CLI may set the package logger level; undo it between tests."""
    logger = logging.getLogger("routeforge")
    level = logger.level
    yield
    logger.setLevel(level)


# ============================================================================
# Routing Fixtures
# ============================================================================


@pytest.fixture
def pattern_cache():
    """Private pattern cache with stats enabled."""
    return PatternCache(max_size=16)


@pytest.fixture
def router():
    """Router with a small, representative route table."""
    r = Router()
    r.add_route("GET", "home", "/")
    r.add_route("GET", "user", "/users/<id>", {"id": r"\d+"})
    r.add_route("POST", "user_create", "/users")
    r.add_route("GET", "archive", "/articles(/<year>(/<month>))")
    r.add_route("GET", "search", "/search(/<section>)", defaults={"section": "all"})
    r.add_route("GET", "paint", "/paint/<color>", {"color": ["red", "blue"]})
    return r


# ============================================================================
# Config Fixtures
# ============================================================================


ROUTES_YAML = textwrap.dedent(
    """
    cache_max_size: 64
    log_level: INFO
    routes:
      - method: GET
        name: user
        pattern: /users/<id>
        conditions:
          id: '\\d+'
        controller: users.show
      - method: GET
        name: archive
        pattern: /articles(/<year>(/<month>))
      - method: POST
        name: user_create
        pattern: /users
        controller: users.create
    """
)


@pytest.fixture
def routes_yaml(tmp_path):
    """Write a YAML route file and return its path."""
    path = tmp_path / "routes.yaml"
    path.write_text(ROUTES_YAML)
    return path
