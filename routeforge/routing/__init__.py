"""
Routing - compiled routes and an ordered first-match registry.
"""

from .querystring import QueryStringCodec, default_codec
from .route import Route
from .router import Router, RouteMatch

__all__ = [
    "QueryStringCodec",
    "default_codec",
    "Route",
    "Router",
    "RouteMatch",
]
