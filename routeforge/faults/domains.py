"""
RouteForge Faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- ROUTING faults
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class ConfigMissingFault(ConfigFault):
    """Required configuration is missing."""

    def __init__(self, key: str, **kwargs):
        super().__init__(
            code="CONFIG_MISSING",
            message=f"Required configuration key '{key}' is missing",
            metadata={"key": key, **kwargs.get("metadata", {})},
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# ROUTING Faults
# ============================================================================

class RoutingFault(Fault):
    """Base class for routing faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        public: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.ROUTING,
            severity=severity,
            retryable=False,
            public=public,
            metadata=metadata,
        )


class MethodInvalidFault(RoutingFault):
    """HTTP method is not one a route can be registered for."""

    def __init__(self, method: Any, allowed: list[str], **kwargs):
        super().__init__(
            code="METHOD_INVALID",
            message=f"Invalid http method {method!r}, expected one of: {', '.join(allowed)}",
            severity=Severity.FATAL,
            metadata={"method": method, "allowed": allowed, **kwargs.get("metadata", {})},
        )


class RouteDefinitionFault(RoutingFault):
    """A route argument has the wrong type or is empty."""

    def __init__(self, argument: str, reason: str, **kwargs):
        super().__init__(
            code="ROUTE_DEFINITION_INVALID",
            message=f"Invalid route argument '{argument}': {reason}",
            severity=Severity.FATAL,
            metadata={"argument": argument, "reason": reason, **kwargs.get("metadata", {})},
        )


class PatternInvalidFault(RoutingFault):
    """Route pattern is invalid."""

    def __init__(self, pattern: str, reason: str, **kwargs):
        super().__init__(
            code="PATTERN_INVALID",
            message=f"Invalid route pattern '{pattern}': {reason}",
            severity=Severity.FATAL,
            metadata={"pattern": pattern, "reason": reason, **kwargs.get("metadata", {})},
        )


class DuplicateRouteFault(RoutingFault):
    """A route with the same name is already registered."""

    def __init__(self, name: str, **kwargs):
        super().__init__(
            code="ROUTE_DUPLICATE",
            message=f"Route '{name}' is already registered",
            severity=Severity.FATAL,
            metadata={"name": name, **kwargs.get("metadata", {})},
        )


class RouteNotFoundFault(RoutingFault):
    """No route is registered under the requested name."""

    def __init__(self, name: str, **kwargs):
        super().__init__(
            code="ROUTE_NOT_FOUND",
            message=f"Route not found: {name}",
            metadata={"name": name, **kwargs.get("metadata", {})},
        )
