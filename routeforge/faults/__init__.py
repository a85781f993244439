"""
RouteForge Faults - structured error types.

Errors raised while defining routes or loading configuration are
**typed fault signals** with a stable code, a domain and a severity,
rather than bare exceptions.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain taxonomy
- Severity: Severity levels

Domain faults:
- ConfigFault, ConfigMissingFault, ConfigInvalidFault
- RoutingFault, MethodInvalidFault, RouteDefinitionFault,
  PatternInvalidFault, DuplicateRouteFault, RouteNotFoundFault
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigMissingFault,
    ConfigInvalidFault,
    RoutingFault,
    MethodInvalidFault,
    RouteDefinitionFault,
    PatternInvalidFault,
    DuplicateRouteFault,
    RouteNotFoundFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Config
    "ConfigFault",
    "ConfigMissingFault",
    "ConfigInvalidFault",

    # Routing
    "RoutingFault",
    "MethodInvalidFault",
    "RouteDefinitionFault",
    "PatternInvalidFault",
    "DuplicateRouteFault",
    "RouteNotFoundFault",
]
