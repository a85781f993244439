"""
RouteForge - route pattern compiler and router

Complete integration of:
- Patterns: parser, match compiler and path builder compiler
- Routing: compiled routes with query-string merging, ordered registry
- Faults: Structured error handling with fault domains
- Config: layered YAML/JSON/env configuration for route tables
"""

__version__ = "0.1.0"

# ============================================================================
# Patterns
# ============================================================================

from .patterns import (
    PatternAST,
    LiteralSegment,
    ParamSegment,
    OptionalGroup,
    PatternCompiler,
    CompiledPattern,
    PatternCache,
    PatternSyntaxError,
    PatternSemanticError,
    parse_pattern,
    compile_pattern,
)

# ============================================================================
# Routing
# ============================================================================

from .routing import Route, Router, RouteMatch, QueryStringCodec

# ============================================================================
# Config & Faults
# ============================================================================

from .config import RouterConfig, ConfigLoader, ConfigError
from .faults import (
    Fault,
    FaultDomain,
    Severity,
    ConfigInvalidFault,
    MethodInvalidFault,
    RouteDefinitionFault,
    PatternInvalidFault,
    DuplicateRouteFault,
    RouteNotFoundFault,
)

__all__ = [
    "__version__",
    # Patterns
    "PatternAST",
    "LiteralSegment",
    "ParamSegment",
    "OptionalGroup",
    "PatternCompiler",
    "CompiledPattern",
    "PatternCache",
    "PatternSyntaxError",
    "PatternSemanticError",
    "parse_pattern",
    "compile_pattern",
    # Routing
    "Route",
    "Router",
    "RouteMatch",
    "QueryStringCodec",
    # Config
    "RouterConfig",
    "ConfigLoader",
    "ConfigError",
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigInvalidFault",
    "MethodInvalidFault",
    "RouteDefinitionFault",
    "PatternInvalidFault",
    "DuplicateRouteFault",
    "RouteNotFoundFault",
]
