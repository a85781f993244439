"""
RouteForge Patterns - route pattern language and compiler.

A pattern describes a family of paths with literal text, ``<name>``
parameters and ``(...)`` optional groups that nest to any depth. This
package provides:
- Recursive-descent parser producing an immutable AST
- Match compiler producing one anchored regex with capture mapping
- Path builder compiler producing the inverse as compiled closures
- LRU cache of compiled patterns
- Diagnostics with source spans and suggestions
"""

from .compiler.parser import PatternParser, parse_pattern, tokenize_params
from .compiler.ast_nodes import (
    PatternAST,
    SegmentKind,
    LiteralSegment,
    ParamSegment,
    OptionalGroup,
)
from .compiler.matcher import CompiledMatcher, compile_matcher
from .compiler.builder import PathBuilder, compile_builder
from .compiler.compiler import PatternCompiler, CompiledPattern
from .diagnostics.errors import (
    Span,
    PatternDiagnostic,
    PatternSyntaxError,
    PatternSemanticError,
)
from .cache import (
    CacheStats,
    PatternCache,
    compile_pattern,
    get_global_cache,
    set_global_cache,
)

__all__ = [
    # Parser
    "PatternParser",
    "parse_pattern",
    "tokenize_params",
    # AST
    "PatternAST",
    "SegmentKind",
    "LiteralSegment",
    "ParamSegment",
    "OptionalGroup",
    # Compiler
    "CompiledMatcher",
    "compile_matcher",
    "PathBuilder",
    "compile_builder",
    "PatternCompiler",
    "CompiledPattern",
    # Diagnostics
    "Span",
    "PatternDiagnostic",
    "PatternSyntaxError",
    "PatternSemanticError",
    # Caching
    "CacheStats",
    "PatternCache",
    "compile_pattern",
    "get_global_cache",
    "set_global_cache",
]
