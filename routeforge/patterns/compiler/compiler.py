"""
Compiler that turns an AST into an executable compiled pattern.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .ast_nodes import PatternAST
from .matcher import CompiledMatcher, compile_matcher
from .builder import PathBuilder, compile_builder


@dataclass(frozen=True)
class CompiledPattern:
    """Fully compiled pattern: matcher and builder over one AST."""
    raw: str
    ast: PatternAST
    matcher: CompiledMatcher
    builder: PathBuilder
    conditions: Mapping[str, Any] = field(default_factory=dict)
    defaults: Mapping[str, str] = field(default_factory=dict)

    @property
    def param_order(self):
        return self.matcher.param_order

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "raw": self.raw,
            "param_order": list(self.matcher.param_order),
            "matcher": self.matcher.source,
            "builder": self.builder.to_dict(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


class PatternCompiler:
    """Compiles an AST into a matcher/builder pair."""

    def compile(
        self,
        ast: PatternAST,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, str]] = None,
    ) -> CompiledPattern:
        """
        Compile AST into an executable pattern.

        Raises:
            PatternSemanticError: duplicate parameter names or a bad condition
        """
        conditions = dict(conditions or {})
        defaults = {k: str(v) for k, v in (defaults or {}).items()}

        matcher = compile_matcher(ast, conditions)
        builder = compile_builder(ast, defaults)

        return CompiledPattern(
            raw=ast.raw,
            ast=ast,
            matcher=matcher,
            builder=builder,
            conditions=MappingProxyType(conditions),
            defaults=MappingProxyType(defaults),
        )
