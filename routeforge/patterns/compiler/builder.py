"""
Path builder compiler: the inverse of the matcher.

The AST is compiled once into nested closures. Calling the resulting
``PathBuilder`` with a parameter mapping renders a concrete path.

Rendering rules:
- Literal text is emitted verbatim.
- A parameter emits the supplied value, else its default, else "".
- An optional group is emitted only if at least one of its direct
  parameters was supplied with a value that differs from its default.
- A ``None`` value counts as not supplied.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .ast_nodes import (
    PatternAST,
    LiteralSegment,
    ParamSegment,
    OptionalGroup,
    Segment,
)

Render = Callable[[Mapping[str, Any]], str]


def _literal(text: str) -> Render:
    def render(params: Mapping[str, Any]) -> str:
        return text
    return render


def _param(name: str, defaults: Mapping[str, str]) -> Render:
    fallback = defaults.get(name, "")

    def render(params: Mapping[str, Any]) -> str:
        value = params.get(name)
        if value is not None:
            return str(value)
        return fallback
    return render


def _optional(group: OptionalGroup, defaults: Mapping[str, str]) -> Render:
    inner = _sequence(group.segments, defaults)
    # (name, declared default or None)
    checks: Tuple[Tuple[str, Optional[str]], ...] = tuple(
        (name, defaults.get(name)) for name in group.depends_on
    )

    def render(params: Mapping[str, Any]) -> str:
        for name, default in checks:
            value = params.get(name)
            if value is not None and (default is None or str(value) != default):
                return inner(params)
        return ""
    return render


def _sequence(segments: Tuple[Segment, ...], defaults: Mapping[str, str]) -> Render:
    parts: List[Render] = []
    for segment in segments:
        if isinstance(segment, LiteralSegment):
            parts.append(_literal(segment.text))
        elif isinstance(segment, ParamSegment):
            parts.append(_param(segment.name, defaults))
        elif isinstance(segment, OptionalGroup):
            parts.append(_optional(segment, defaults))

    if len(parts) == 1:
        return parts[0]

    def render(params: Mapping[str, Any]) -> str:
        return "".join(part(params) for part in parts)
    return render


class PathBuilder:
    """Compiled inverse of a pattern. Pure and reusable."""

    __slots__ = ("ast", "defaults", "_render")

    def __init__(self, ast: PatternAST, defaults: Optional[Mapping[str, str]] = None):
        self.ast = ast
        self.defaults: Dict[str, str] = {k: str(v) for k, v in (defaults or {}).items()}
        self._render = _sequence(ast.segments, self.defaults)

    def __call__(self, params: Optional[Mapping[str, Any]] = None) -> str:
        return self._render(params or {})

    def __repr__(self) -> str:
        return f"PathBuilder({self.ast.raw!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Tree and defaults, enough for another runtime to rebuild paths."""
        return {
            "defaults": dict(self.defaults),
            "segments": [s.to_dict() for s in self.ast.segments],
        }


def compile_builder(ast: PatternAST, defaults: Optional[Mapping[str, str]] = None) -> PathBuilder:
    """Compile an AST into a path builder."""
    return PathBuilder(ast, defaults)
