"""
Match compiler: turns a pattern AST into one anchored regular expression.

Each parameter becomes a capturing group. ``param_order`` lists the
parameter names in capture order and ``group_indices`` holds the regex
group number of each, so capturing groups inside a condition never shift
the name mapping. Classes such as ``\w`` and ``\d`` match ASCII only.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple

from .ast_nodes import (
    PatternAST,
    LiteralSegment,
    ParamSegment,
    OptionalGroup,
    Segment,
)
from ..diagnostics.errors import PatternSemanticError
from ..grammar import PARAM_VALUE_SOURCE


@dataclass(frozen=True)
class CompiledMatcher:
    """Anchored regex plus the capture-to-name mapping."""
    source: str
    regex: Pattern
    param_order: Tuple[str, ...]
    group_indices: Tuple[int, ...]

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """
        Match a concrete path.

        Returns the captured values, or None. Captures inside an optional
        group that did not participate are left out rather than set to "".
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None

        params = {}
        for name, index in zip(self.param_order, self.group_indices):
            value = m.group(index)
            if value is not None:
                params[name] = value
        return params


def condition_source(name: str, condition: Any) -> Tuple[str, int]:
    """
    Render a parameter condition as regex source.

    Returns the source and the number of capturing groups it contains.
    """
    if condition is None:
        return PARAM_VALUE_SOURCE, 0

    if isinstance(condition, str):
        try:
            groups = re.compile(condition).groups
        except re.error as exc:
            raise PatternSemanticError(
                f"Invalid condition for parameter '{name}': {exc}",
                suggestions=["Conditions are regex fragments, check the escaping"],
            ) from exc
        return condition, groups

    if isinstance(condition, (set, frozenset)):
        values = sorted(str(v) for v in condition)
    elif isinstance(condition, (list, tuple)):
        values = [str(v) for v in condition]
    else:
        raise PatternSemanticError(
            f"Unsupported condition type for parameter '{name}': {type(condition).__name__}",
            suggestions=["Use a regex string or a list of allowed values"],
        )

    if not values:
        raise PatternSemanticError(
            f"Empty value list in condition for parameter '{name}'",
        )

    return "(?:" + "|".join(re.escape(v) for v in values) + ")", 0


def compile_matcher(
    ast: PatternAST,
    conditions: Optional[Mapping[str, Any]] = None,
) -> CompiledMatcher:
    """Compile an AST into an anchored matcher."""
    conditions = conditions or {}

    param_names = ast.get_param_names()
    if len(param_names) != len(set(param_names)):
        duplicates = sorted({name for name in param_names if param_names.count(name) > 1})
        raise PatternSemanticError(
            f"Duplicate parameter names: {', '.join(duplicates)}",
            file=ast.file,
            suggestions=["Give every parameter in a route a distinct name"],
        )

    param_order: List[str] = []
    group_indices: List[int] = []
    group_count = 0

    def build(segments: Tuple[Segment, ...]) -> str:
        nonlocal group_count
        parts = []
        for segment in segments:
            if isinstance(segment, LiteralSegment):
                parts.append(re.escape(segment.text))
            elif isinstance(segment, ParamSegment):
                inner, inner_groups = condition_source(segment.name, conditions.get(segment.name))
                group_count += 1
                param_order.append(segment.name)
                group_indices.append(group_count)
                group_count += inner_groups
                parts.append("(" + inner + ")")
            elif isinstance(segment, OptionalGroup):
                parts.append("(?:" + build(segment.segments) + ")?")
        return "".join(parts)

    source = "^" + build(ast.segments) + "$"

    try:
        regex = re.compile(source, re.ASCII)
    except re.error as exc:
        raise PatternSemanticError(
            f"Pattern compiles to an invalid regex: {exc}",
            file=ast.file,
        ) from exc

    return CompiledMatcher(
        source=source,
        regex=regex,
        param_order=tuple(param_order),
        group_indices=tuple(group_indices),
    )
