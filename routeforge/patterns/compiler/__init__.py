"""Compiler package for RouteForge patterns."""

from .parser import PatternParser, parse_pattern, tokenize_params
from .ast_nodes import (
    SegmentKind,
    LiteralSegment,
    ParamSegment,
    OptionalGroup,
    PatternAST,
)
from .matcher import CompiledMatcher, compile_matcher
from .builder import PathBuilder, compile_builder
from .compiler import PatternCompiler, CompiledPattern

__all__ = [
    "PatternParser",
    "parse_pattern",
    "tokenize_params",
    "SegmentKind",
    "LiteralSegment",
    "ParamSegment",
    "OptionalGroup",
    "PatternAST",
    "CompiledMatcher",
    "compile_matcher",
    "PathBuilder",
    "compile_builder",
    "PatternCompiler",
    "CompiledPattern",
]
