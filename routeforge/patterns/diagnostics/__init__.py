"""Diagnostics package."""

from .errors import (
    Span,
    PatternDiagnostic,
    PatternSyntaxError,
    PatternSemanticError,
)

__all__ = [
    "Span",
    "PatternDiagnostic",
    "PatternSyntaxError",
    "PatternSemanticError",
]
