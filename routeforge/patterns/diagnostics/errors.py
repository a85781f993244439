"""
Diagnostic errors for RouteForge patterns.
"""

from dataclasses import dataclass
from typing import Optional, List


@dataclass(frozen=True)
class Span:
    """Source span for diagnostics."""
    start: int
    end: int
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        return f"Line {self.line}:{self.column} (pos {self.start}-{self.end})"


@dataclass(eq=False)
class PatternDiagnostic:
    """Base class for all pattern diagnostics."""
    message: str
    span: Optional[Span] = None
    file: Optional[str] = None
    suggestions: List[str] = None

    def __post_init__(self):
        if self.suggestions is None:
            self.suggestions = []

    def __str__(self) -> str:
        if self.span:
            return f"{self.message} ({self.span})"
        return self.message

    def format(self) -> str:
        """Format diagnostic for display."""
        parts = []

        error_type = self.__class__.__name__
        parts.append(f"{error_type}: {self.message}")
        if self.file and self.span:
            parts.append(f"  --> {self.file}:{self.span.line}:{self.span.column}")
        elif self.span:
            parts.append(f"  --> {self.span}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                parts.append(f"  {i}) {suggestion}")

        return "\n".join(parts)


class PatternSyntaxError(PatternDiagnostic, Exception):
    """Syntax error in pattern."""
    pass


class PatternSemanticError(PatternDiagnostic, Exception):
    """Semantic error in pattern."""
    pass
