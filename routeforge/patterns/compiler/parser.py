"""
Parser for RouteForge patterns.

Recursive descent over balanced ``(``/``)`` groups. Text between group
delimiters is split into literal runs and ``<name>`` placeholders.
"""

from typing import List, Optional

from .ast_nodes import (
    PatternAST,
    LiteralSegment,
    ParamSegment,
    OptionalGroup,
    Segment,
)
from ..diagnostics.errors import PatternSyntaxError, Span
from ..grammar import (
    GROUP_OPENED_CHAR,
    GROUP_CLOSED_CHAR,
    PARSE_PARAMS_RE,
)


def tokenize_params(text: str) -> List[Segment]:
    """
    Split a group-free buffer into literal and parameter segments.

    A ``<...>`` that is not a well-formed name stays literal text.
    Adjacent literal runs are merged.
    """
    segments: List[Segment] = []

    for match in PARSE_PARAMS_RE.finditer(text):
        name = match.group(1)
        if name is not None:
            segments.append(ParamSegment(name=name))
        elif segments and isinstance(segments[-1], LiteralSegment):
            segments[-1] = LiteralSegment(text=segments[-1].text + match.group(0))
        else:
            segments.append(LiteralSegment(text=match.group(0)))

    return segments


class PatternParser:
    """Parser for route patterns."""

    def __init__(self, source: str, filename: Optional[str] = None):
        self.source = source
        self.filename = filename

    def error(self, message: str, pos: int, suggestions: Optional[List[str]] = None) -> PatternSyntaxError:
        """Create syntax error at a source position."""
        return PatternSyntaxError(
            message=message,
            span=Span(pos, pos + 1, 1, pos + 1),
            file=self.filename,
            suggestions=suggestions,
        )

    def parse(self) -> PatternAST:
        """Parse the source into an AST."""
        segments = self.parse_groups(self.source, 0)
        return PatternAST(raw=self.source, segments=tuple(segments), file=self.filename)

    def parse_groups(self, text: str, offset: int) -> List[Segment]:
        """
        Parse ``text`` into segments.

        ``offset`` is the position of ``text`` within the full source and
        is only used for error spans.
        """
        segments: List[Segment] = []
        part = ""
        depth = 0
        finding_closed = False
        opened_at = 0
        part_start = 0

        for i, ch in enumerate(text):
            if ch == GROUP_OPENED_CHAR:
                if finding_closed:
                    depth += 1
                    part += ch
                else:
                    segments.extend(tokenize_params(part))
                    part = ""
                    depth = 0
                    finding_closed = True
                    opened_at = i
                    part_start = i + 1
            elif ch == GROUP_CLOSED_CHAR:
                if not finding_closed:
                    raise self.error(
                        f"Unbalanced '{GROUP_CLOSED_CHAR}' outside of an optional group",
                        offset + i,
                        [
                            f"Remove the stray '{GROUP_CLOSED_CHAR}'",
                            f"Open the group with '{GROUP_OPENED_CHAR}' before it",
                        ],
                    )
                if depth == 0:
                    children = self.parse_groups(part, offset + part_start)
                    segments.append(OptionalGroup.from_segments(children))
                    part = ""
                    finding_closed = False
                else:
                    depth -= 1
                    part += ch
            else:
                part += ch

        if finding_closed:
            raise self.error(
                f"Unclosed '{GROUP_OPENED_CHAR}' optional group",
                offset + opened_at,
                [f"Close the group with '{GROUP_CLOSED_CHAR}'"],
            )

        segments.extend(tokenize_params(part))
        return segments


def parse_pattern(source: str, filename: Optional[str] = None) -> PatternAST:
    """Parse a route pattern into an AST."""
    return PatternParser(source, filename).parse()
