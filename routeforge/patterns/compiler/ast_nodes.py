"""
AST node definitions for RouteForge patterns.

These nodes represent the parsed structure of a route pattern. Nodes are
frozen: once a pattern is parsed its tree never changes.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union
from enum import Enum


class SegmentKind(str, Enum):
    """Kind of pattern segment."""
    LITERAL = "literal"
    PARAM = "param"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class LiteralSegment:
    """Raw text, matched and emitted verbatim."""
    text: str
    kind: ClassVar[SegmentKind] = SegmentKind.LITERAL

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "text": self.text}


@dataclass(frozen=True)
class ParamSegment:
    """Named capture point."""
    name: str
    kind: ClassVar[SegmentKind] = SegmentKind.PARAM

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "name": self.name}


@dataclass(frozen=True)
class OptionalGroup:
    """
    Group that may be absent from a concrete path.

    ``depends_on`` lists the parameters that are direct children of the
    group. Parameters inside a nested group are not included.
    """
    segments: Tuple["Segment", ...] = ()
    depends_on: Tuple[str, ...] = ()
    kind: ClassVar[SegmentKind] = SegmentKind.OPTIONAL

    @classmethod
    def from_segments(cls, segments: List["Segment"]) -> "OptionalGroup":
        """Build a group, collecting its direct parameters."""
        depends_on: List[str] = []
        for segment in segments:
            if isinstance(segment, ParamSegment) and segment.name not in depends_on:
                depends_on.append(segment.name)
        return cls(segments=tuple(segments), depends_on=tuple(depends_on))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "depends_on": list(self.depends_on),
            "segments": [s.to_dict() for s in self.segments],
        }


Segment = Union[LiteralSegment, ParamSegment, OptionalGroup]


@dataclass(frozen=True)
class PatternAST:
    """Complete AST for a route pattern."""
    raw: str
    segments: Tuple[Segment, ...] = field(default_factory=tuple)
    file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "raw": self.raw,
            "segments": [s.to_dict() for s in self.segments],
        }

    def get_param_names(self) -> List[str]:
        """Get all parameter names (including nested optionals), in order."""
        names = []

        def collect(segments):
            for seg in segments:
                if isinstance(seg, ParamSegment):
                    names.append(seg.name)
                elif isinstance(seg, OptionalGroup):
                    collect(seg.segments)

        collect(self.segments)
        return names
