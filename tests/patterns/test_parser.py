"""
Unit tests for the RouteForge pattern parser.

Tests cover:
- Placeholder tokenization
- Optional group nesting and depends_on
- Malformed placeholders
- Unbalanced delimiter diagnostics
"""

import pytest
from routeforge.patterns.compiler.parser import (
    PatternParser,
    parse_pattern,
    tokenize_params,
)
from routeforge.patterns.compiler.ast_nodes import (
    PatternAST,
    LiteralSegment,
    ParamSegment,
    OptionalGroup,
    SegmentKind,
)
from routeforge.patterns.diagnostics.errors import PatternSyntaxError
from routeforge.patterns.grammar import QUERY_STRING_SUFFIX


class TestTokenizeParams:
    """Test splitting group-free text into literals and parameters."""

    def test_empty_text(self):
        assert tokenize_params("") == []

    def test_literal_only(self):
        assert tokenize_params("/users/list") == [LiteralSegment("/users/list")]

    def test_literal_and_param(self):
        """Test literal text followed by a placeholder."""
        assert tokenize_params("/users/<id>") == [
            LiteralSegment("/users/"),
            ParamSegment("id"),
        ]

    def test_adjacent_params(self):
        assert tokenize_params("<a><b>") == [ParamSegment("a"), ParamSegment("b")]

    def test_hyphen_and_underscore_names(self):
        segments = tokenize_params("/<user-id>/<_slug>")
        assert [s.name for s in segments if isinstance(s, ParamSegment)] == ["user-id", "_slug"]

    def test_malformed_placeholder_stays_literal(self):
        """A name starting with a digit is not a placeholder."""
        assert tokenize_params("/x/<1abc>") == [LiteralSegment("/x/<1abc>")]

    def test_empty_placeholder_stays_literal(self):
        assert tokenize_params("/a<>b") == [LiteralSegment("/a<>b")]

    def test_lone_angle_brackets_merge_into_literal(self):
        assert tokenize_params("a<b") == [LiteralSegment("a<b")]
        assert tokenize_params("a>b") == [LiteralSegment("a>b")]


class TestPatternParsing:
    """Test building the AST from full patterns."""

    def test_parse_returns_ast(self):
        ast = parse_pattern("/users/<id>")
        assert isinstance(ast, PatternAST)
        assert ast.raw == "/users/<id>"

    def test_parse_empty_pattern(self):
        ast = parse_pattern("")
        assert ast.segments == ()

    def test_parse_optional_group(self):
        """Test the canonical literal/param/optional layout."""
        ast = parse_pattern("/a<x>(/b<y>)")

        assert ast.segments == (
            LiteralSegment("/a"),
            ParamSegment("x"),
            OptionalGroup(
                segments=(LiteralSegment("/b"), ParamSegment("y")),
                depends_on=("y",),
            ),
        )

    def test_nested_groups(self):
        """Test that nested groups become nested nodes."""
        ast = parse_pattern("/articles(/<year>(/<month>))")

        outer = ast.segments[1]
        assert isinstance(outer, OptionalGroup)
        assert outer.depends_on == ("year",)

        inner = outer.segments[-1]
        assert isinstance(inner, OptionalGroup)
        assert inner.depends_on == ("month",)
        assert inner.segments == (LiteralSegment("/"), ParamSegment("month"))

    def test_depends_on_is_shallow(self):
        """A group with only a nested group has no direct dependents."""
        ast = parse_pattern("/a((/<b>))")
        outer = ast.segments[1]
        assert outer.depends_on == ()
        assert outer.segments[0].depends_on == ("b",)

    def test_depends_on_lists_every_direct_param(self):
        ast = parse_pattern("(/<a>-<b>)")
        assert ast.segments[0].depends_on == ("a", "b")

    def test_group_without_params(self):
        ast = parse_pattern("/a(/static)")
        group = ast.segments[1]
        assert group.depends_on == ()
        assert group.segments == (LiteralSegment("/static"),)

    def test_sibling_groups(self):
        ast = parse_pattern("/<a>(.<fmt>)(/<page>)")
        groups = [s for s in ast.segments if isinstance(s, OptionalGroup)]
        assert [g.depends_on for g in groups] == [("fmt",), ("page",)]

    def test_deep_nesting(self):
        ast = parse_pattern("(a(b(c(<d>))))")
        node = ast.segments[0]
        for _ in range(3):
            node = node.segments[-1]
        assert node.depends_on == ("d",)

    def test_query_string_suffix_parses_to_group(self):
        ast = parse_pattern("/a" + QUERY_STRING_SUFFIX)
        group = ast.segments[-1]
        assert group.segments == (LiteralSegment("?"), ParamSegment("query_string"))
        assert group.depends_on == ("query_string",)

    def test_param_names_depth_first(self):
        ast = parse_pattern("/<a>(/<b>(/<c>))/<d>")
        assert ast.get_param_names() == ["a", "b", "c", "d"]

    def test_parser_keeps_filename(self):
        ast = PatternParser("/a", filename="routes.yaml").parse()
        assert ast.file == "routes.yaml"


class TestAstSerialization:
    """Test JSON-ready tree export."""

    def test_to_dict(self):
        ast = parse_pattern("/a(/<b>)")
        assert ast.to_dict() == {
            "raw": "/a(/<b>)",
            "segments": [
                {"kind": "literal", "text": "/a"},
                {
                    "kind": "optional",
                    "depends_on": ["b"],
                    "segments": [
                        {"kind": "literal", "text": "/"},
                        {"kind": "param", "name": "b"},
                    ],
                },
            ],
        }

    def test_segment_kinds(self):
        assert LiteralSegment("x").kind is SegmentKind.LITERAL
        assert ParamSegment("x").kind is SegmentKind.PARAM
        assert OptionalGroup().kind is SegmentKind.OPTIONAL

    def test_nodes_are_immutable(self):
        segment = ParamSegment("id")
        with pytest.raises(AttributeError):
            segment.name = "other"


class TestUnbalancedGroups:
    """Test diagnostics for unbalanced delimiters."""

    def test_unclosed_group(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("/a(/b")

        assert "Unclosed" in exc_info.value.message
        assert exc_info.value.span.start == 2

    def test_unclosed_outer_group_points_at_opening(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("/x(/a(/b)")
        assert exc_info.value.span.start == 2

    def test_stray_close(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("/a)b")

        assert "Unbalanced" in exc_info.value.message
        assert exc_info.value.span.start == 2

    def test_stray_close_after_group(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("/a(/b))")
        assert exc_info.value.span.start == 6

    def test_format_includes_suggestions(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("/a(")

        formatted = exc_info.value.format()
        assert formatted.startswith("PatternSyntaxError: Unclosed")
        assert "Suggestions:" in formatted

    def test_format_includes_filename(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("/a(", filename="routes.yaml")
        assert "routes.yaml:1:3" in exc_info.value.format()

    def test_str_includes_span(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern(")")
        assert "pos 0-1" in str(exc_info.value)
