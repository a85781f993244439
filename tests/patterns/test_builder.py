"""
Unit tests for the RouteForge path builder compiler.

Tests cover:
- Literal and parameter emission
- Optional group inclusion rules
- Default suppression
- Serialization of the builder tree
"""

from routeforge.patterns.compiler.builder import PathBuilder, compile_builder
from routeforge.patterns.compiler.parser import parse_pattern


def builder_for(pattern, defaults=None):
    return compile_builder(parse_pattern(pattern), defaults)


class TestEmission:
    """Test literal and parameter emission."""

    def test_static_pattern(self):
        build = builder_for("/users/list")
        assert build() == "/users/list"
        assert build({"ignored": "x"}) == "/users/list"

    def test_param_value(self):
        build = builder_for("/users/<id>")
        assert build({"id": "42"}) == "/users/42"

    def test_values_are_stringified(self):
        build = builder_for("/users/<id>")
        assert build({"id": 42}) == "/users/42"

    def test_missing_param_renders_empty(self):
        build = builder_for("/users/<id>")
        assert build({}) == "/users/"

    def test_missing_param_renders_default(self):
        build = builder_for("/users/<id>", {"id": "me"})
        assert build({}) == "/users/me"

    def test_none_value_counts_as_missing(self):
        assert builder_for("/users/<id>")({"id": None}) == "/users/"
        assert builder_for("/users/<id>", {"id": "me"})({"id": None}) == "/users/me"

    def test_values_are_not_escaped(self):
        build = builder_for("/files/<path>")
        assert build({"path": "a/b c"}) == "/files/a/b c"

    def test_builder_is_callable_object(self):
        build = builder_for("/a")
        assert isinstance(build, PathBuilder)
        assert repr(build) == "PathBuilder('/a')"


class TestOptionalGroups:
    """Test optional group inclusion."""

    def test_group_omitted_without_dependent(self):
        build = builder_for("/a<x>(/b<y>)")
        assert build({"x": "1"}) == "/a1"

    def test_group_included_with_dependent(self):
        build = builder_for("/a<x>(/b<y>)")
        assert build({"x": "1", "y": "2"}) == "/a1/b2"

    def test_group_literals_are_dropped_with_group(self):
        build = builder_for("/a(/static/<b>)")
        assert build({}) == "/a"

    def test_any_dependent_includes_group(self):
        build = builder_for("/d(/<a>-<b>)")
        assert build({"b": "2"}) == "/d/-2"

    def test_group_without_params_never_renders(self):
        build = builder_for("/a(/static)")
        assert build({"anything": "1"}) == "/a"

    def test_nested_groups(self):
        build = builder_for("/articles(/<year>(/<month>))")
        assert build({}) == "/articles"
        assert build({"year": "2024"}) == "/articles/2024"
        assert build({"year": "2024", "month": "05"}) == "/articles/2024/05"

    def test_inner_group_is_gated_by_outer(self):
        """The shallow rule: the outer group ignores nested dependents."""
        build = builder_for("/articles(/<year>(/<month>))")
        assert build({"month": "05"}) == "/articles"

    def test_empty_string_value_still_counts(self):
        build = builder_for("/a(/<b>)")
        assert build({"b": ""}) == "/a/"

    def test_none_value_does_not_include_group(self):
        build = builder_for("/a(/<b>)")
        assert build({"b": None}) == "/a"


class TestDefaults:
    """Test default suppression in optional groups."""

    def test_default_value_suppresses_group(self):
        build = builder_for("/a(/<y>)", {"y": "d"})
        assert build({"y": "d"}) == "/a"

    def test_override_includes_group(self):
        build = builder_for("/a(/<y>)", {"y": "d"})
        assert build({"y": "e"}) == "/a/e"

    def test_absent_param_with_default_suppresses_group(self):
        build = builder_for("/a(/<y>)", {"y": "d"})
        assert build({}) == "/a"

    def test_default_compared_as_string(self):
        build = builder_for("/page(/<n>)", {"n": 1})
        assert build({"n": 1}) == "/page"
        assert build({"n": 2}) == "/page/2"

    def test_default_fills_sibling_inside_included_group(self):
        build = builder_for("/r(/<a>/<b>)", {"b": "x"})
        assert build({"a": "1"}) == "/r/1/x"


class TestSerialization:
    """Test the builder descriptor."""

    def test_to_dict(self):
        build = builder_for("/a(/<y>)", {"y": "d"})
        assert build.to_dict() == {
            "defaults": {"y": "d"},
            "segments": [
                {"kind": "literal", "text": "/a"},
                {
                    "kind": "optional",
                    "depends_on": ["y"],
                    "segments": [
                        {"kind": "literal", "text": "/"},
                        {"kind": "param", "name": "y"},
                    ],
                },
            ],
        }

    def test_defaults_are_coerced(self):
        build = builder_for("/<n>", {"n": 3})
        assert build.defaults == {"n": "3"}
