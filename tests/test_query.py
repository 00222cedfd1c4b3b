"""Tests for fetchero.query (default query synthesis)."""

from __future__ import annotations

import pytest

from fetchero.graphql import template_parts
from fetchero.query import build_query, to_literal


class TestBuildQuery:
    def test_no_args(self):
        result = build_query(["query { user ", " { id name } }"], {})
        assert result == {"query": "query { user  { id name } }", "variables": {}}

    def test_inline_literals(self):
        result = build_query(["query { users (", ") { id } }"], {"limit": 10, "active": True, "name": "Ada"})
        assert result["query"] == 'query { users (limit: 10, active: true, name: "Ada") { id } }'
        assert result["variables"] == {}

    def test_typed_variables(self):
        result = build_query(["query { user (", ") { id } }"], {"id": {"type": "ID!", "value": 7}})
        assert result == {"query": "query ($id: ID!) { user (id: $id) { id } }", "variables": {"id": 7}}

    def test_mixed_variables_and_literals(self):
        args = {"id": {"type": "ID!", "value": "u1"}, "first": 5, "input": {"type": "UserInput", "value": {"n": 1}}}
        result = build_query(["mutation { updateUser (", ") { id } }"], args)
        assert result["query"] == (
            "mutation ($id: ID!, $input: UserInput) { updateUser (id: $id, first: 5, input: $input) { id } }"
        )
        assert result["variables"] == {"id": "u1", "input": {"n": 1}}

    def test_invalid_argument_name(self):
        with pytest.raises(ValueError, match="invalid GraphQL name"):
            build_query(["query { user (", ") { id } }"], {"bad-name": 1})

    def test_works_with_generated_templates(self):
        parts = template_parts("query", "user", True, "id")
        assert build_query(parts, {"id": 1})["query"] == "query { user (id: 1) { id } }"


class TestToLiteral:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (False, "false"),
            (3, "3"),
            (1.5, "1.5"),
            ('say "hi"', '"say \\"hi\\""'),
            ([1, "a"], '[1, "a"]'),
            ({"a": 1, "b": [True]}, "{a: 1, b: [true]}"),
        ],
    )
    def test_literals(self, value, expected):
        assert to_literal(value) == expected

    def test_unsupported(self):
        with pytest.raises(TypeError, match="unsupported argument type"):
            to_literal(object())


class TestTemplateParts:
    def test_without_args(self):
        assert template_parts("query", "user", False, "id name email") == ["query { user ", " { id name email } }"]

    def test_with_args_empty_selection(self):
        assert template_parts("query", "user", True) == ["query { user (", ") {  } }"]

    def test_selection_is_stripped(self):
        assert template_parts("subscription", "userUpdated", False, "  id  ") == [
            "subscription { userUpdated ",
            " { id } }",
        ]
