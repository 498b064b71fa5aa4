"""Tests for syntax/plain.py: JSON-ready conversion."""

from __future__ import annotations

import json

import pytest

from icuparse import NumericReference, Tag, Variable, from_plain, parse, to_plain

# ============================================================================
# TO PLAIN
# ============================================================================


class TestToPlain:
    """AST to lists, dicts and strings."""

    def test_text_and_variables(self) -> None:
        """Optional fields are omitted."""
        assert to_plain(parse("Hi {name}, {n, number, ::percent}")) == [
            "Hi ",
            {"id": "name"},
            ", ",
            {"id": "n", "type": "number", "format": "::percent"},
        ]

    def test_plural_with_reference_and_tag(self) -> None:
        """Offsets stay ints; # becomes a ref entry."""
        ast = parse("{n, plural, offset:1 one {# item} other {<b>#</b>}}")

        assert to_plain(ast) == [
            {
                "id": "n",
                "type": "plural",
                "format": 1,
                "options": {
                    "one": [{"id": "n", "type": "number", "ref": True}, " item"],
                    "other": [{"name": "b", "children": ["#"]}],
                },
            }
        ]

    def test_self_closing_tag(self) -> None:
        """No children key for childless tags."""
        assert to_plain([Tag("br")]) == [{"name": "br"}]

    def test_output_is_json_serializable(self) -> None:
        """Plain data survives json round trip."""
        plain = to_plain(parse("{g, select, a {<i>x</i>} other {{v}}}"))

        assert json.loads(json.dumps(plain)) == plain

    def test_rejects_foreign_objects(self) -> None:
        """Only AST nodes convert."""
        with pytest.raises(TypeError, match="Cannot convert int"):
            to_plain([42])  # type: ignore[list-item]


# ============================================================================
# FROM PLAIN
# ============================================================================


class TestFromPlain:
    """Plain data back to AST nodes."""

    @pytest.mark.parametrize(
        "source",
        [
            "Hello, {name}!",
            "{n, plural, offset:0 =0 {none} other {# left}}",
            "<b>{g, select, other {<br/>}}</b>",
            "{d, date, short}",
        ],
    )
    def test_inverse_of_to_plain(self, source: str) -> None:
        """from_plain(to_plain(ast)) == ast."""
        ast = parse(source)

        assert from_plain(to_plain(ast)) == ast

    def test_reference_type_defaults(self) -> None:
        """ref entries may omit the type."""
        assert from_plain([{"id": "n", "ref": True}]) == [NumericReference("n")]

    def test_bodies_taken_as_given(self) -> None:
        """Adjacent text is not merged and other is not required."""
        result = from_plain([{"id": "g", "type": "select", "options": {"a": ["x", "y"]}}])

        assert result == [Variable("g", "select", None, {"a": ["x", "y"]})]

    def test_accepts_any_iterable(self) -> None:
        """Tuples work like lists."""
        assert from_plain(("a", {"id": "b"})) == ["a", Variable("b")]

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ("text", "Expected a list of nodes, got str"),
            ({"id": "n"}, "Expected a list of nodes, got dict"),
            ([42], "Not a message node"),
            ([{"type": "number"}], "Not a message node"),
            ([{"id": "n", "bogus": 1}], "Unknown keys \\['bogus'\\]"),
            ([{"id": "n", "ref": False}], "Unknown keys \\['ref'\\]"),
            ([{"id": "n", "type": 3}], "type must be a string"),
            ([{"id": "n", "type": "plural", "format": True}], "must be a string or an offset"),
            ([{"id": "n", "type": "select", "options": []}], "options must be a mapping"),
            ([{"id": "n", "type": "select", "options": {1: []}}], "selector must be a string"),
            ([{"id": "n", "ref": True, "type": "string"}], "Numeric reference must have type"),
            ([{"name": "b", "children": "x"}], "Expected a list of nodes, got str"),
            ([{"name": "b", "id": "x"}], "Unknown keys \\['id'\\]"),
        ],
    )
    def test_malformed_data(self, data: object, message: str) -> None:
        """Malformed input raises ValueError naming the problem."""
        with pytest.raises(ValueError, match=message):
            from_plain(data)  # type: ignore[arg-type]
