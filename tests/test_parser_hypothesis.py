"""Hypothesis property-based tests for the message parser.

Focus on parser robustness and the parse/serialize round trip.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, event, example, given, settings
from hypothesis import strategies as st

from icuparse import MessageSyntaxError, NumericReference, Variable, parse, serialize
from icuparse.syntax.ast import Message
from tests.strategies import message_asts, plain_texts, special_texts

# ============================================================================
# IDENTITY
# ============================================================================


class TestPlainText:
    """Text without syntax parses to itself."""

    @given(plain_texts())
    @example("You've got mail")
    @example("50% > 10 # items, no placeholders")
    def test_plain_text_is_identity(self, text: str) -> None:
        """One text node, unchanged."""
        assert parse(text) == [text]

    @given(st.integers())
    def test_numbers_are_coerced(self, value: int) -> None:
        """Non-string input is converted with str()."""
        assert parse(value) == [str(value)]

    @given(plain_texts(), plain_texts())
    def test_text_around_placeholder(self, before: str, after: str) -> None:
        """Text on both sides of a placeholder survives."""
        assert parse(f"{before}{{x}}{after}") == [before, Variable("x"), after]


# ============================================================================
# ROUND TRIP
# ============================================================================


class TestRoundTrip:
    """Serializing a well-formed AST and parsing it back is lossless."""

    @given(message_asts())
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_parse_serialize_round_trip(self, ast: Message) -> None:
        """parse(serialize(ast)) == ast."""
        source = serialize(ast)
        event(f"source_len={min(len(source) // 20, 5) * 20}")

        assert parse(source) == ast

    @given(message_asts())
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_serialize_is_stable(self, ast: Message) -> None:
        """Serializing the re-parsed AST gives the same text."""
        source = serialize(ast)

        assert serialize(parse(source)) == source

    @given(special_texts())
    @example("'{'")
    @example("''")
    @example("'#'")
    def test_escaped_text_round_trip(self, text: str) -> None:
        """Any text, however dense in specials, survives escaping."""
        assert parse(serialize([text])) == [text]

    @given(special_texts())
    def test_escaped_text_in_plural_body(self, text: str) -> None:
        """Escaping accounts for # in plural bodies."""
        node = Variable("n", "plural", None, {"other": [text, NumericReference("n")]})

        assert parse(serialize([node])) == [node]


# ============================================================================
# ROBUSTNESS
# ============================================================================


class TestRobustness:
    """Arbitrary input never breaks the parser."""

    @given(special_texts())
    def test_only_syntax_errors(self, source: str) -> None:
        """Malformed input raises MessageSyntaxError and nothing else."""
        try:
            result = parse(source)
        except MessageSyntaxError as error:
            event(f"error={type(error).__name__}")
            assert error.position is not None
            assert 0 <= error.position <= len(source)
        else:
            event("outcome=parsed")
            assert isinstance(result, list)

    @pytest.mark.fuzz
    @given(st.text(alphabet="ab {}<>'#/,=\n", max_size=60))
    @settings(max_examples=5000, deadline=None)
    def test_parsed_input_round_trips(self, source: str) -> None:
        """Whatever parses also serializes and re-parses to the same AST."""
        try:
            ast = parse(source)
        except MessageSyntaxError:
            event("outcome=rejected")
            return

        event("outcome=parsed")
        assert parse(serialize(ast)) == ast
