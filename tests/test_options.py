"""Tests for ParserOptions validation and merging."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from icuparse import (
    ConfigurationError,
    MessageParser,
    NumericReference,
    ParserOptions,
    Variable,
)
from icuparse.diagnostics import DiagnosticCode
from icuparse.enums import SymbolRole

# ============================================================================
# DEFAULTS
# ============================================================================


class TestDefaults:
    """Default options describe the ICU dialect."""

    def test_default_symbols(self) -> None:
        """Defaults match ICU MessageFormat."""
        options = ParserOptions()

        assert (options.open, options.close) == ("{", "}")
        assert (options.tag_open, options.tag_close, options.tag_closing) == ("<", ">", "/")
        assert (options.sep, options.sub_var, options.escape) == (",", "#", "'")
        assert options.offset == "offset:"
        assert options.allow_tags is True

    def test_default_type_lists(self) -> None:
        """plural and selectordinal are subnumeric; select only takes sub-messages."""
        options = ParserOptions()

        assert options.is_subnumeric("plural")
        assert options.is_subnumeric("selectordinal")
        assert not options.is_subnumeric("select")
        assert options.is_submessage("select")
        assert not options.is_submessage("number")
        assert not options.is_submessage(None)

    def test_is_default(self) -> None:
        """is_default compares against a fresh default instance."""
        assert ParserOptions().is_default
        assert not ParserOptions(allow_tags=False).is_default

    def test_role_lookup(self) -> None:
        """Each delimiter maps to its role."""
        options = ParserOptions()

        assert options.role_of("{") is SymbolRole.OPEN
        assert options.role_of("'") is SymbolRole.ESCAPE
        assert options.role_of("x") is None
        assert options.role_of(None) is None

    def test_options_are_hashable(self) -> None:
        """Options can be used as cache keys."""
        assert hash(ParserOptions()) == hash(ParserOptions())


# ============================================================================
# VALIDATION
# ============================================================================


class TestValidation:
    """Invalid configurations fail at construction."""

    def test_multi_character_option_rejected(self) -> None:
        """Delimiters must be exactly one character."""
        with pytest.raises(ConfigurationError, match="Option OPEN must be a 1-length string"):
            MessageParser({"OPEN": "{{", "CLOSE": "}}"})

    def test_empty_option_rejected(self) -> None:
        """An empty delimiter is rejected like a long one."""
        with pytest.raises(ConfigurationError, match="Option SEP must be a 1-length string"):
            ParserOptions(sep="")

    def test_non_string_option_rejected(self) -> None:
        """Delimiters must be strings."""
        with pytest.raises(ConfigurationError, match="Option ESCAPE"):
            ParserOptions(escape=1)  # type: ignore[arg-type]

    def test_matching_options_rejected(self) -> None:
        """Two roles cannot share a character."""
        with pytest.raises(ConfigurationError, match="Option OPEN and TAG_OPEN cannot match") as exc:
            MessageParser({"OPEN": "<"})

        assert exc.value.options == ("OPEN", "TAG_OPEN")
        assert exc.value.diagnostic is not None
        assert exc.value.diagnostic.code is DiagnosticCode.OPTION_CONFLICT

    def test_configuration_error_is_value_error(self) -> None:
        """ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError, match="cannot match"):
            ParserOptions(sep="#")

    def test_empty_offset_keyword_rejected(self) -> None:
        """The offset keyword must be non-empty."""
        with pytest.raises(ConfigurationError, match="Option OFFSET"):
            ParserOptions(offset="")

    def test_type_list_as_string_rejected(self) -> None:
        """A bare string is not a list of types."""
        with pytest.raises(ConfigurationError, match="submessage_types"):
            ParserOptions(submessage_types="select")  # type: ignore[arg-type]

    def test_type_list_normalized_to_tuple(self) -> None:
        """Type lists are stored as tuples."""
        options = ParserOptions(subnumeric_types=["plural"])

        assert options.subnumeric_types == ("plural",)

    @given(st.sampled_from(["{", "}", "<", ">", "/", ",", "#", "'"]))
    def test_any_duplicate_default_rejected(self, char: str) -> None:
        """Reusing any default delimiter for a new role fails."""
        roles = ["open", "close", "tag_open", "tag_close", "tag_closing", "sep", "sub_var", "escape"]
        defaults = ParserOptions()
        for role in roles:
            if getattr(defaults, role) != char:
                with pytest.raises(ConfigurationError):
                    ParserOptions(**{role: char})
                break

    @given(
        st.lists(
            st.characters(exclude_categories=("Cs",)),
            min_size=8,
            max_size=8,
            unique=True,
        )
    )
    def test_distinct_single_characters_accepted(self, chars: list[str]) -> None:
        """Any eight distinct characters form a valid configuration."""
        roles = ["open", "close", "tag_open", "tag_close", "tag_closing", "sep", "sub_var", "escape"]
        options = ParserOptions(**dict(zip(roles, chars, strict=True)))

        assert options.open == chars[0]


# ============================================================================
# MERGING
# ============================================================================


class TestMerging:
    """from_mapping() and merged() accept historical and field names."""

    def test_historical_names(self) -> None:
        """Upper-case option names map to fields."""
        options = ParserOptions.from_mapping({"OPEN": "(", "CLOSE": ")", "allowTags": False})

        assert options.open == "("
        assert options.close == ")"
        assert options.allow_tags is False

    def test_field_names_and_overrides(self) -> None:
        """Keyword overrides win over the mapping."""
        options = ParserOptions.from_mapping({"sep": ";"}, sep="|")

        assert options.sep == "|"

    def test_unknown_keys_warn(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown keys are ignored with a warning."""
        with caplog.at_level(logging.WARNING, logger="icuparse.syntax.options"):
            options = ParserOptions.from_mapping({"requireOther": False, "bogus": 1})

        assert options.is_default
        assert "bogus, requireOther" in caplog.text

    def test_merged_keeps_existing_values(self) -> None:
        """merged() starts from the instance, not from the defaults."""
        base = ParserOptions(open="(", close=")")
        options = base.merged(TAG_OPEN="[")

        assert (options.open, options.close, options.tag_open) == ("(", ")", "[")

    def test_merged_without_changes_is_identity(self) -> None:
        """Nothing to merge returns the same instance."""
        base = ParserOptions()

        assert base.merged() is base


# ============================================================================
# PARSER CONSTRUCTION
# ============================================================================


class TestParserConstruction:
    """MessageParser resolves options from several forms."""

    def test_takes_options_mapping(self) -> None:
        """Custom delimiters change what is parsed."""
        parser = MessageParser({"OPEN": "(", "CLOSE": ")"})

        assert parser.parse("Hello, (name)!") == ["Hello, ", Variable("name"), "!"]

    def test_takes_options_instance_with_overrides(self) -> None:
        """Keyword overrides apply on top of a ParserOptions instance."""
        parser = MessageParser(ParserOptions(open="("), close=")")

        assert parser.options.open == "("
        assert parser.options.close == ")"

    def test_takes_keyword_options(self) -> None:
        """Options can be given as keywords alone."""
        parser = MessageParser(allowTags=False)

        assert parser.parse("<b>hi</b>") == ["<b>hi</b>"]

    def test_require_other_is_not_supported(self) -> None:
        """requireOther is ignored: other stays mandatory."""
        parser = MessageParser({"requireOther": False})

        with pytest.raises(SyntaxError, match="expected other sub-message"):
            parser.parse("{test,plural,one{}}")

    def test_custom_type_lists(self) -> None:
        """Custom sub-message types parse like select."""
        parser = MessageParser(submessage_types=("select", "gender"))

        assert parser.parse("{g, gender, other {x}}") == [
            Variable("g", "gender", None, {"other": ["x"]})
        ]
        assert parser.parse("{n, plural, other}") == [Variable("n", "plural", "other")]

    def test_custom_offset_keyword(self) -> None:
        """The offset keyword is configurable."""
        parser = MessageParser(OFFSET="skip=")

        assert parser.parse("{n, plural, skip=2 other {#}}") == [
            Variable("n", "plural", 2, {"other": [NumericReference("n")]})
        ]
