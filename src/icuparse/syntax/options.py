"""Symbol configuration for the message parser.

Provides a single frozen dataclass that holds the delimiter characters,
the offset keyword and the type classification lists. Options are validated
once at construction; a parser never sees an invalid configuration.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from icuparse.constants import (
    DEFAULT_OFFSET,
    DEFAULT_SUBMESSAGE_TYPES,
    DEFAULT_SUBNUMERIC_TYPES,
    DEFAULT_SYMBOLS,
)
from icuparse.diagnostics import ConfigurationError, ErrorTemplate
from icuparse.enums import SymbolRole

__all__ = ["ParserOptions"]

logger = logging.getLogger(__name__)

# Historical option names accepted by from_mapping(), mapped to field names.
_OPTION_ALIASES: dict[str, str] = {
    "OPEN": "open",
    "CLOSE": "close",
    "TAG_OPEN": "tag_open",
    "TAG_CLOSE": "tag_close",
    "TAG_CLOSING": "tag_closing",
    "SEP": "sep",
    "SUB_VAR": "sub_var",
    "ESCAPE": "escape",
    "OFFSET": "offset",
    "subnumeric_types": "subnumeric_types",
    "submessage_types": "submessage_types",
    "allowTags": "allow_tags",
}


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Immutable delimiter and type configuration.

    All fields have defaults matching ICU MessageFormat; ``ParserOptions()``
    is the standard dialect. Construction fails with ConfigurationError when
    a delimiter is not exactly one character or two roles share a character.

    Attributes:
        open: Placeholder opener (default ``{``)
        close: Placeholder closer (default ``}``)
        tag_open: Tag opener (default ``<``)
        tag_close: Tag closer (default ``>``)
        tag_closing: Closing/self-closing tag marker (default ``/``)
        sep: Placeholder field separator (default ``,``)
        sub_var: Numeric back-reference (default ``#``)
        escape: Quote character (default ``'``)
        offset: Offset clause keyword (default ``offset:``)
        subnumeric_types: Types accepting an offset and ``#``
        submessage_types: Types whose format holds selector sub-messages
        allow_tags: Parse ``<tag>`` markup (default True)

    Example:
        >>> options = ParserOptions(open="(", close=")")
        >>> options.role_of("(")
        <SymbolRole.OPEN: 'OPEN'>
        >>> ParserOptions(open="<")
        Traceback (most recent call last):
        ...
        icuparse.diagnostics.errors.ConfigurationError: Option OPEN and TAG_OPEN cannot match
    """

    open: str = DEFAULT_SYMBOLS["OPEN"]
    close: str = DEFAULT_SYMBOLS["CLOSE"]
    tag_open: str = DEFAULT_SYMBOLS["TAG_OPEN"]
    tag_close: str = DEFAULT_SYMBOLS["TAG_CLOSE"]
    tag_closing: str = DEFAULT_SYMBOLS["TAG_CLOSING"]
    sep: str = DEFAULT_SYMBOLS["SEP"]
    sub_var: str = DEFAULT_SYMBOLS["SUB_VAR"]
    escape: str = DEFAULT_SYMBOLS["ESCAPE"]
    offset: str = DEFAULT_OFFSET
    subnumeric_types: tuple[str, ...] = DEFAULT_SUBNUMERIC_TYPES
    submessage_types: tuple[str, ...] = DEFAULT_SUBMESSAGE_TYPES
    allow_tags: bool = True
    _roles: dict[str, SymbolRole] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Validate delimiters and build the role lookup table.

        Raises:
            ConfigurationError: If a delimiter is not a single character,
                two delimiters collide, or the offset keyword is empty.
        """
        roles: dict[str, SymbolRole] = {}
        for role in SymbolRole:
            value = getattr(self, _OPTION_ALIASES[role.value])
            if not isinstance(value, str) or len(value) != 1:
                raise ConfigurationError(ErrorTemplate.option_invalid_length(role.value))
            if value in roles:
                raise ConfigurationError(
                    ErrorTemplate.option_conflict(roles[value].value, role.value)
                )
            roles[value] = role

        if not isinstance(self.offset, str) or not self.offset:
            raise ConfigurationError(
                ErrorTemplate.option_invalid_value("OFFSET", "must be a non-empty string")
            )

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "subnumeric_types", _as_type_tuple(
            "subnumeric_types", self.subnumeric_types
        ))
        object.__setattr__(self, "submessage_types", _as_type_tuple(
            "submessage_types", self.submessage_types
        ))
        object.__setattr__(self, "allow_tags", bool(self.allow_tags))
        object.__setattr__(self, "_roles", roles)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None = None, /, **overrides: Any) -> ParserOptions:
        """Merge caller options over the defaults.

        Accepts both the historical option names (``OPEN``, ``allowTags``,
        ...) and the field names (``open``, ``allow_tags``, ...). Unknown
        keys are ignored with a warning.

        Args:
            mapping: Option mapping (optional)
            **overrides: Additional options, applied after ``mapping``

        Returns:
            Validated ParserOptions

        Raises:
            ConfigurationError: If the merged options are invalid
        """
        return cls(**_normalize_options(mapping, overrides))

    def merged(self, mapping: Mapping[str, Any] | None = None, /, **overrides: Any) -> ParserOptions:
        """Return a copy with the given options replaced.

        Same key handling as from_mapping(), but unspecified options keep
        this instance's values instead of the defaults.

        Example:
            >>> ParserOptions(open="(", close=")").merged(allowTags=False).open
            '('
        """
        changes = _normalize_options(mapping, overrides)
        return replace(self, **changes) if changes else self

    def role_of(self, char: str | None) -> SymbolRole | None:
        """Return the delimiter role of a character, or None."""
        if char is None:
            return None
        return self._roles.get(char)

    def is_subnumeric(self, type_name: str | None) -> bool:
        """Check whether a placeholder type supports offsets and ``#``."""
        return type_name is not None and type_name in self.subnumeric_types

    def is_submessage(self, type_name: str | None) -> bool:
        """Check whether a placeholder type requires selector sub-messages."""
        return type_name is not None and type_name in self.submessage_types

    @property
    def is_default(self) -> bool:
        """True when every option has its default value."""
        return self == _DEFAULT_OPTIONS


def _as_type_tuple(option: str, value: Iterable[str] | str) -> tuple[str, ...]:
    """Normalize a type list option to a tuple of strings."""
    if isinstance(value, str):
        raise ConfigurationError(
            ErrorTemplate.option_invalid_value(option, "must be a list of type names")
        )
    types = tuple(value)
    if not all(isinstance(t, str) and t for t in types):
        raise ConfigurationError(
            ErrorTemplate.option_invalid_value(option, "must only contain non-empty strings")
        )
    return types


_DEFAULT_OPTIONS = ParserOptions()


def _normalize_options(
    mapping: Mapping[str, Any] | None, overrides: Mapping[str, Any]
) -> dict[str, Any]:
    """Translate option names to field names, dropping unknown keys."""
    valid_fields = {f.name for f in fields(ParserOptions) if f.init}
    normalized: dict[str, Any] = {}
    ignored: list[str] = []

    for source in (mapping or {}, overrides):
        for key, value in source.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in valid_fields:
                normalized[name] = value
            else:
                ignored.append(key)

    if ignored:
        logger.warning("Ignoring unknown parser options: %s", ", ".join(sorted(ignored)))

    return normalized
