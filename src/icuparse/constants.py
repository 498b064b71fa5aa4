"""Shared constants for icuparse.

This module provides centralized configuration constants used across the
syntax, diagnostics and core packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing and serialization
- Input limits: DoS prevention via size constraints
- Default symbols: Delimiter characters of the ICU MessageFormat dialect

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Default symbols
    "DEFAULT_SYMBOLS",
    "DEFAULT_OFFSET",
    "DEFAULT_SUBNUMERIC_TYPES",
    "DEFAULT_SUBMESSAGE_TYPES",
    "REQUIRED_SELECTOR",
    "NUMERIC_REFERENCE_TYPE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (placeholder/tag nesting), serializer, introspection.
# Every nested sub-message or tag body costs one level. Real messages rarely
# go beyond 4 (select -> plural -> tag -> placeholder); 100 levels is
# almost certainly adversarial or machine-generated input.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum message length in characters (10 MiB).
# A single message is normally a few hundred characters; the limit only
# exists to reject runaway input before scanning starts.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# DEFAULT SYMBOLS
# ============================================================================

# Delimiter roles keyed by their historical option names.
# Order matters: configuration errors report conflicts in this order.
DEFAULT_SYMBOLS: dict[str, str] = {
    "OPEN": "{",
    "CLOSE": "}",
    "TAG_OPEN": "<",
    "TAG_CLOSE": ">",
    "TAG_CLOSING": "/",
    "SEP": ",",
    "SUB_VAR": "#",
    "ESCAPE": "'",
}

# Keyword introducing the offset clause of plural-like placeholders.
DEFAULT_OFFSET: str = "offset:"

# Types that accept an offset clause and a `#` back-reference.
DEFAULT_SUBNUMERIC_TYPES: tuple[str, ...] = ("plural", "selectordinal")

# Types whose format position holds selector-keyed sub-messages.
DEFAULT_SUBMESSAGE_TYPES: tuple[str, ...] = ("plural", "selectordinal", "select")

# Selector every sub-message placeholder must define.
REQUIRED_SELECTOR: str = "other"

# Implicit type of a `#` back-reference.
NUMERIC_REFERENCE_TYPE: str = "number"
