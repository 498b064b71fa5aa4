"""Message parser module.

This module provides the main MessageParser class and related parsing
utilities organized into focused submodules.

Module Organization:
- core.py: Main MessageParser class and parse() entry point
- primitives.py: Text scanning with escapes, offsets, error factories
- whitespace.py: Whitespace classification and skipping
- rules.py: All grammar rules (bodies, placeholders, sub-messages, tags)

Public API:
    MessageParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from icuparse.syntax.parser.core import MessageParser
from icuparse.syntax.parser.rules import ParseContext

__all__ = ["MessageParser", "ParseContext"]
