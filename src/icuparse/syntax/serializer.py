"""Serialize message AST back to message syntax.

Converts node lists to message strings. Useful for:
- Formatters and normalizers
- Code generators producing catalog entries
- Property-based testing (roundtrip: parse -> serialize -> parse)

Python 3.13+.
"""

from collections.abc import Iterable

from icuparse.constants import MAX_DEPTH, REQUIRED_SELECTOR
from icuparse.core.depth_guard import DepthGuard
from icuparse.diagnostics import ErrorTemplate, SerializationValidationError

from .ast import Message, Node, NumericReference, SubMessages, Tag, Variable
from .options import ParserOptions
from .parser.whitespace import WHITESPACE

__all__ = ["MessageSerializer", "serialize"]


def _invalid(reason: str) -> SerializationValidationError:
    return SerializationValidationError(ErrorTemplate.serialization_invalid(reason))


def _quote(text: str, specials: frozenset[str], escape: str) -> str:
    """Escape text so the scanner reads it back unchanged.

    Consecutive special characters and quotes form a group. A group with a
    special character becomes one literal run (quote, content with doubled
    quotes, quote); a group of quotes only is written with doubled quotes.
    """
    out: list[str] = []
    group: list[str] = []
    live = False

    def flush() -> None:
        nonlocal live
        if not group:
            return
        body = "".join(group).replace(escape, escape * 2)
        out.append(f"{escape}{body}{escape}" if live else body)
        group.clear()
        live = False

    for char in text:
        if char == escape:
            group.append(char)
        elif char in specials:
            group.append(char)
            live = True
        else:
            flush()
            out.append(char)
    flush()
    return "".join(out)


class MessageSerializer:
    """Converts a node list back to a message string.

    Thread-safe serializer with no mutable instance state beyond the
    options. All serialization state is local to the serialize() call.

    Usage:
        >>> from icuparse.syntax import parse, MessageSerializer
        >>> ast = parse("{n, plural, one {# item} other {# items}}")
        >>> MessageSerializer().serialize(ast)
        '{n, plural, one {# item} other {# items}}'
    """

    __slots__ = ("_header_specials", "_options", "_tag_name_specials", "_text_specials")

    def __init__(self, options: ParserOptions | None = None) -> None:
        self._options = options if options is not None else ParserOptions()
        opts = self._options

        text_specials = {opts.open, opts.close}
        if opts.allow_tags:
            text_specials.add(opts.tag_open)
        self._text_specials = frozenset(text_specials)
        self._header_specials = self._text_specials | WHITESPACE | {opts.sep}
        self._tag_name_specials = self._header_specials | {opts.tag_close, opts.tag_closing}

    @property
    def options(self) -> ParserOptions:
        """Delimiter configuration used for output."""
        return self._options

    def serialize(self, message: Iterable[Node]) -> str:
        """Serialize a node list to a message string.

        Args:
            message: Nodes as produced by the parser

        Returns:
            Message text that parses back to an equal node list (adjacent
            text nodes come back merged)

        Raises:
            SerializationValidationError: If the AST cannot be expressed as
                message text (missing ``other``, tags while tags are
                disabled, empty names, ``#`` outside a plural-like body)
            DepthLimitExceededError: If nesting exceeds MAX_DEPTH
        """
        output: list[str] = []
        self._serialize_nodes(message, output, DepthGuard(max_depth=MAX_DEPTH), None)
        return "".join(output)

    def _serialize_nodes(
        self,
        nodes: Iterable[Node],
        output: list[str],
        guard: DepthGuard,
        numeric_owner: str | None,
    ) -> None:
        """Serialize a body.

        numeric_owner is the id of the enclosing plural-like placeholder,
        None where ``#`` is ordinary text.
        """
        specials = self._text_specials
        if numeric_owner is not None:
            specials = specials | {self._options.sub_var}

        for node in nodes:
            match node:
                case str():
                    output.append(_quote(node, specials, self._options.escape))
                case Variable():
                    self._serialize_variable(node, output, guard)
                case NumericReference():
                    if numeric_owner is None or node.id != numeric_owner:
                        msg = f"numeric reference to '{node.id}' outside its plural-like placeholder"
                        raise _invalid(msg)
                    output.append(self._options.sub_var)
                case Tag():
                    self._serialize_tag(node, output, guard)
                case _:
                    msg = f"unsupported node {node!r}"
                    raise _invalid(msg)

    def _header(self, token: str | None, what: str, specials: frozenset[str]) -> str:
        if not token:
            msg = f"empty {what}"
            raise _invalid(msg)
        return _quote(token, specials, self._options.escape)

    def _serialize_variable(self, node: Variable, output: list[str], guard: DepthGuard) -> None:
        """Serialize Variable as {id}, {id, type}, {id, type, format} or sub-message form."""
        opts = self._options
        sep = f"{opts.sep} "

        output.append(opts.open)
        output.append(self._header(node.id, "placeholder id", self._header_specials))

        if node.type is None:
            if node.format is not None or node.options is not None:
                msg = f"placeholder '{node.id}' has a format but no type"
                raise _invalid(msg)
            output.append(opts.close)
            return

        output.append(sep)
        output.append(self._header(node.type, "placeholder type", self._header_specials))

        if opts.is_submessage(node.type):
            output.append(sep)
            self._serialize_submessage_format(node, output, guard)
        elif node.options is not None:
            msg = f"type '{node.type}' of placeholder '{node.id}' does not take sub-messages"
            raise _invalid(msg)
        elif node.format is not None:
            format_text = str(node.format)
            if not format_text.strip("".join(WHITESPACE)):
                msg = f"empty format for placeholder '{node.id}'"
                raise _invalid(msg)
            output.append(sep)
            output.append(_quote(format_text, self._text_specials, opts.escape))

        output.append(opts.close)

    def _serialize_submessage_format(
        self, node: Variable, output: list[str], guard: DepthGuard
    ) -> None:
        """Serialize the optional offset and the selector sub-messages."""
        opts = self._options
        options: SubMessages | None = node.options
        if options is None or REQUIRED_SELECTOR not in options:
            msg = f"placeholder '{node.id}' has no '{REQUIRED_SELECTOR}' sub-message"
            raise _invalid(msg)

        if node.format is not None:
            if not isinstance(node.format, int) or not opts.is_subnumeric(node.type):
                msg = f"format of placeholder '{node.id}' must be an offset"
                raise _invalid(msg)
            output.append(f"{opts.offset}{node.format} ")

        numeric_owner = node.id if opts.is_subnumeric(node.type) else None
        for index, (selector, body) in enumerate(options.items()):
            if index:
                output.append(" ")
            output.append(self._header(selector, "selector", self._header_specials))
            output.append(f" {opts.open}")
            with guard:
                self._serialize_nodes(body, output, guard, numeric_owner)
            output.append(opts.close)

    def _serialize_tag(self, node: Tag, output: list[str], guard: DepthGuard) -> None:
        """Serialize Tag as <name/> or <name>children</name>."""
        opts = self._options
        if not opts.allow_tags:
            msg = f"tag '{node.name}' while tags are disabled"
            raise _invalid(msg)

        name = self._header(node.name, "tag name", self._tag_name_specials)
        if not node.children:
            output.append(f"{opts.tag_open}{name}{opts.tag_closing}{opts.tag_close}")
            return

        output.append(f"{opts.tag_open}{name}{opts.tag_close}")
        with guard:
            self._serialize_nodes(node.children, output, guard, None)
        output.append(f"{opts.tag_open}{opts.tag_closing}{name}{opts.tag_close}")


def serialize(message: Message, options: ParserOptions | None = None) -> str:
    """Serialize a node list to a message string.

    Convenience function for MessageSerializer.serialize().

    Args:
        message: Nodes as produced by the parser
        options: Delimiter configuration (default: ICU symbols)

    Returns:
        Message text

    Raises:
        SerializationValidationError: If the AST cannot be written back

    Example:
        >>> from icuparse.syntax import parse, serialize
        >>> serialize(parse("It''s {n, number} '{literal}'"))
        "It''s {n, number} '{'literal'}'"
    """
    return MessageSerializer(options).serialize(message)
