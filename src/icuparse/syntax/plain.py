"""Conversion between AST nodes and plain JSON-ready data.

The plain form is what message catalogs and client-side renderers
exchange: lists, dicts and strings only.

    text                -> "text"
    {name}              -> {"id": "name"}
    {n, number, ::x}    -> {"id": "n", "type": "number", "format": "::x"}
    {n, plural, ...}    -> {"id": "n", "type": "plural", "format": 1, "options": {...}}
    #                   -> {"id": "n", "type": "number", "ref": True}
    <b>hi</b>           -> {"name": "b", "children": ["hi"]}
    <br/>               -> {"name": "br"}

Python 3.13+.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from icuparse.constants import MAX_DEPTH, NUMERIC_REFERENCE_TYPE
from icuparse.core.depth_guard import DepthGuard

from .ast import Message, Node, NumericReference, SubMessages, Tag, Variable

__all__ = ["from_plain", "to_plain"]

type PlainNode = str | dict[str, Any]

_VARIABLE_KEYS: frozenset[str] = frozenset({"id", "type", "format", "options"})
_REFERENCE_KEYS: frozenset[str] = frozenset({"id", "type", "ref"})
_TAG_KEYS: frozenset[str] = frozenset({"name", "children"})


def to_plain(message: Iterable[Node]) -> list[PlainNode]:
    """Convert a node list to plain data.

    Optional fields are omitted rather than set to None.

    Example:
        >>> from icuparse import parse
        >>> to_plain(parse("Hi {name}!"))
        ['Hi ', {'id': 'name'}, '!']
    """
    return _nodes_to_plain(message, DepthGuard(max_depth=MAX_DEPTH))


def _nodes_to_plain(nodes: Iterable[Node], guard: DepthGuard) -> list[PlainNode]:
    result: list[PlainNode] = []
    for node in nodes:
        match node:
            case str():
                result.append(node)
            case Variable():
                result.append(_variable_to_plain(node, guard))
            case NumericReference():
                result.append({"id": node.id, "type": node.type, "ref": True})
            case Tag():
                plain: dict[str, Any] = {"name": node.name}
                if node.children is not None:
                    with guard:
                        plain["children"] = _nodes_to_plain(node.children, guard)
                result.append(plain)
            case _:
                msg = f"Cannot convert {type(node).__name__} to plain data"
                raise TypeError(msg)
    return result


def _variable_to_plain(node: Variable, guard: DepthGuard) -> dict[str, Any]:
    plain: dict[str, Any] = {"id": node.id}
    if node.type is not None:
        plain["type"] = node.type
    if node.format is not None:
        plain["format"] = node.format
    if node.options is not None:
        options: dict[str, list[PlainNode]] = {}
        for selector, body in node.options.items():
            with guard:
                options[selector] = _nodes_to_plain(body, guard)
        plain["options"] = options
    return plain


def from_plain(data: Iterable[Any]) -> Message:
    """Build a node list from plain data.

    Inverse of to_plain(). Bodies are taken as given: adjacent text is not
    merged and sub-messages are not required to contain ``other``.

    Raises:
        ValueError: If the data does not describe a node list

    Example:
        >>> from_plain(["Hi ", {"id": "name"}])
        ['Hi ', Variable(id='name', type=None, format=None, options=None)]
    """
    return _nodes_from_plain(data, DepthGuard(max_depth=MAX_DEPTH))


def _nodes_from_plain(data: Iterable[Any], guard: DepthGuard) -> Message:
    if isinstance(data, (str, Mapping)) or not isinstance(data, Iterable):
        msg = f"Expected a list of nodes, got {type(data).__name__}"
        raise ValueError(msg)

    nodes: Message = []
    for item in data:
        match item:
            case str():
                nodes.append(item)
            case {"name": str(), **rest}:
                nodes.append(_tag_from_plain(item, rest, guard))
            case {"id": str(), "ref": True, **rest}:
                _check_keys(item, _REFERENCE_KEYS)
                if rest.get("type", NUMERIC_REFERENCE_TYPE) != NUMERIC_REFERENCE_TYPE:
                    msg = f"Numeric reference must have type '{NUMERIC_REFERENCE_TYPE}': {item!r}"
                    raise ValueError(msg)
                nodes.append(NumericReference(item["id"]))
            case {"id": str()}:
                nodes.append(_variable_from_plain(item, guard))
            case _:
                msg = f"Not a message node: {item!r}"
                raise ValueError(msg)
    return nodes


def _check_keys(item: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(item) - allowed
    if unknown:
        msg = f"Unknown keys {sorted(unknown)} in {item!r}"
        raise ValueError(msg)


def _tag_from_plain(item: Mapping[str, Any], rest: Mapping[str, Any], guard: DepthGuard) -> Tag:
    _check_keys(item, _TAG_KEYS)
    children = rest.get("children")
    if children is None:
        return Tag(item["name"])
    with guard:
        return Tag(item["name"], _nodes_from_plain(children, guard))


def _variable_from_plain(item: Mapping[str, Any], guard: DepthGuard) -> Variable:
    _check_keys(item, _VARIABLE_KEYS)

    type_name = item.get("type")
    if type_name is not None and not isinstance(type_name, str):
        msg = f"Placeholder type must be a string: {item!r}"
        raise ValueError(msg)

    format_value = item.get("format")
    # bool is an int subclass but never a valid offset
    if format_value is not None and (
        isinstance(format_value, bool) or not isinstance(format_value, (str, int))
    ):
        msg = f"Placeholder format must be a string or an offset: {item!r}"
        raise ValueError(msg)

    options: SubMessages | None = None
    raw_options = item.get("options")
    if raw_options is not None:
        if not isinstance(raw_options, Mapping):
            msg = f"Placeholder options must be a mapping: {item!r}"
            raise ValueError(msg)
        options = {}
        for selector, body in raw_options.items():
            if not isinstance(selector, str):
                msg = f"Sub-message selector must be a string: {selector!r}"
                raise ValueError(msg)
            with guard:
                options[selector] = _nodes_from_plain(body, guard)

    return Variable(item["id"], type_name, format_value, options)
