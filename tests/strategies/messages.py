"""Hypothesis strategies for message syntax testing.

Provides strategies for generating message text (for parsing) and message
ASTs (for serialization and round-trip properties).

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - msg_node: Kind of generated node (text|variable|select|plural|tag|ref)
    - msg_depth: Nesting depth reached by generated sub-messages and tags
"""

from __future__ import annotations

from hypothesis import event
from hypothesis import strategies as st

from icuparse.syntax.ast import Message, NumericReference, SubMessages, Tag, Variable

# Characters that never start or end anything at the top level with the
# default symbols: no braces, no tag opener, no quote.
PLAIN_TEXT_ALPHABET = st.characters(
    exclude_characters="{}<'",
    exclude_categories=("Cs",),
)

# Every special character of every context, plus whitespace.
SPECIAL_TEXT_ALPHABET = "ab {}<>'#/, \t\u00a0"

SELECTORS = ("zero", "one", "two", "few", "many", "=0", "=1", "=-2", "male", "female")

FORMATS = (
    "short",
    "percent",
    "::currency/USD precision-integer",
    "yyyy-MM-dd",
    "{weird}",
)

identifiers = st.from_regex(r"[a-z][a-z0-9_]{0,7}", fullmatch=True)
tag_names = st.from_regex(r"[a-z][a-z0-9-]{0,7}", fullmatch=True)


def plain_texts() -> st.SearchStrategy[str]:
    """Non-empty text without delimiter characters (parses to itself)."""
    return st.text(PLAIN_TEXT_ALPHABET, min_size=1, max_size=50)


def special_texts() -> st.SearchStrategy[str]:
    """Non-empty text dense in characters that need escaping."""
    return st.text(SPECIAL_TEXT_ALPHABET, min_size=1, max_size=12)


@st.composite
def message_asts(
    draw: st.DrawFn, max_depth: int = 3, numeric_owner: str | None = None
) -> Message:
    """Generate well-formed message ASTs.

    Guarantees the shape the parser produces: text nodes are non-empty and
    never adjacent, ``#`` only appears directly in plural bodies, tag
    children are None or non-empty, and every sub-message placeholder has
    an ``other`` body.

    Events emitted:
    - msg_node={kind}: Kind of each generated node
    - msg_depth={n}: Remaining depth when nesting
    """
    count = draw(st.integers(min_value=0, max_value=4))
    nodes: Message = []

    for _ in range(count):
        kinds = ["variable"]
        if not nodes or not isinstance(nodes[-1], str):
            kinds.append("text")
        if numeric_owner is not None:
            kinds.append("ref")
        if max_depth > 0:
            kinds.extend(["select", "plural", "tag"])

        kind = draw(st.sampled_from(kinds))
        event(f"msg_node={kind}")

        match kind:
            case "text":
                nodes.append(draw(special_texts()))
            case "ref":
                assert numeric_owner is not None
                nodes.append(NumericReference(numeric_owner))
            case "variable":
                nodes.append(draw(simple_variables()))
            case "select" | "plural":
                event(f"msg_depth={max_depth}")
                nodes.append(draw(submessage_variables(kind, max_depth - 1)))
            case _:
                event(f"msg_depth={max_depth}")
                name = draw(tag_names)
                children = draw(message_asts(max_depth=max_depth - 1))
                nodes.append(Tag(name, children or None))

    return nodes


@st.composite
def simple_variables(draw: st.DrawFn) -> Variable:
    """Generate {id}, {id, type} and {id, type, format} placeholders."""
    placeholder_id = draw(identifiers)
    shape = draw(st.sampled_from(["bare", "typed", "formatted"]))
    if shape == "bare":
        return Variable(placeholder_id)
    if shape == "typed":
        return Variable(placeholder_id, draw(st.sampled_from(["number", "date", "time"])))
    return Variable(placeholder_id, "number", draw(st.sampled_from(FORMATS)))


@st.composite
def submessage_variables(draw: st.DrawFn, kind: str, max_depth: int) -> Variable:
    """Generate select or plural placeholders with nested bodies."""
    placeholder_id = draw(identifiers)
    owner = placeholder_id if kind == "plural" else None
    selectors = draw(st.lists(st.sampled_from(SELECTORS), unique=True, max_size=3))

    options: SubMessages = {}
    for selector in [*selectors, "other"]:
        options[selector] = draw(message_asts(max_depth=max_depth, numeric_owner=owner))

    offset = None
    if kind == "plural":
        offset = draw(st.none() | st.integers(min_value=-5, max_value=5))
    return Variable(placeholder_id, kind, offset, options)
