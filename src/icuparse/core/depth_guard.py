"""Nesting limits for recursive walks over messages.

Sub-messages and tags nest arbitrarily, and every walker over them (the
parser, the serializer, introspection, plain conversion) recurses once per
level. ``DepthGuard`` counts levels and fails with DepthLimitExceededError
before the interpreter would fail with RecursionError. Hand-built ASTs
never went through the parser's limit, so the other walkers need their own
guard.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from icuparse.constants import MAX_DEPTH
from icuparse.diagnostics import MessageFormatError
from icuparse.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)

# Frames consumed per nesting level by the deepest recursion path
# (parse_message -> parse_element -> parse_submessages -> parse_message).
_FRAMES_PER_LEVEL: int = 4


class DepthLimitExceededError(MessageFormatError):
    """A message or AST nests deeper than the configured limit.

    Not a SyntaxError: the input may be well-formed, it is only too deep to
    process safely.
    """


@dataclass(slots=True)
class DepthGuard:
    """Level counter used as a context manager around each nested body.

    One guard belongs to one walk; it is not shared between calls.

        guard = DepthGuard()
        for body in variable.options.values():
            with guard:
                walk(body, guard)

    Attributes:
        max_depth: Deepest level allowed, after clamping
        current_depth: Levels currently entered
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Check first: a raising __enter__ gets no matching __exit__
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Levels currently entered."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """True when entering another level would fail."""
        return self.current_depth >= self.max_depth

    def check(self) -> None:
        """Fail if another level cannot be entered.

        Raises:
            DepthLimitExceededError: At the limit
        """
        if self.is_exceeded():
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(self.max_depth))


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Lower a nesting limit to what the interpreter stack can hold.

    A message level costs several frames, so the usable depth is
    ``(recursion limit - reserve_frames) // frames per level``, never less
    than 1. Clamping is logged as a warning.

    Args:
        requested_depth: Limit asked for
        reserve_frames: Frames kept free for the caller's own stack

    Returns:
        requested_depth, or the largest safe depth if that is smaller

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(200)
        >>> depth_clamp(100)
        37
    """
    limit = sys.getrecursionlimit()
    safe_depth = max(1, (limit - reserve_frames) // _FRAMES_PER_LEVEL)
    if requested_depth <= safe_depth:
        return requested_depth

    logger.warning(
        "Nesting depth %d needs more stack than the recursion limit (%d) allows. "
        "Clamping to %d; raise sys.setrecursionlimit() to allow deeper messages.",
        requested_depth,
        limit,
        safe_depth,
    )
    return safe_depth
