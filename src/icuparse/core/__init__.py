"""Core utilities shared across the syntax layer.

This package provides foundational utilities that the parser, serializer
and introspection depend on. By isolating these utilities here, we maintain
a clean dependency graph:

    diagnostics <- core <- syntax

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded
    depth_clamp: Clamp a requested depth against the interpreter stack

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]
