"""Rendering of diagnostics for terminals, logs and translation editors.

Three renderings are available:

- ``rust``: multi-line, compiler style, optionally with the offending
  message line and a caret under the error position
- ``simple``: one line, suitable for logs
- ``json``: one JSON object per diagnostic, for editor integrations
"""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_RED = "\033[1;31m"
_YELLOW = "\033[1;33m"
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """Available diagnostic renderings."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Render Diagnostic objects as text.

    Attributes:
        output_format: Rendering to produce
        color: Wrap the severity in ANSI colors (rust rendering only)
        max_content_length: Truncate messages, hints and tokens to this many
            characters; None keeps them whole. Translator-supplied message
            text can be arbitrarily long, so log pipelines usually set it.

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.option_conflict("OPEN", "TAG_OPEN")))
        OPTION_CONFLICT: Option OPEN and TAG_OPEN cannot match
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False
    max_content_length: int | None = None

    def format(self, diagnostic: Diagnostic, source: str | None = None) -> str:
        """Render one diagnostic.

        Args:
            diagnostic: Diagnostic to render
            source: Message text the diagnostic refers to. The rust rendering
                quotes the offending line when it is given; the others
                ignore it.

        Returns:
            Rendered text
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._rust(diagnostic, source)
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._clip(diagnostic.message)}"
            case OutputFormat.JSON:
                return self._json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics, one blank line apart."""
        return "\n\n".join(map(self.format, diagnostics))

    def _clip(self, text: str) -> str:
        limit = self.max_content_length
        if limit is None or len(text) <= limit:
            return text
        return f"{text[:limit]}..."

    def _details(self, diagnostic: Diagnostic) -> Iterator[tuple[str, str]]:
        """Optional labelled fields, in display order."""
        if diagnostic.options:
            yield "options", ", ".join(diagnostic.options)
        if diagnostic.expected:
            yield "expected", self._clip(diagnostic.expected)
        if diagnostic.found:
            yield "found", self._clip(diagnostic.found)
        if diagnostic.hint:
            yield "help", self._clip(diagnostic.hint)

    def _rust(self, diagnostic: Diagnostic, source: str | None) -> str:
        """Compiler-style rendering.

        Example output:
            error[EXPECTED_TOKEN]: expected } at position 3 but found eof
              --> line 1, column 4
               |
             1 | {n,
               |    ^
              = expected: }
              = found: eof
        """
        severity = diagnostic.severity
        if self.color:
            tint = _YELLOW if severity == "warning" else _RED
            severity = f"{tint}{severity}{_RESET}"

        lines = [f"{severity}[{diagnostic.code.name}]: {self._clip(diagnostic.message)}"]

        span = diagnostic.span
        if span is not None:
            lines.append(f"  --> line {span.line}, column {span.column}")
            if source is not None:
                source_lines = source.split("\n")
                if span.line <= len(source_lines):
                    gutter = " " * len(str(span.line))
                    lines.append(f"  {gutter} |")
                    lines.append(f"  {span.line} | {self._clip(source_lines[span.line - 1])}")
                    lines.append(f"  {gutter} | {' ' * (span.column - 1)}^")

        lines.extend(f"  = {label}: {value}" for label, value in self._details(diagnostic))
        return "\n".join(lines)

    def _json(self, diagnostic: Diagnostic) -> str:
        """Single JSON object; span fields are flattened for editors."""
        data: dict[str, Any] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._clip(diagnostic.message),
            "severity": diagnostic.severity,
        }
        if diagnostic.span is not None:
            span = diagnostic.span
            data.update(line=span.line, column=span.column, start=span.start, end=span.end)
        for label, value in self._details(diagnostic):
            if label == "options":
                data["options"] = list(diagnostic.options)
            elif label == "help":
                data["hint"] = value
            else:
                data[label] = value
        return json.dumps(data, ensure_ascii=False)
