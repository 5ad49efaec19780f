# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line reader for .pdl files.

Splits raw source text into classified logical lines for the block parser.
Each code line carries its indentation depth, measured in a single unit
(one tab, or a fixed number of spaces) that is fixed by the first indented
code line of the file.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

from pdl.parser.errors import ParseError

# ###############
# Public Interface
# ###############


class LineKind(enum.Enum):
    """Classification of a logical source line."""

    BLANK = "blank"
    COMMENT = "comment"
    CODE = "code"


@dataclass(frozen=True)
class Line:
    """A classified source line.

    Attributes:
        kind: Whether the line is blank, a ``#`` comment, or code.
        depth: Indentation depth in units for code lines. Always 0 for blank
            and comment lines, which never take part in indentation checks.
        content: Trimmed line text. For comment lines this is the comment
            text with the leading ``#`` and surrounding whitespace removed.
        line: 1-based line number.
        column: 1-based column of the first non-whitespace character.
        offset: Character offset of the start of the line in the source.
    """

    kind: LineKind
    depth: int
    content: str
    line: int
    column: int
    offset: int


class LexerError(ParseError):
    """Raised when a line's indentation is inconsistent with the file's unit."""


class LineStream:
    """A lazy, restartable sequence of classified lines.

    Every iteration starts again from the beginning of the source with a
    fresh indentation unit, so a stream can be walked more than once.
    Lines are produced on demand: a consumer that stops early never
    measures the lines it did not reach.
    """

    def __init__(self, source: str) -> None:
        self._source = source

    def __iter__(self) -> Iterator[Line]:
        return _LineReader(self._source).lines()


def read_lines(source: str) -> LineStream:
    """Classify PDL source text line by line.

    Args:
        source: The full text of a .pdl document.

    Returns:
        A restartable stream of :class:`Line` values in source order.
        Iterating it raises :class:`LexerError` when a code line mixes tabs
        and spaces, uses the other indentation character than the file's
        unit, or is indented by a width that is not a multiple of the unit.
    """
    return LineStream(source)


# ################
# Implementation
# ################


class _LineReader:
    """Internal reader state: the indentation unit seen so far."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._unit: str | None = None

    def lines(self) -> Iterator[Line]:
        source = self._source
        pos = 0
        number = 0
        while pos < len(source):
            number += 1
            end = source.find("\n", pos)
            next_pos = len(source) if end == -1 else end + 1
            text = source[pos : next_pos].rstrip("\r\n")
            yield self._classify(text, number, pos)
            pos = next_pos

    def _classify(self, text: str, number: int, offset: int) -> Line:
        stripped = text.strip()
        if not stripped:
            return Line(LineKind.BLANK, 0, "", number, 1, offset)
        indent = text[: len(text) - len(text.lstrip(" \t"))]
        column = len(indent) + 1
        if stripped.startswith("#"):
            return Line(LineKind.COMMENT, 0, stripped[1:].strip(), number, column, offset)
        depth = self._measure(indent, number, stripped)
        return Line(LineKind.CODE, depth, stripped, number, column, offset)

    def _measure(self, indent: str, number: int, content: str) -> int:
        """Return the indentation depth of *indent* in units of the file's indent."""
        if not indent:
            return 0
        if " " in indent and "\t" in indent:
            raise LexerError("Indentation mixes tabs and spaces", number, 1, found=content)
        if self._unit is None:
            self._unit = "\t" if indent[0] == "\t" else indent
        unit_char = self._unit[0]
        if indent[0] != unit_char:
            described = "tabs" if unit_char == "\t" else "spaces"
            raise LexerError(
                f"Inconsistent indentation: this file is indented with {described}",
                number,
                1,
                found=content,
            )
        if len(indent) % len(self._unit):
            raise LexerError(
                f"Indentation of {len(indent)} is not a multiple of the indentation unit ({len(self._unit)})",
                number,
                1,
                found=content,
            )
        return len(indent) // len(self._unit)
