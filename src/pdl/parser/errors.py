# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural errors raised while reading and parsing .pdl source."""

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the source does not match the PDL grammar.

    Parsing stops at the first structural error; there is no recovery.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
        expected: Names of the productions that were legal at this point.
        found: The offending line content, or ``"end of input"``.
    """

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        expected: tuple[str, ...] = (),
        found: str = "",
    ) -> None:
        text = f"Line {line}, column {column}: {message}"
        if expected:
            text += f" (expected {', '.join(repr(e) for e in expected)})"
        super().__init__(text)
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found
