# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line reader and block parser for .pdl files."""

from pdl.parser.errors import ParseError
from pdl.parser.lexer import LexerError, Line, LineKind, read_lines
from pdl.parser.parser import ParseResult, loads, parse

__all__ = [
    "parse",
    "loads",
    "ParseResult",
    "ParseError",
    "LexerError",
    "Line",
    "LineKind",
    "read_lines",
]
