# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser, resolver, and renderers for the Protocol Description Language."""

from pdl.analysis import UnresolvedReference, resolve
from pdl.model import Protocol
from pdl.parser import ParseError, ParseResult, loads, parse
from pdl.render import RenderConfig, from_json, to_json, to_pdl

__all__ = [
    "parse",
    "loads",
    "ParseResult",
    "ParseError",
    "resolve",
    "UnresolvedReference",
    "Protocol",
    "to_pdl",
    "to_json",
    "from_json",
    "RenderConfig",
]
