# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent block parser for .pdl files.

Consumes the classified line stream produced by the line reader and builds
the document model. Block membership is decided by indentation depth: a
line belongs to a block while it is indented deeper than the block header,
and the first line at the header's depth or shallower closes the block.

A run of ``#`` comment lines directly above a declaration, with no blank
line in between, becomes that declaration's description.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from pdl.analysis.resolver import UnresolvedReference, resolve
from pdl.model.entities import (
    ArrayBase,
    Command,
    Domain,
    EnumBase,
    Event,
    ObjectBase,
    PrimitiveBase,
    Protocol,
    TypeBase,
    TypeDef,
    Version,
)
from pdl.model.types import (
    EnumTypeRef,
    EnumValue,
    NamedTypeRef,
    ObjectTypeRef,
    Parameter,
    PrimitiveType,
    PrimitiveTypeRef,
    Property,
    TypeRef,
)
from pdl.parser.errors import ParseError
from pdl.parser.lexer import Line, LineKind, read_lines

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ParseResult:
    """The outcome of a successful parse.

    Attributes:
        protocol: The parsed document.
        remainder: Source text following the last domain that is not part of
            the document, starting at the first line the parser did not
            consume. Empty when the whole input was PDL.
        unresolved: Named type references that match no declared type.
    """

    protocol: Protocol
    remainder: str = ""
    unresolved: list[UnresolvedReference] = field(default_factory=list)


def parse(source: str) -> ParseResult:
    """Parse PDL source text and resolve its type references.

    Parsing stops at the first top-level line after a domain that does not
    start another domain; everything from there on is returned as the
    remainder, so PDL can be embedded at the start of a larger stream.

    Args:
        source: The PDL text.

    Returns:
        A :class:`ParseResult` with the document, the unconsumed remainder,
        and the list of unresolved type references.

    Raises:
        ParseError: If the source is structurally invalid. Indentation
            errors are raised as :class:`~pdl.parser.lexer.LexerError`, a
            subclass of ParseError.
    """
    parser = _Parser(source)
    protocol = parser.parse()
    return ParseResult(protocol, parser.remainder, resolve(protocol))


def loads(source: str) -> Protocol:
    """Parse PDL source text that must consist of a single document.

    Unlike :func:`parse`, trailing content after the last domain is an
    error, and unresolved references are not reported.

    Raises:
        ParseError: If the source is structurally invalid or has trailing
            content.
    """
    parser = _Parser(source)
    protocol = parser.parse()
    if parser.remainder:
        raise parser.unexpected("Unexpected content after the last domain", ("domain",))
    return protocol


# ################
# Implementation
# ################

_MODIFIERS = ("experimental", "deprecated")
_FIELD_MODIFIERS = ("experimental", "deprecated", "optional")

_PRIMITIVE_TYPES: dict[str, PrimitiveType] = {p.value: p for p in PrimitiveType}

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_NUMBER = re.compile(r"[0-9]+\Z")

_TOP_LEVEL = ("version", "domain")
_DOMAIN_MEMBERS = ("depends on", "type", "command", "event")
_VERSION_FIELDS = ("major", "minor")
_COMMAND_MEMBERS = ("redirect", "parameters", "returns")
_FIELD = ("[optional] [array of] <type> <name>",)
_ENUM_VALUE = ("<value>",)
_BASES = tuple(_PRIMITIVE_TYPES) + ("object", "array of")

_F = TypeVar("_F", bound=Parameter)


class _Parser:
    """Parser state: the current code line and the comment run above it."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._lines = iter(read_lines(source))
        self._current: Line | None = None
        self._doc: str | None = None
        self._doc_offset = 0
        self._stopped = False
        self._advance()

    @property
    def remainder(self) -> str:
        if not self._stopped:
            return ""
        return self._source[self._doc_offset :]

    def parse(self) -> Protocol:
        """Parse the whole document and return the Protocol."""
        if self._current is not None and self._current.depth > 0:
            raise self.unexpected("Unexpected indentation at top level", _TOP_LEVEL)
        description: str | None = None
        version: Version | None = None
        if self._current is not None and self._current.content.split()[0] == "version":
            description = self._doc
            version = self._parse_version()

        domains: list[Domain] = []
        names: set[str] = set()
        while self._current is not None:
            line = self._current
            _, words = self._modifiers(line, _MODIFIERS)
            if words[:1] != ["domain"]:
                if domains:
                    logger.debug("Stopping at line %d: %r does not start a domain", line.line, line.content)
                    self._stopped = True
                    break
                raise self.unexpected(f"Unexpected {line.content!r} at top level", _TOP_LEVEL)
            domain = self._parse_domain()
            if domain.name in names:
                raise _error_at(line, f"Duplicate domain name {domain.name!r}", ("domain",))
            names.add(domain.name)
            domains.append(domain)
        return Protocol(version=version, domains=domains, description=description)

    # ------------------------------------------------------------------
    # Line access helpers
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        """Move to the next code line, collecting the comment run directly above it.

        A blank line empties the collected run, so a comment followed by a
        blank line is attached to nothing.
        """
        comments: list[Line] = []
        for line in self._lines:
            if line.kind is LineKind.BLANK:
                comments = []
            elif line.kind is LineKind.COMMENT:
                comments.append(line)
            else:
                self._current = line
                self._doc = "\n".join(c.content for c in comments) if comments else None
                self._doc_offset = comments[0].offset if comments else line.offset
                return
        self._current = None
        self._doc = None
        self._doc_offset = len(self._source)

    def _take(self) -> tuple[Line, str | None]:
        """Consume the current line and return it with its description."""
        line, doc = self._current, self._doc
        assert line is not None
        self._advance()
        return line, doc

    def _take_bare(self) -> Line:
        """Consume a line that cannot carry a description, dropping any comment run."""
        line, doc = self._take()
        if doc is not None:
            logger.debug("Discarding comment above line %d (%r)", line.line, line.content)
        return line

    def _at_depth(self, depth: int, expected: tuple[str, ...]) -> bool:
        """Return True if the current line is a direct child at *depth*.

        Raises ParseError if it is indented deeper than *depth*.
        """
        line = self._current
        if line is None or line.depth < depth:
            return False
        if line.depth > depth:
            raise self.unexpected("Unexpected indentation", expected)
        return True

    def _modifiers(self, line: Line, allowed: tuple[str, ...]) -> tuple[set[str], list[str]]:
        """Split the leading modifier keywords off *line*'s words."""
        words = line.content.split()
        found: set[str] = set()
        while words and words[0] in allowed:
            if words[0] in found:
                raise _error_at(line, f"Duplicate modifier {words[0]!r}", allowed)
            found.add(words.pop(0))
        return found, words

    def unexpected(self, message: str, expected: tuple[str, ...]) -> ParseError:
        """Build a ParseError located at the current line (or end of input)."""
        if self._current is None:
            return ParseError(message, self._source.count("\n") + 1, 1, expected, "end of input")
        return _error_at(self._current, message, expected)

    # ------------------------------------------------------------------
    # Version block
    # ------------------------------------------------------------------

    def _parse_version(self) -> Version:
        """Parse: version / major N / minor N"""
        header = self._current
        assert header is not None
        if header.content != "version":
            raise _error_at(header, "Malformed version header", ("version",))
        self._take()
        numbers: dict[str, int] = {}
        while self._at_depth(1, _VERSION_FIELDS):
            line = self._take_bare()
            words = line.content.split()
            if words[0] not in _VERSION_FIELDS or words[0] in numbers:
                expected = tuple(f"{n} N" for n in _VERSION_FIELDS if n not in numbers)
                raise _error_at(line, f"Unexpected {line.content!r} in version block", expected)
            if len(words) != 2 or not _NUMBER.match(words[1]):
                raise _error_at(line, f"Malformed {words[0]} version number", (f"{words[0]} N",))
            numbers[words[0]] = int(words[1])
        for name in _VERSION_FIELDS:
            if name not in numbers:
                raise self.unexpected(f"Missing {name!r} in version block", (f"{name} N",))
        return Version(major=numbers["major"], minor=numbers["minor"])

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    def _parse_domain(self) -> Domain:
        """Parse: [experimental] [deprecated] domain <Name> and its body."""
        header, description = self._take()
        flags, words = self._modifiers(header, _MODIFIERS)
        name = _header_name(header, words, "domain")

        dependencies: list[str] = []
        types: list[TypeDef] = []
        commands: list[Command] = []
        events: list[Event] = []
        while self._at_depth(1, _DOMAIN_MEMBERS):
            line = self._current
            assert line is not None
            member_flags, member = self._modifiers(line, _MODIFIERS)
            if not member_flags and member[:2] == ["depends", "on"]:
                self._take_bare()
                if len(member) != 3 or not _NAME.match(member[2]):
                    raise _error_at(line, "Malformed dependency", ("depends on <Domain>",))
                dependencies.append(member[2])
            elif member[:1] == ["type"]:
                type_def = self._parse_type(1)
                _check_unique(line, "type", type_def.name, types)
                types.append(type_def)
            elif member[:1] == ["command"]:
                command = self._parse_command(1)
                _check_unique(line, "command", command.name, commands)
                commands.append(command)
            elif member[:1] == ["event"]:
                event = self._parse_event(1)
                _check_unique(line, "event", event.name, events)
                events.append(event)
            else:
                raise _error_at(line, f"Unexpected {line.content!r} in domain {name!r}", _DOMAIN_MEMBERS)

        domain = Domain(
            name=name,
            dependencies=dependencies,
            types=types,
            commands=commands,
            events=events,
            experimental="experimental" in flags,
            deprecated="deprecated" in flags,
            description=description,
        )
        logger.debug(
            "Parsed domain %s: %d types, %d commands, %d events",
            name,
            len(types),
            len(commands),
            len(events),
        )
        return domain

    # ------------------------------------------------------------------
    # Type declarations
    # ------------------------------------------------------------------

    def _parse_type(self, depth: int) -> TypeDef:
        """Parse: [modifiers] type <Name> extends <base> and its sub-block."""
        header, description = self._take()
        flags, words = self._modifiers(header, _MODIFIERS)
        if len(words) < 4 or words[0] != "type" or words[2] != "extends" or not _NAME.match(words[1]):
            raise _error_at(header, "Malformed type declaration", ("type <Name> extends <base>",))
        name = words[1]
        base_words = words[3:]
        child = depth + 1

        base: TypeBase
        allowed: tuple[str, ...] = ()
        if base_words[:2] == ["array", "of"] and len(base_words) == 3:
            base = ArrayBase(items=_type_ref(header, base_words[2]))
        elif len(base_words) != 1:
            raise _error_at(header, f"Malformed base of type {name!r}", _BASES)
        elif base_words[0] == "object":
            properties: list[Property] = []
            if self._sub_block(child, "properties"):
                properties = self._parse_fields(child + 1, Property)
            else:
                allowed = ("properties",)
            base = ObjectBase(properties=properties)
        elif base_words[0] in _PRIMITIVE_TYPES:
            primitive = _PRIMITIVE_TYPES[base_words[0]]
            if primitive is PrimitiveType.STRING and self._sub_block(child, "enum"):
                base = EnumBase(values=self._parse_enum_values(child + 1))
            else:
                base = PrimitiveBase(primitive=primitive)
                if primitive is PrimitiveType.STRING:
                    allowed = ("enum",)
        else:
            raise _error_at(header, f"Unknown base type {base_words[0]!r}", _BASES)

        if self._at_depth(child, allowed):
            raise self.unexpected(f"Unexpected {self._current_content()!r} in type {name!r}", allowed)

        type_def = TypeDef(
            name=name,
            base=base,
            experimental="experimental" in flags,
            deprecated="deprecated" in flags,
            description=description,
        )
        logger.debug("Parsed type %s (%s)", name, base.kind)
        return type_def

    def _sub_block(self, depth: int, keyword: str) -> bool:
        """Consume a sub-block header *keyword* at *depth* if it is the current line."""
        if self._at_depth(depth, (keyword,)) and self._current_content() == keyword:
            self._take_bare()
            return True
        return False

    def _parse_enum_values(self, depth: int) -> list[EnumValue]:
        """Parse the non-empty list of enum values at *depth*."""
        values: list[EnumValue] = []
        while self._at_depth(depth, _ENUM_VALUE):
            line, description = self._take()
            if len(line.content.split()) != 1:
                raise _error_at(line, "Enum value must be a single word", _ENUM_VALUE)
            values.append(EnumValue(name=line.content, description=description))
        if not values:
            raise self.unexpected("Empty enum block", _ENUM_VALUE)
        return values

    # ------------------------------------------------------------------
    # Parameters and properties
    # ------------------------------------------------------------------

    def _parse_fields(self, depth: int, kind: type[_F]) -> list[_F]:
        """Parse the non-empty list of parameter or property lines at *depth*."""
        fields: list[_F] = []
        while self._at_depth(depth, _FIELD):
            fields.append(self._parse_field(depth, kind))
        if not fields:
            raise self.unexpected(f"Empty {kind.__name__.lower()} block", _FIELD)
        return fields

    def _parse_field(self, depth: int, kind: type[_F]) -> _F:
        """Parse: [experimental] [deprecated] [optional] [array of] <type> <name>"""
        line, description = self._take()
        flags, words = self._modifiers(line, _FIELD_MODIFIERS)
        array = words[:2] == ["array", "of"]
        if array:
            words = words[2:]
        if len(words) != 2 or not _NAME.match(words[1]):
            raise _error_at(line, f"Malformed {kind.__name__.lower()}", _FIELD)
        type_ref: TypeRef
        if words[0] == "enum":
            type_ref = EnumTypeRef(values=self._parse_enum_values(depth + 1))
        else:
            type_ref = _type_ref(line, words[0])
        return kind(
            name=words[1],
            type=type_ref,
            optional="optional" in flags,
            array=array,
            experimental="experimental" in flags,
            deprecated="deprecated" in flags,
            description=description,
        )

    # ------------------------------------------------------------------
    # Commands and events
    # ------------------------------------------------------------------

    def _parse_command(self, depth: int) -> Command:
        """Parse: [modifiers] command <Name> with redirect/parameters/returns."""
        header, description = self._take()
        flags, words = self._modifiers(header, _MODIFIERS)
        name = _header_name(header, words, "command")
        child = depth + 1

        redirect: str | None = None
        sections: dict[str, list[Parameter]] = {}
        seen: set[str] = set()
        while True:
            expected = tuple(k for k in _COMMAND_MEMBERS if k not in seen)
            if not self._at_depth(child, expected):
                break
            line = self._take_bare()
            keyword, *rest = line.content.split()
            if keyword not in expected:
                raise _error_at(line, f"Unexpected {line.content!r} in command {name!r}", expected)
            seen.add(keyword)
            if keyword == "redirect":
                if len(rest) != 1 or not _NAME.match(rest[0]):
                    raise _error_at(line, "Malformed redirect", ("redirect <Domain>",))
                redirect = rest[0]
            elif rest:
                raise _error_at(line, f"Unexpected text after {keyword!r}", (keyword,))
            else:
                sections[keyword] = self._parse_fields(child + 1, Parameter)

        command = Command(
            name=name,
            parameters=sections.get("parameters", []),
            returns=sections.get("returns", []),
            redirect=redirect,
            experimental="experimental" in flags,
            deprecated="deprecated" in flags,
            description=description,
        )
        logger.debug("Parsed command %s", name)
        return command

    def _parse_event(self, depth: int) -> Event:
        """Parse: [modifiers] event <Name> with an optional parameters block."""
        header, description = self._take()
        flags, words = self._modifiers(header, _MODIFIERS)
        name = _header_name(header, words, "event")
        child = depth + 1

        parameters: list[Parameter] = []
        if self._sub_block(child, "parameters"):
            parameters = self._parse_fields(child + 1, Parameter)
        if self._at_depth(child, ()):
            raise self.unexpected(f"Unexpected {self._current_content()!r} in event {name!r}", ())

        event = Event(
            name=name,
            parameters=parameters,
            experimental="experimental" in flags,
            deprecated="deprecated" in flags,
            description=description,
        )
        logger.debug("Parsed event %s", name)
        return event

    def _current_content(self) -> str:
        return "" if self._current is None else self._current.content


def _error_at(line: Line, message: str, expected: tuple[str, ...]) -> ParseError:
    return ParseError(message, line.line, line.column, expected, line.content)


def _header_name(line: Line, words: list[str], keyword: str) -> str:
    """Return the name from a ``<keyword> <Name>`` header, raising ParseError if malformed."""
    if len(words) != 2 or words[0] != keyword or not _NAME.match(words[1]):
        raise _error_at(line, f"Malformed {keyword} declaration", (f"{keyword} <Name>",))
    return words[1]


def _check_unique(line: Line, kind: str, name: str, existing: Sequence[TypeDef | Command | Event]) -> None:
    if any(item.name == name for item in existing):
        raise _error_at(line, f"Duplicate {kind} name {name!r}", ())


def _type_ref(line: Line, token: str) -> TypeRef:
    """Translate a type token into a TypeRef: primitive, object, or (qualified) name."""
    if token in _PRIMITIVE_TYPES:
        return PrimitiveTypeRef(primitive=_PRIMITIVE_TYPES[token])
    if token == "object":
        return ObjectTypeRef()
    domain, _, name = token.rpartition(".")
    if token == "enum" or not _NAME.match(name) or (domain and not _NAME.match(domain)):
        raise _error_at(line, f"Malformed type reference {token!r}", ("<Type>", "<Domain>.<Type>"))
    return NamedTypeRef(name=name, domain=domain or None)
