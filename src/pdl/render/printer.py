# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonical PDL text rendering of a parsed document.

Parsing the printed text yields a document equal to the one printed.
"""

from __future__ import annotations

from collections.abc import Sequence

from pdl.model.entities import ArrayBase, Command, Domain, EnumBase, Event, ObjectBase, PrimitiveBase, Protocol, TypeDef
from pdl.model.types import EnumTypeRef, EnumValue, NamedTypeRef, ObjectTypeRef, Parameter, PrimitiveTypeRef, TypeRef
from pdl.render.config import RenderConfig

# ###############
# Public Interface
# ###############


def to_pdl(protocol: Protocol, config: RenderConfig | None = None) -> str:
    """Render *protocol* as PDL text.

    Each nesting level is indented by one unit from *config* (two spaces by
    default). Descriptions are written as ``#`` lines directly above their
    declaration, and modifiers in the order experimental, deprecated,
    optional. Within a domain, dependencies come first, then types,
    commands, and events, each group in document order.

    Args:
        protocol: The document to render.
        config: Formatting options. Defaults to :class:`RenderConfig()`.

    Returns:
        The PDL text, ending in a newline unless the document is empty.
    """
    config = config or RenderConfig()
    return _Printer(config.indent_unit).render(protocol)


# ################
# Implementation
# ################


class _Printer:
    """Accumulates output lines for one document."""

    def __init__(self, unit: str) -> None:
        self._unit = unit
        self._lines: list[str] = []

    def render(self, protocol: Protocol) -> str:
        if protocol.version is not None:
            self._description(0, protocol.description)
            self._emit(0, "version")
            self._emit(1, f"major {protocol.version.major}")
            self._emit(1, f"minor {protocol.version.minor}")
        for domain in protocol.domains:
            self._separate()
            self._domain(domain)
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"

    def _emit(self, depth: int, text: str) -> None:
        self._lines.append(self._unit * depth + text)

    def _separate(self) -> None:
        if self._lines:
            self._lines.append("")

    def _description(self, depth: int, description: str | None) -> None:
        if description is None:
            return
        for line in description.split("\n"):
            self._emit(depth, f"# {line}".rstrip())

    def _domain(self, domain: Domain) -> None:
        self._description(0, domain.description)
        self._emit(0, f"{_modifiers(domain)}domain {domain.name}")
        for dependency in domain.dependencies:
            self._emit(1, f"depends on {dependency}")
        for type_def in domain.types:
            self._separate()
            self._type(type_def)
        for command in domain.commands:
            self._separate()
            self._command(command)
        for event in domain.events:
            self._separate()
            self._event(event)

    def _type(self, type_def: TypeDef) -> None:
        base = type_def.base
        if isinstance(base, PrimitiveBase):
            extends = base.primitive.value
        elif isinstance(base, EnumBase):
            extends = "string"
        elif isinstance(base, ObjectBase):
            extends = "object"
        else:
            assert isinstance(base, ArrayBase)
            extends = f"array of {_type_token(base.items)}"

        self._description(1, type_def.description)
        self._emit(1, f"{_modifiers(type_def)}type {type_def.name} extends {extends}")
        if isinstance(base, EnumBase) and base.values:
            self._emit(2, "enum")
            self._enum_values(3, base.values)
        elif isinstance(base, ObjectBase) and base.properties:
            self._emit(2, "properties")
            self._fields(3, base.properties)

    def _command(self, command: Command) -> None:
        self._description(1, command.description)
        self._emit(1, f"{_modifiers(command)}command {command.name}")
        if command.redirect is not None:
            self._emit(2, f"redirect {command.redirect}")
        self._section(2, "parameters", command.parameters)
        self._section(2, "returns", command.returns)

    def _event(self, event: Event) -> None:
        self._description(1, event.description)
        self._emit(1, f"{_modifiers(event)}event {event.name}")
        self._section(2, "parameters", event.parameters)

    def _section(self, depth: int, header: str, fields: Sequence[Parameter]) -> None:
        if fields:
            self._emit(depth, header)
            self._fields(depth + 1, fields)

    def _fields(self, depth: int, fields: Sequence[Parameter]) -> None:
        for f in fields:
            self._description(depth, f.description)
            optional = "optional " if f.optional else ""
            array = "array of " if f.array else ""
            self._emit(depth, f"{_modifiers(f)}{optional}{array}{_type_token(f.type)} {f.name}")
            if isinstance(f.type, EnumTypeRef):
                self._enum_values(depth + 1, f.type.values)

    def _enum_values(self, depth: int, values: Sequence[EnumValue]) -> None:
        for value in values:
            self._description(depth, value.description)
            self._emit(depth, value.name)


def _modifiers(node: Domain | TypeDef | Command | Event | Parameter) -> str:
    """Return the modifier prefix of *node* in canonical order."""
    words = [name for name in ("experimental", "deprecated") if getattr(node, name)]
    return "".join(f"{word} " for word in words)


def _type_token(type_ref: TypeRef) -> str:
    if isinstance(type_ref, PrimitiveTypeRef):
        return type_ref.primitive.value
    if isinstance(type_ref, ObjectTypeRef):
        return "object"
    if isinstance(type_ref, EnumTypeRef):
        return "enum"
    # NamedTypeRef is the only remaining variant.
    assert isinstance(type_ref, NamedTypeRef)
    return type_ref.qualified_name
