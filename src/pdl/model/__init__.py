# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document model for PDL (protocol, domains, types, commands, events)."""

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
    Node,
    ObjectTypeRef,
    Parameter,
    PrimitiveType,
    PrimitiveTypeRef,
    Property,
    TypeRef,
)

__all__ = [
    # Type system
    "Node",
    "PrimitiveType",
    "PrimitiveTypeRef",
    "ObjectTypeRef",
    "EnumTypeRef",
    "NamedTypeRef",
    "TypeRef",
    "EnumValue",
    "Parameter",
    "Property",
    # Declarations
    "Version",
    "PrimitiveBase",
    "EnumBase",
    "ObjectBase",
    "ArrayBase",
    "TypeBase",
    "TypeDef",
    "Command",
    "Event",
    "Domain",
    "Protocol",
]
