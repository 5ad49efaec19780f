# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarations of the PDL document model: protocol, domains, types, commands, events."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field as _Field

from pdl.model.types import EnumValue, Node, Parameter, PrimitiveType, Property, TypeRef

# ###############
# Public Interface
# ###############


class Version(Node):
    """Protocol version as a major.minor pair."""

    major: int
    minor: int


class PrimitiveBase(Node):
    """Base of a type declared as ``extends <primitive>``."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType


class EnumBase(Node):
    """Base of a string type restricted to an ordered set of values."""

    kind: Literal["enum"] = "enum"
    values: list[EnumValue] = _Field(default_factory=list)


class ObjectBase(Node):
    """Base of a type declared as ``extends object``."""

    kind: Literal["object"] = "object"
    properties: list[Property] = _Field(default_factory=list)


class ArrayBase(Node):
    """Base of a type declared as ``extends array of <type>``."""

    kind: Literal["array"] = "array"
    items: TypeRef


TypeBase = Annotated[
    PrimitiveBase | EnumBase | ObjectBase | ArrayBase,
    _Field(discriminator="kind"),
]


class TypeDef(Node):
    """A named type declaration owned by a domain."""

    name: str
    base: TypeBase
    experimental: bool = False
    deprecated: bool = False
    description: str | None = None


class Command(Node):
    """A named operation with input parameters and return values."""

    name: str
    parameters: list[Parameter] = _Field(default_factory=list)
    returns: list[Parameter] = _Field(default_factory=list)
    redirect: str | None = None
    experimental: bool = False
    deprecated: bool = False
    description: str | None = None


class Event(Node):
    """A named one-way notification."""

    name: str
    parameters: list[Parameter] = _Field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False
    description: str | None = None


class Domain(Node):
    """A named group of types, commands, and events."""

    name: str
    dependencies: list[str] = _Field(default_factory=list)
    types: list[TypeDef] = _Field(default_factory=list)
    commands: list[Command] = _Field(default_factory=list)
    events: list[Event] = _Field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False
    description: str | None = None

    def get_type(self, name: str) -> TypeDef | None:
        """Return the type declared under *name*, or None."""
        for type_def in self.types:
            if type_def.name == name:
                return type_def
        return None


class Protocol(Node):
    """Root of a parsed PDL document.

    ``description`` is the comment run attached to the ``version`` line, so
    it only survives printing when ``version`` is set.
    """

    version: Version | None = None
    domains: list[Domain] = _Field(default_factory=list)
    description: str | None = None

    def get_domain(self, name: str) -> Domain | None:
        """Return the domain declared under *name*, or None."""
        for domain in self.domains:
            if domain.name == name:
                return domain
        return None


# Resolve forward references for models that use TypeRef.
ArrayBase.model_rebuild()
TypeDef.model_rebuild()
