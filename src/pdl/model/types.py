# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type references and typed fields for the PDL document model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Node(BaseModel):
    """Base class for document nodes. Nodes are immutable once built."""

    model_config = ConfigDict(frozen=True)


class PrimitiveType(Enum):
    """Primitive types of the PDL type system."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ANY = "any"
    BINARY = "binary"


class EnumValue(Node):
    """A single value of an enumeration, with its optional documentation."""

    name: str
    description: str | None = None


class PrimitiveTypeRef(Node):
    """Reference to a primitive type."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType


class ObjectTypeRef(Node):
    """Reference to an untyped object."""

    kind: Literal["object"] = "object"


class EnumTypeRef(Node):
    """An enumeration declared inline on a parameter or property."""

    kind: Literal["enum"] = "enum"
    values: list[EnumValue] = _Field(default_factory=list)


class NamedTypeRef(Node):
    """Reference to a declared type, either in the same domain or in ``domain``.

    This is a lookup key, not ownership: many fields may name the same type.
    """

    kind: Literal["named"] = "named"
    name: str
    domain: str | None = None

    @property
    def qualified_name(self) -> str:
        """The reference as written in source: ``Name`` or ``Domain.Name``."""
        if self.domain is None:
            return self.name
        return f"{self.domain}.{self.name}"


# The type of a parameter, property, or array element.
TypeRef = Annotated[
    PrimitiveTypeRef | ObjectTypeRef | EnumTypeRef | NamedTypeRef,
    _Field(discriminator="kind"),
]


class Parameter(Node):
    """A named, typed input or output of a command or event."""

    name: str
    type: TypeRef
    optional: bool = False
    array: bool = False
    experimental: bool = False
    deprecated: bool = False
    description: str | None = None


class Property(Parameter):
    """A named, typed field of an object type. Same shape as a parameter."""


# Resolve forward references for models that use TypeRef.
Parameter.model_rebuild()
Property.model_rebuild()
