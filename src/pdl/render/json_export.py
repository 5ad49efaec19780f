# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON export and import of PDL documents.

The JSON mirrors the document model: every ordered sequence becomes an
array in document order, flags appear only when set, and absent optional
values are omitted. Type bases and type references carry a ``kind``
discriminant followed by kind-specific fields. :func:`from_json` inverts
:func:`to_json` exactly.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, TypeVar

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
from pdl.render.config import RenderConfig

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Parameter)

# ###############
# Public Interface
# ###############


def to_dict(protocol: Protocol) -> dict[str, Any]:
    """Convert *protocol* to plain JSON-compatible data."""
    d: dict[str, Any] = {}
    if protocol.description is not None:
        d["description"] = protocol.description
    if protocol.version is not None:
        d["version"] = {"major": protocol.version.major, "minor": protocol.version.minor}
    d["domains"] = [_domain_to_dict(domain) for domain in protocol.domains]
    return d


def to_json(protocol: Protocol, config: RenderConfig | None = None) -> str:
    """Serialize *protocol* to a JSON string.

    Args:
        protocol: The document to export.
        config: Formatting options. ``json_indent=None`` (the default) gives
            compact output; an integer gives pretty-printed output.
    """
    config = config or RenderConfig()
    data = to_dict(protocol)
    if config.json_indent is None:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(data, indent=config.json_indent, ensure_ascii=False)


def from_dict(obj: dict[str, Any]) -> Protocol:
    """Rebuild a Protocol from data produced by :func:`to_dict`.

    Raises:
        ValueError: If a ``kind`` discriminant or primitive name is unknown.
        KeyError: If a required field is missing.
    """
    version = obj.get("version")
    return Protocol(
        version=None if version is None else Version(major=version["major"], minor=version["minor"]),
        domains=[_domain_from_dict(d) for d in obj.get("domains", [])],
        description=obj.get("description"),
    )


def from_json(data: str) -> Protocol:
    """Rebuild a Protocol from a JSON string produced by :func:`to_json`."""
    return from_dict(json.loads(data))


# ################
# Implementation
# ################


def _common_to_dict(d: dict[str, Any], node: Domain | TypeDef | Command | Event | Parameter) -> dict[str, Any]:
    """Add the flags and description shared by all declarations."""
    if node.description is not None:
        d["description"] = node.description
    if node.experimental:
        d["experimental"] = True
    if node.deprecated:
        d["deprecated"] = True
    return d


def _common_from_dict(obj: dict[str, Any]) -> dict[str, Any]:
    return {
        "description": obj.get("description"),
        "experimental": obj.get("experimental", False),
        "deprecated": obj.get("deprecated", False),
    }


def _domain_to_dict(domain: Domain) -> dict[str, Any]:
    d: dict[str, Any] = {"name": domain.name}
    _common_to_dict(d, domain)
    d["dependencies"] = list(domain.dependencies)
    d["types"] = [_type_to_dict(t) for t in domain.types]
    d["commands"] = [_command_to_dict(c) for c in domain.commands]
    d["events"] = [_event_to_dict(e) for e in domain.events]
    return d


def _domain_from_dict(obj: dict[str, Any]) -> Domain:
    logger.debug("Importing domain %s", obj["name"])
    return Domain(
        name=obj["name"],
        dependencies=obj.get("dependencies", []),
        types=[_type_from_dict(t) for t in obj.get("types", [])],
        commands=[_command_from_dict(c) for c in obj.get("commands", [])],
        events=[_event_from_dict(e) for e in obj.get("events", [])],
        **_common_from_dict(obj),
    )


def _type_to_dict(type_def: TypeDef) -> dict[str, Any]:
    d: dict[str, Any] = {"name": type_def.name}
    _common_to_dict(d, type_def)
    d.update(_base_to_dict(type_def.base))
    return d


def _type_from_dict(obj: dict[str, Any]) -> TypeDef:
    return TypeDef(name=obj["name"], base=_base_from_dict(obj), **_common_from_dict(obj))


def _base_to_dict(base: TypeBase) -> dict[str, Any]:
    if isinstance(base, PrimitiveBase):
        return {"kind": "primitive", "type": base.primitive.value}
    if isinstance(base, EnumBase):
        return {"kind": "enum", "enum": _enum_to_list(base.values)}
    if isinstance(base, ObjectBase):
        return {"kind": "object", "properties": _fields_to_list(base.properties)}
    # ArrayBase is the only remaining variant.
    assert isinstance(base, ArrayBase)
    return {"kind": "array", "items": _type_ref_to_dict(base.items)}


def _base_from_dict(obj: dict[str, Any]) -> TypeBase:
    kind = obj["kind"]
    if kind == "primitive":
        return PrimitiveBase(primitive=PrimitiveType(obj["type"]))
    if kind == "enum":
        return EnumBase(values=_enum_from_list(obj["enum"]))
    if kind == "object":
        return ObjectBase(properties=[_field_from_dict(p, Property) for p in obj.get("properties", [])])
    if kind == "array":
        return ArrayBase(items=_type_ref_from_dict(obj["items"]))
    raise ValueError(f"Unknown type kind: {kind!r}")


def _command_to_dict(command: Command) -> dict[str, Any]:
    d: dict[str, Any] = {"name": command.name}
    _common_to_dict(d, command)
    if command.redirect is not None:
        d["redirect"] = command.redirect
    d["parameters"] = _fields_to_list(command.parameters)
    d["returns"] = _fields_to_list(command.returns)
    return d


def _command_from_dict(obj: dict[str, Any]) -> Command:
    return Command(
        name=obj["name"],
        parameters=[_field_from_dict(p, Parameter) for p in obj.get("parameters", [])],
        returns=[_field_from_dict(p, Parameter) for p in obj.get("returns", [])],
        redirect=obj.get("redirect"),
        **_common_from_dict(obj),
    )


def _event_to_dict(event: Event) -> dict[str, Any]:
    d: dict[str, Any] = {"name": event.name}
    _common_to_dict(d, event)
    d["parameters"] = _fields_to_list(event.parameters)
    return d


def _event_from_dict(obj: dict[str, Any]) -> Event:
    return Event(
        name=obj["name"],
        parameters=[_field_from_dict(p, Parameter) for p in obj.get("parameters", [])],
        **_common_from_dict(obj),
    )


def _fields_to_list(fields: Sequence[Parameter]) -> list[dict[str, Any]]:
    result: list[dict[str, Any]] = []
    for f in fields:
        d: dict[str, Any] = {"name": f.name}
        _common_to_dict(d, f)
        if f.optional:
            d["optional"] = True
        if f.array:
            d["array"] = True
        d["type"] = _type_ref_to_dict(f.type)
        result.append(d)
    return result


def _field_from_dict(obj: dict[str, Any], kind: type[_F]) -> _F:
    return kind(
        name=obj["name"],
        type=_type_ref_from_dict(obj["type"]),
        optional=obj.get("optional", False),
        array=obj.get("array", False),
        **_common_from_dict(obj),
    )


def _enum_to_list(values: Sequence[EnumValue]) -> list[dict[str, str]]:
    result: list[dict[str, str]] = []
    for value in values:
        d = {"name": value.name}
        if value.description is not None:
            d["description"] = value.description
        result.append(d)
    return result


def _enum_from_list(items: list[dict[str, str]]) -> list[EnumValue]:
    return [EnumValue(name=item["name"], description=item.get("description")) for item in items]


def _type_ref_to_dict(type_ref: TypeRef) -> dict[str, Any]:
    """Encode a TypeRef as a dict tagged with its kind."""
    if isinstance(type_ref, PrimitiveTypeRef):
        return {"kind": "primitive", "type": type_ref.primitive.value}
    if isinstance(type_ref, ObjectTypeRef):
        return {"kind": "object"}
    if isinstance(type_ref, EnumTypeRef):
        return {"kind": "enum", "enum": _enum_to_list(type_ref.values)}
    # NamedTypeRef is the only remaining variant.
    assert isinstance(type_ref, NamedTypeRef)
    d: dict[str, Any] = {"kind": "named", "name": type_ref.name}
    if type_ref.domain is not None:
        d["domain"] = type_ref.domain
    return d


def _type_ref_from_dict(obj: dict[str, Any]) -> TypeRef:
    """Decode a TypeRef from a dict tagged with its kind."""
    kind = obj["kind"]
    if kind == "primitive":
        return PrimitiveTypeRef(primitive=PrimitiveType(obj["type"]))
    if kind == "object":
        return ObjectTypeRef()
    if kind == "enum":
        return EnumTypeRef(values=_enum_from_list(obj["enum"]))
    if kind == "named":
        return NamedTypeRef(name=obj["name"], domain=obj.get("domain"))
    raise ValueError(f"Unknown type reference kind: {kind!r}")
