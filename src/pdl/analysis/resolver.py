# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reference resolution for parsed PDL documents.

Binds every named type reference to the type it names, using a table of
all types indexed by domain. References may point forward in the document
or into other domains; the whole protocol is known before resolution
starts. Unresolved names are collected rather than raised so that a single
pass reports all of them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from pdl.model.entities import ArrayBase, Domain, ObjectBase, Protocol, TypeDef
from pdl.model.types import NamedTypeRef, Parameter, TypeRef

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class UnresolvedReference:
    """A type reference that names no declared type.

    Attributes:
        domain: The domain the reference points into: its explicit qualifier,
            or the owning domain for an unqualified name.
        name: The referenced type name.
        referrer: Dotted path of the node holding the reference, e.g.
            ``Page.navigate.parameters.url``.
    """

    domain: str
    name: str
    referrer: str

    @property
    def qualified_name(self) -> str:
        return f"{self.domain}.{self.name}"


@dataclass(frozen=True)
class UnresolvedDomain:
    """A ``depends on`` or ``redirect`` target that names no domain.

    Attributes:
        name: The missing domain name.
        referrer: The domain (or ``Domain.command``) holding the reference.
        relation: Either ``"depends on"`` or ``"redirect"``.
    """

    name: str
    referrer: str
    relation: str


class TypeTable:
    """All type declarations of a protocol, indexed by domain and name."""

    def __init__(self, protocol: Protocol) -> None:
        self._domains: dict[str, dict[str, TypeDef]] = {
            domain.name: {t.name: t for t in domain.types} for domain in protocol.domains
        }

    def has_domain(self, name: str) -> bool:
        return name in self._domains

    def key(self, owner: str, ref: NamedTypeRef) -> tuple[str, str]:
        """Return the (domain, type) lookup key of *ref* used inside domain *owner*."""
        return (ref.domain or owner, ref.name)

    def lookup(self, owner: str, ref: NamedTypeRef) -> TypeDef | None:
        """Return the type *ref* names when used inside domain *owner*, or None."""
        domain, name = self.key(owner, ref)
        return self._domains.get(domain, {}).get(name)


def resolve(protocol: Protocol) -> list[UnresolvedReference]:
    """Resolve every named type reference in *protocol*.

    Unqualified names resolve in the domain that holds the reference;
    qualified ``Domain.Name`` references resolve in the named domain.
    Primitive, object, and inline enum types are never looked up.

    Args:
        protocol: A completely parsed document.

    Returns:
        One :class:`UnresolvedReference` per reference that names no type,
        in document order. An empty list means every reference resolved.
    """
    table = TypeTable(protocol)
    unresolved: list[UnresolvedReference] = []
    checked = 0
    for domain in protocol.domains:
        for referrer, ref in _named_refs(domain):
            checked += 1
            if table.lookup(domain.name, ref) is None:
                target, name = table.key(domain.name, ref)
                unresolved.append(UnresolvedReference(domain=target, name=name, referrer=referrer))
    logger.debug("Resolved %d type references, %d unresolved", checked, len(unresolved))
    return unresolved


def check_domain_references(protocol: Protocol) -> list[UnresolvedDomain]:
    """Report ``depends on`` and ``redirect`` targets that name no domain."""
    known = {domain.name for domain in protocol.domains}
    errors: list[UnresolvedDomain] = []
    for domain in protocol.domains:
        for dependency in domain.dependencies:
            if dependency not in known:
                errors.append(UnresolvedDomain(dependency, domain.name, "depends on"))
        for command in domain.commands:
            if command.redirect is not None and command.redirect not in known:
                errors.append(UnresolvedDomain(command.redirect, f"{domain.name}.{command.name}", "redirect"))
    return errors


# ################
# Implementation
# ################


def _named_refs(domain: Domain) -> Iterator[tuple[str, NamedTypeRef]]:
    """Yield (referrer path, reference) for every named reference in *domain*."""
    for type_def in domain.types:
        path = f"{domain.name}.{type_def.name}"
        base = type_def.base
        if isinstance(base, ArrayBase):
            yield from _named(f"{path}.items", base.items)
        elif isinstance(base, ObjectBase):
            yield from _field_refs(f"{path}.properties", base.properties)
    for command in domain.commands:
        path = f"{domain.name}.{command.name}"
        yield from _field_refs(f"{path}.parameters", command.parameters)
        yield from _field_refs(f"{path}.returns", command.returns)
    for event in domain.events:
        yield from _field_refs(f"{domain.name}.{event.name}.parameters", event.parameters)


def _field_refs(path: str, fields: Sequence[Parameter]) -> Iterator[tuple[str, NamedTypeRef]]:
    for f in fields:
        yield from _named(f"{path}.{f.name}", f.type)


def _named(path: str, type_ref: TypeRef) -> Iterator[tuple[str, NamedTypeRef]]:
    if isinstance(type_ref, NamedTypeRef):
        yield path, type_ref
