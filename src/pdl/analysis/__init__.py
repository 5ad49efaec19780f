# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Cross-reference resolution for parsed PDL documents."""

from pdl.analysis.resolver import (
    TypeTable,
    UnresolvedDomain,
    UnresolvedReference,
    check_domain_references,
    resolve,
)

__all__ = [
    "resolve",
    "check_domain_references",
    "TypeTable",
    "UnresolvedReference",
    "UnresolvedDomain",
]
