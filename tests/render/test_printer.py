# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the canonical PDL printer."""

from pdl.model.entities import Domain, EnumBase, Event, PrimitiveBase, Protocol, TypeDef, Version
from pdl.model.types import EnumValue, Parameter, PrimitiveType, PrimitiveTypeRef
from pdl.parser.parser import loads
from pdl.render.config import RenderConfig
from pdl.render.printer import to_pdl

# ###############
# Test Helpers
# ###############


def _reprint(source: str, config: RenderConfig | None = None) -> str:
    return to_pdl(loads(source), config)


# ###############
# Layout
# ###############


class TestLayout:
    def test_empty_protocol(self) -> None:
        assert to_pdl(Protocol()) == ""

    def test_single_domain(self) -> None:
        assert _reprint("domain Foo\n  type Bar extends integer\n") == "domain Foo\n\n  type Bar extends integer\n"

    def test_full_document(self) -> None:
        source = """\
# Desc.
version
  major 1
  minor 3
experimental domain Foo
  depends on Bar
  # A type.
  type Id extends integer
  type Color extends string
    enum
      red
  command c
    redirect Bar
    parameters
      optional array of Id ids
    returns
      enum mode
        a
domain Bar
"""
        expected = """\
# Desc.
version
  major 1
  minor 3

experimental domain Foo
  depends on Bar

  # A type.
  type Id extends integer

  type Color extends string
    enum
      red

  command c
    redirect Bar
    parameters
      optional array of Id ids
    returns
      enum mode
        a

domain Bar
"""
        assert _reprint(source) == expected

    def test_canonical_output_is_stable(self) -> None:
        source = "domain Foo\n    # Doc.\n    type Bar extends object\n        properties\n            string s\n"
        printed = _reprint(source)
        assert _reprint(printed) == printed

    def test_dependencies_printed_first(self) -> None:
        source = "domain Foo\n  event e\n  depends on Bar\n"
        assert _reprint(source) == "domain Foo\n  depends on Bar\n\n  event e\n"

    def test_declarations_grouped_types_commands_events(self) -> None:
        source = "domain Foo\n  event e\n  command c\n  type T extends any\n"
        assert _reprint(source) == "domain Foo\n\n  type T extends any\n\n  command c\n\n  event e\n"

    def test_order_is_preserved(self) -> None:
        source = "domain Z\n  type B extends integer\n  type A extends integer\ndomain Y\n"
        printed = _reprint(source)
        assert printed.index("type B") < printed.index("type A") < printed.index("domain Y")

    def test_bare_object_type(self) -> None:
        assert _reprint("domain Foo\n  type O extends object\n") == "domain Foo\n\n  type O extends object\n"

    def test_array_type(self) -> None:
        printed = _reprint("domain Foo\n  type A extends array of Other.Thing\n")
        assert printed == "domain Foo\n\n  type A extends array of Other.Thing\n"

    def test_command_sections_in_canonical_order(self) -> None:
        source = "domain Foo\n  command c\n    returns\n      integer r\n    parameters\n      string p\n"
        expected = "domain Foo\n\n  command c\n    parameters\n      string p\n    returns\n      integer r\n"
        assert _reprint(source) == expected


# ###############
# Modifiers and Descriptions
# ###############


class TestModifiers:
    def test_canonical_modifier_order(self) -> None:
        source = "deprecated experimental domain Foo\n"
        assert _reprint(source) == "experimental deprecated domain Foo\n"

    def test_field_modifier_order(self) -> None:
        source = "domain Foo\n  event e\n    parameters\n      optional deprecated experimental string s\n"
        assert "      experimental deprecated optional string s\n" in _reprint(source)

    def test_multi_line_description_with_empty_line(self) -> None:
        protocol = Protocol(domains=[Domain(name="Foo", description="First.\n\nThird.")])
        assert to_pdl(protocol) == "# First.\n#\n# Third.\ndomain Foo\n"

    def test_enum_value_descriptions(self) -> None:
        protocol = Protocol(
            domains=[
                Domain(
                    name="Foo",
                    types=[
                        TypeDef(
                            name="Color",
                            base=EnumBase(values=[EnumValue(name="red", description="Warm."), EnumValue(name="blue")]),
                        )
                    ],
                )
            ]
        )
        assert to_pdl(protocol).endswith("    enum\n      # Warm.\n      red\n      blue\n")

    def test_protocol_description_requires_version(self) -> None:
        assert to_pdl(Protocol(description="Lost.")) == ""
        with_version = to_pdl(Protocol(version=Version(major=1, minor=0), description="Kept."))
        assert with_version == "# Kept.\nversion\n  major 1\n  minor 0\n"


# ###############
# Configuration
# ###############


class TestIndentConfig:
    def _protocol(self) -> Protocol:
        return Protocol(
            domains=[
                Domain(
                    name="Foo",
                    types=[TypeDef(name="Bar", base=PrimitiveBase(primitive=PrimitiveType.INTEGER))],
                )
            ]
        )

    def test_default_is_two_spaces(self) -> None:
        assert to_pdl(self._protocol()) == "domain Foo\n\n  type Bar extends integer\n"

    def test_four_spaces(self) -> None:
        assert to_pdl(self._protocol(), RenderConfig(indent_width=4)) == "domain Foo\n\n    type Bar extends integer\n"

    def test_tabs(self) -> None:
        assert to_pdl(self._protocol(), RenderConfig(use_tabs=True)) == "domain Foo\n\n\ttype Bar extends integer\n"

    def test_tab_output_parses_back(self) -> None:
        protocol = loads("domain Foo\n  command c\n    parameters\n      Bar b\n  type Bar extends integer\n")
        assert loads(to_pdl(protocol, RenderConfig(use_tabs=True))) == protocol

    def test_hand_built_parameter(self) -> None:
        protocol = Protocol(
            domains=[
                Domain(
                    name="Foo",
                    events=[
                        Event(
                            name="e",
                            parameters=[Parameter(name="n", type=PrimitiveTypeRef(primitive=PrimitiveType.NUMBER))],
                        )
                    ],
                )
            ]
        )
        assert to_pdl(protocol) == "domain Foo\n\n  event e\n    parameters\n      number n\n"

