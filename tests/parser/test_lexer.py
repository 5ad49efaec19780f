# Copyright 2026 PDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the PDL line reader."""

import pytest

from pdl.parser.errors import ParseError
from pdl.parser.lexer import LexerError, Line, LineKind, read_lines

# ###############
# Test Helpers
# ###############


def _lines(source: str) -> list[Line]:
    return list(read_lines(source))


def _kinds(source: str) -> list[LineKind]:
    return [line.kind for line in _lines(source)]


def _depths(source: str) -> list[int]:
    return [line.depth for line in _lines(source) if line.kind is LineKind.CODE]


# ###############
# Classification
# ###############


class TestClassification:
    def test_empty_source_has_no_lines(self) -> None:
        assert _lines("") == []

    def test_code_line(self) -> None:
        (line,) = _lines("domain Foo\n")
        assert line.kind is LineKind.CODE
        assert line.content == "domain Foo"
        assert line.depth == 0

    def test_blank_lines_are_kept(self) -> None:
        assert _kinds("domain Foo\n\n   \n") == [LineKind.CODE, LineKind.BLANK, LineKind.BLANK]

    def test_comment_line_text_is_stripped(self) -> None:
        (line,) = _lines("  #   Unique node identifier.  \n")
        assert line.kind is LineKind.COMMENT
        assert line.content == "Unique node identifier."

    def test_empty_comment(self) -> None:
        (line,) = _lines("#\n")
        assert line.kind is LineKind.COMMENT
        assert line.content == ""

    def test_trailing_whitespace_is_trimmed(self) -> None:
        (line,) = _lines("domain Foo   \n")
        assert line.content == "domain Foo"

    def test_last_line_without_newline(self) -> None:
        lines = _lines("domain Foo\n  type Bar extends integer")
        assert [line.content for line in lines] == ["domain Foo", "type Bar extends integer"]

    def test_crlf_line_endings(self) -> None:
        lines = _lines("domain Foo\r\n  type Bar extends integer\r\n")
        assert [line.content for line in lines] == ["domain Foo", "type Bar extends integer"]
        assert _depths("domain Foo\r\n  type Bar extends integer\r\n") == [0, 1]


# ###############
# Positions
# ###############


class TestPositions:
    def test_line_numbers_are_one_based(self) -> None:
        lines = _lines("domain Foo\n\n# note\n  type Bar extends integer\n")
        assert [line.line for line in lines] == [1, 2, 3, 4]

    def test_column_of_first_character(self) -> None:
        lines = _lines("domain Foo\n    type Bar extends integer\n")
        assert lines[0].column == 1
        assert lines[1].column == 5

    def test_offsets_point_at_line_starts(self) -> None:
        source = "domain Foo\n  type Bar extends integer\nrest\n"
        for line in _lines(source):
            assert source[line.offset :].lstrip().startswith(line.content)


# ###############
# Indentation
# ###############


class TestIndentation:
    def test_two_space_unit(self) -> None:
        source = "domain Foo\n  type A extends object\n    properties\n      string a\n"
        assert _depths(source) == [0, 1, 2, 3]

    def test_four_space_unit(self) -> None:
        source = "domain Foo\n    type A extends object\n        properties\n            string a\n"
        assert _depths(source) == [0, 1, 2, 3]

    def test_tab_unit(self) -> None:
        source = "domain Foo\n\ttype A extends object\n\t\tproperties\n"
        assert _depths(source) == [0, 1, 2]

    def test_first_indented_line_fixes_unit(self) -> None:
        # Four spaces at the first indented line make eight spaces depth two.
        source = "domain Foo\n    type A extends string\n        enum\n"
        assert _depths(source) == [0, 1, 2]

    def test_width_not_multiple_of_unit_is_fatal(self) -> None:
        source = "domain Foo\n  type A extends integer\n   type B extends integer\n"
        with pytest.raises(LexerError) as exc_info:
            _lines(source)
        assert exc_info.value.line == 3
        assert "multiple" in str(exc_info.value)

    def test_tabs_after_spaces_is_fatal(self) -> None:
        source = "domain Foo\n  type A extends integer\n\ttype B extends integer\n"
        with pytest.raises(LexerError) as exc_info:
            _lines(source)
        assert exc_info.value.line == 3
        assert "spaces" in str(exc_info.value)

    def test_spaces_after_tabs_is_fatal(self) -> None:
        source = "domain Foo\n\ttype A extends integer\n  type B extends integer\n"
        with pytest.raises(LexerError) as exc_info:
            _lines(source)
        assert "tabs" in str(exc_info.value)

    def test_mixed_characters_in_one_indent_is_fatal(self) -> None:
        with pytest.raises(LexerError):
            _lines("domain Foo\n \ttype A extends integer\n")

    def test_lexer_error_is_a_parse_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _lines("domain Foo\n  type A extends integer\n\ttype B extends integer\n")
        assert exc_info.value.found == "type B extends integer"

    def test_comment_lines_do_not_affect_unit(self) -> None:
        source = "domain Foo\n\t# tab-indented comment\n  type A extends integer\n"
        assert _depths(source) == [0, 1]

    def test_comment_lines_are_not_checked(self) -> None:
        source = "domain Foo\n  type A extends integer\n   # odd comment\n"
        assert _kinds(source)[-1] is LineKind.COMMENT


# ###############
# Laziness
# ###############


class TestStream:
    def test_stream_is_restartable(self) -> None:
        stream = read_lines("domain Foo\n  type A extends integer\n")
        assert list(stream) == list(stream)

    def test_unit_is_recomputed_on_restart(self) -> None:
        stream = read_lines("domain Foo\n    type A extends integer\n")
        first = [line.depth for line in stream]
        second = [line.depth for line in stream]
        assert first == second == [0, 1]

    def test_lines_are_read_on_demand(self) -> None:
        # The bad indentation on line 3 is only reported once it is reached.
        stream = iter(read_lines("domain Foo\n  type A extends integer\n\tbad\n"))
        assert next(stream).content == "domain Foo"
        assert next(stream).content == "type A extends integer"
        with pytest.raises(LexerError):
            next(stream)
