"""Unit tests for parsing and lead/line comment attachment."""

import pytest
from tree_sitter import Node

from goastx.core.errors import ExtractionError, ParseError
from goastx.core.syntax import SyntaxUnit, parse_source


def _child(unit: SyntaxUnit, node_type: str) -> Node:
    for child in unit.root.named_children:
        if child.type == node_type:
            return child
    raise AssertionError(f"no {node_type} in source")


class TestParseSource:
    def test_reads_package_name(self) -> None:
        unit = parse_source("package widgets\n")
        assert unit.package_name == "widgets"

    def test_accepts_bytes(self) -> None:
        unit = parse_source(b"package widgets\n")
        assert unit.package_name == "widgets"
        assert unit.source == b"package widgets\n"

    def test_text_returns_node_source(self) -> None:
        unit = parse_source("package p\n\nvar answer = 42\n")
        decl = _child(unit, "var_declaration")
        assert unit.text(decl) == "var answer = 42"

    def test_unclosed_struct_raises_parse_error(self) -> None:
        with pytest.raises(ParseError) as excinfo:
            parse_source("package p\n\ntype T struct {\n    A int\n", path="broken.go")

        error = excinfo.value
        assert error.path == "broken.go"
        assert error.line is not None
        assert error.column is not None
        assert str(error).startswith(f"broken.go:{error.line}:{error.column}: ")

    def test_missing_package_clause_raises(self) -> None:
        with pytest.raises(ParseError, match="expected 'package'") as excinfo:
            parse_source("type T struct{}\n")

        assert (excinfo.value.line, excinfo.value.column) == (1, 1)
        assert excinfo.value.path == "source"

    def test_empty_source_raises_at_first_position(self) -> None:
        with pytest.raises(ParseError) as excinfo:
            parse_source("")

        assert str(excinfo.value) == "source:1:1: expected 'package'"

    def test_invalid_utf8_raises_parse_error(self) -> None:
        with pytest.raises(ParseError, match="illegal UTF-8 encoding") as excinfo:
            parse_source(b"package p\n\n// caf\xe9\ntype A struct {\n\tX int\n}\n", path="latin1.go")

        error = excinfo.value
        assert error.path == "latin1.go"
        assert (error.line, error.column) == (3, 7)
        assert isinstance(error, ExtractionError)

    def test_parse_error_is_an_extraction_error(self) -> None:
        with pytest.raises(ExtractionError):
            parse_source("package p\n\nfunc {\n")


class TestCommentGroups:
    SOURCE = """package p // package trailer

// first
// second

// lead
var x = 1
"""

    def test_adjacent_comments_form_one_group(self) -> None:
        unit = parse_source(self.SOURCE)

        assert [group.lines() for group in unit.comment_groups] == [
            ["// package trailer"],
            ["// first", "// second"],
            ["// lead"],
        ]

    def test_group_positions_are_zero_based_lines(self) -> None:
        unit = parse_source(self.SOURCE)
        group = unit.comment_groups[1]

        assert (group.start_line, group.end_line) == (2, 3)
        assert unit.source[group.start_byte : group.end_byte] == b"// first\n// second"

    def test_lead_comment_is_last_group_before_node(self) -> None:
        unit = parse_source(self.SOURCE)
        decl = _child(unit, "var_declaration")

        lead = unit.lead_comment(decl)
        assert lead is not None
        assert lead.lines() == ["// lead"]

    def test_line_comment_trails_previous_token(self) -> None:
        unit = parse_source(self.SOURCE)
        clause = _child(unit, "package_clause")
        name = clause.named_children[0]

        line = unit.line_comment(name)
        assert line is not None
        assert line.lines() == ["// package trailer"]

    def test_comment_followed_by_blank_line_is_not_lead(self) -> None:
        unit = parse_source("package p\n\n// detached\n\nvar x = 1\n")
        decl = _child(unit, "var_declaration")

        assert unit.lead_comment(decl) is None
        assert [group.lines() for group in unit.comment_groups] == [["// detached"]]

    def test_comment_between_tokens_on_one_line_is_neither(self) -> None:
        unit = parse_source("package p\n\nvar x = /* inline */ 1\n")
        decl = _child(unit, "var_declaration")

        assert [group.lines() for group in unit.comment_groups] == [["/* inline */"]]
        assert unit.lead_comment(decl) is None
        assert unit.line_comment(decl) is None

    def test_multi_line_block_comment_ends_group_on_its_last_line(self) -> None:
        unit = parse_source("package p\n\n/*\n  lead\n*/\nvar x = 1\n")
        decl = _child(unit, "var_declaration")

        lead = unit.lead_comment(decl)
        assert lead is not None
        assert lead.lines() == ["/*\n  lead\n*/"]
