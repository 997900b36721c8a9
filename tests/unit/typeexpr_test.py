"""Unit tests for canonical type-expression rendering."""

import pytest
from tree_sitter import Parser

from goastx.core import extract_source
from goastx.core.syntax import parse_source
from goastx.core.typeexpr import UNKNOWN_TYPE, render_type, strip_pointers


def _render(type_expr: str) -> str:
    parsed = extract_source(f"package p\n\ntype T struct {{\n    F {type_expr}\n}}\n")
    assert parsed.records is not None
    return parsed.records[0].fields[0].type_rendering


@pytest.mark.parametrize(
    ("written", "rendered"),
    [
        ("int", "int"),
        ("*int", "*int"),
        ("io.Reader", "io.Reader"),
        ("*io.Reader", "*io.Reader"),
        ("[]string", "[]string"),
        ("[4]byte", "[4]byte"),
        ("[SZ]int", "[SZ]int"),
        ("[N+1]int", "[N+1]int"),
        ("[2]******int", "[2]******int"),
        ("map[string]int", "map[string]int"),
        ("map[string]*[SZ]int", "map[string]*[SZ]int"),
        ("map[pkg.Key][]*pkg.Value", "map[pkg.Key][]*pkg.Value"),
        ("[][]map[string]bool", "[][]map[string]bool"),
    ],
)
def test_round_trips_name_pointer_array_and_map_layers(written: str, rendered: str) -> None:
    assert _render(written) == rendered


def test_normalizes_whitespace() -> None:
    assert _render("map[ string ]  * int") == "map[string]*int"


@pytest.mark.parametrize(
    ("written", "rendered"),
    [
        ("chan int", "chan int"),
        ("<-chan int", "<-chan int"),
        ("chan<- error", "chan<- error"),
        ("Map[string, int]", "Map[string, int]"),
        ("interface{}", "interface{}"),
        ("interface{ String() string }", "interface{...}"),
        ("struct{ A int }", "struct{...}"),
        ("*struct{ A int }", "*struct{...}"),
        ("struct{}", "struct{}"),
    ],
)
def test_renders_other_type_shapes(written: str, rendered: str) -> None:
    assert _render(written) == rendered


def test_function_types_are_unknown() -> None:
    assert _render("func(int) error") == UNKNOWN_TYPE


def test_missing_node_is_unknown() -> None:
    unit = parse_source("package p\n")
    assert render_type(None, unit) == "?"


def test_strip_pointers_reaches_the_pointee(go_parser: Parser) -> None:
    source = b"package p\n\nvar v ***struct{ A int }\n"
    tree = go_parser.parse(source)
    var_spec = tree.root_node.named_children[1].named_children[0]
    pointer = var_spec.child_by_field_name("type")

    assert pointer is not None
    assert pointer.type == "pointer_type"
    inner = strip_pointers(pointer)
    assert inner is not None
    assert inner.type == "struct_type"
    assert strip_pointers(None) is None
