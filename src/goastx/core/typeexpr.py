from tree_sitter import Node

from goastx.core.syntax import SyntaxUnit

UNKNOWN_TYPE = "?"

_NAME_TYPES = frozenset({"type_identifier", "identifier", "package_identifier", "field_identifier"})


def render_type(node: Node | None, unit: SyntaxUnit) -> str:
    """Render a type expression canonically, e.g. ``map[string]*[SZ]int``.

    Inline struct types render as the placeholder ``struct{...}``; their fields
    are exposed separately as an embedded record. Shapes without a rendering
    rule come out as ``"?"``.
    """
    if node is None:
        return UNKNOWN_TYPE
    kind = node.type
    if kind in _NAME_TYPES:
        return unit.text(node)
    if kind == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return f"{render_type(package, unit)}.{render_type(name, unit)}"
    if kind == "pointer_type":
        return "*" + render_type(_first_named(node), unit)
    if kind == "array_type":
        length = _render_length(node.child_by_field_name("length"), unit)
        return f"[{length}]{render_type(node.child_by_field_name('element'), unit)}"
    if kind == "implicit_length_array_type":
        return "[...]" + render_type(node.child_by_field_name("element"), unit)
    if kind == "slice_type":
        return "[]" + render_type(node.child_by_field_name("element"), unit)
    if kind == "map_type":
        key = render_type(node.child_by_field_name("key"), unit)
        value = render_type(node.child_by_field_name("value"), unit)
        return f"map[{key}]{value}"
    if kind == "struct_type":
        return "struct{...}" if struct_fields(node) else "struct{}"
    if kind == "interface_type":
        return "interface{...}" if _named(node) else "interface{}"
    if kind == "channel_type":
        return _channel_prefix(node) + render_type(node.child_by_field_name("value"), unit)
    if kind == "generic_type":
        base = render_type(node.child_by_field_name("type"), unit)
        arguments = node.child_by_field_name("type_arguments")
        rendered = [_render_type_elem(arg, unit) for arg in _named(arguments)] if arguments else []
        return f"{base}[{', '.join(rendered)}]"
    if kind == "parenthesized_type":
        return f"({render_type(_first_named(node), unit)})"
    if kind == "negated_type":
        return "~" + render_type(_first_named(node), unit)
    return UNKNOWN_TYPE


def strip_pointers(node: Node | None) -> Node | None:
    while node is not None and node.type == "pointer_type":
        node = _first_named(node)
    return node


def struct_fields(node: Node) -> list[Node]:
    """Return the ``field_declaration`` nodes of a ``struct_type`` in source order."""
    for child in node.named_children:
        if child.type == "field_declaration_list":
            return [field for field in child.named_children if field.type == "field_declaration"]
    return []


def _render_length(node: Node | None, unit: SyntaxUnit) -> str:
    if node is None:
        return ""
    return " ".join(unit.text(node).split())


def _render_type_elem(node: Node, unit: SyntaxUnit) -> str:
    if node.type == "type_elem":
        return " | ".join(render_type(term, unit) for term in _named(node))
    return render_type(node, unit)


def _channel_prefix(node: Node) -> str:
    tokens = [child.type for child in node.children if not child.is_named]
    if tokens[:2] == ["<-", "chan"]:
        return "<-chan "
    if tokens[:2] == ["chan", "<-"]:
        return "chan<- "
    return "chan "


def _named(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _first_named(node: Node) -> Node | None:
    named = _named(node)
    return named[0] if named else None
