import logging

from tree_sitter import Node

from goastx.core.comments import CommentIndex, comment_lines
from goastx.core.syntax import SyntaxUnit
from goastx.core.tags import parse_tag
from goastx.core.typeexpr import render_type, strip_pointers, struct_fields
from goastx.models import Record, RecordField

logger = logging.getLogger(__name__)

_TYPE_SPEC_TYPES = ("type_spec", "type_alias")


def extract_records(unit: SyntaxUnit, index: CommentIndex) -> list[Record]:
    """Return every top-level struct type definition of the file, in source order."""
    records: list[Record] = []
    for decl in unit.root.named_children:
        if decl.type != "type_declaration":
            continue
        decl_comments = index.comments_for(decl)
        for spec in decl.named_children:
            if spec.type not in _TYPE_SPEC_TYPES:
                continue
            type_node = spec.child_by_field_name("type")
            name_node = spec.child_by_field_name("name")
            if type_node is None or name_node is None or type_node.type != "struct_type":
                continue
            comments = [*decl_comments, *index.comments_for(spec)]
            records.append(build_record(type_node, unit, name=unit.text(name_node), comments=comments))
    logger.debug("Extracted %d record(s) from package %s", len(records), unit.package_name)
    return records


def build_record(struct_node: Node, unit: SyntaxUnit, name: str = "", comments: list[str] | None = None) -> Record:
    """Build a record from a ``struct_type`` node.

    Top-level declarations pass their name and comments; inline struct types
    met as field types are built through the same path with neither.
    """
    fields = [_build_field(decl, unit) for decl in struct_fields(struct_node)]
    return Record(name=name, comments=comments or [], fields=fields)


def _build_field(decl: Node, unit: SyntaxUnit) -> RecordField:
    name = ", ".join(unit.text(ident) for ident in decl.children_by_field_name("name"))
    type_node = decl.child_by_field_name("type")
    type_rendering = render_type(type_node, unit)
    if not name and any(child.type == "*" for child in decl.children):
        # Embedded pointer field: the grammar keeps the star outside the type.
        type_rendering = "*" + type_rendering

    tag = raw_tag = None
    tag_node = decl.child_by_field_name("tag")
    if tag_node is not None:
        tag, raw_tag = parse_tag(unit.text(tag_node))

    embedded_record = None
    inner = strip_pointers(type_node)
    if inner is not None and inner.type == "struct_type":
        embedded_record = build_record(inner, unit)

    return RecordField(
        name=name,
        type_rendering=type_rendering,
        doc_comments=comment_lines(unit.lead_comment(decl)),
        trailing_comments=comment_lines(unit.line_comment(decl)),
        tag=tag,
        raw_tag=raw_tag,
        embedded_record=embedded_record,
    )
