from collections.abc import Iterator

from tree_sitter import Node

from goastx.core.comments import comment_lines
from goastx.core.syntax import SyntaxUnit
from goastx.models import Import


def extract_imports(unit: SyntaxUnit) -> list[Import]:
    imports: list[Import] = []
    for spec in _import_specs(unit.root):
        name_node = spec.child_by_field_name("name")
        path_node = spec.child_by_field_name("path")
        imports.append(
            Import(
                alias=unit.text(name_node) if name_node is not None else None,
                path_literal=unit.text(path_node) if path_node is not None else "",
                doc_comments=comment_lines(unit.lead_comment(spec)),
                trailing_comments=comment_lines(unit.line_comment(spec)),
            )
        )
    return imports


def _import_specs(root: Node) -> Iterator[Node]:
    for decl in root.named_children:
        if decl.type != "import_declaration":
            continue
        for child in decl.named_children:
            if child.type == "import_spec":
                yield child
            elif child.type == "import_spec_list":
                yield from (spec for spec in child.named_children if spec.type == "import_spec")
