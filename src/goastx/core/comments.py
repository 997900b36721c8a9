from tree_sitter import Node

from goastx.core.syntax import CommentGroup, SyntaxUnit

_INFINITY = 1 << 30

# Nodes that open a "node group": the file, declarations, specs, fields and statements.
_NODE_GROUP_TYPES = frozenset(
    {
        "source_file",
        "import_declaration",
        "type_declaration",
        "var_declaration",
        "const_declaration",
        "function_declaration",
        "method_declaration",
        "import_spec",
        "type_spec",
        "type_alias",
        "var_spec",
        "const_spec",
        "field_declaration",
        "parameter_declaration",
        "variadic_parameter_declaration",
        "method_elem",
        "method_spec",
        "block",
        "short_var_declaration",
        "expression_case",
        "default_case",
        "type_case",
        "communication_case",
    }
)

# Wrapper nodes with no counterpart in Go's own syntax tree.
_TRANSPARENT_TYPES = frozenset(
    {
        "import_spec_list",
        "interpreted_string_literal_content",
        "raw_string_literal_content",
        "escape_sequence",
    }
)


def comment_lines(group: CommentGroup | None) -> list[str]:
    return group.lines() if group is not None else []


class CommentIndex:
    """Associates every comment group of a file with one syntax node.

    A group belongs to the most recently closed node group (declaration, spec,
    field, statement) when it starts on the line that node group ended on, or
    on the following line with a blank line before the next node. Failing that
    the same test is applied to the previous node, and otherwise the group
    belongs to the node that follows it.
    """

    def __init__(self, unit: SyntaxUnit) -> None:
        self._groups: dict[int, list[CommentGroup]] = {}
        if unit.comment_groups:
            self._associate(unit.root, sorted(unit.comment_groups, key=lambda g: g.start_byte))

    def groups_for(self, node: Node) -> list[CommentGroup]:
        return list(self._groups.get(node.id, []))

    def comments_for(self, node: Node) -> list[str]:
        lines: list[str] = []
        for group in self._groups.get(node.id, []):
            lines.extend(group.lines())
        return lines

    def _associate(self, root: Node, groups: list[CommentGroup]) -> None:
        previous: Node | None = None
        previous_end_line = 0
        node_group: Node | None = None
        node_group_end_line = 0
        stack: list[Node] = []
        index = 0

        # A trailing None sentinel flushes the groups after the last node.
        for node in [*_preorder(root), None]:
            if node is None:
                node_start, node_line = _INFINITY, _INFINITY
            else:
                node_start, node_line = _start(node)

            while index < len(groups) and groups[index].end_byte <= node_start:
                group = groups[index]
                closed = _pop(stack, group.start_byte)
                if closed is not None:
                    node_group = closed
                    node_group_end_line = _end(closed)[1]

                if node_group is not None and (
                    node_group_end_line == group.start_line
                    or (node_group_end_line + 1 == group.start_line and group.end_line + 1 < node_line)
                ):
                    owner = node_group
                elif previous is not None and (
                    previous_end_line == group.start_line
                    or (previous_end_line + 1 == group.start_line and group.end_line + 1 < node_line)
                    or node is None
                ):
                    owner = previous
                else:
                    assert node is not None
                    owner = node
                self._groups.setdefault(owner.id, []).append(group)
                index += 1

            if node is None or index >= len(groups):
                return
            previous = node
            previous_end_line = _end(node)[1]
            if node.type in _NODE_GROUP_TYPES or node.type.endswith("_statement"):
                _pop(stack, node_start)
                stack.append(node)


def _start(node: Node) -> tuple[int, int]:
    # A file begins at its package clause, not at any leading comments.
    if node.type == "source_file":
        for child in node.children:
            if child.type != "comment":
                return child.start_byte, child.start_point[0]
    return node.start_byte, node.start_point[0]


def _end(node: Node) -> tuple[int, int]:
    # A file ends with its last declaration; trailing comments are outside it.
    if node.type == "source_file":
        for child in reversed(node.named_children):
            if child.type != "comment":
                return child.end_byte, child.end_point[0]
    return node.end_byte, node.end_point[0]


def _pop(stack: list[Node], position: int) -> Node | None:
    closed = None
    while stack and _end(stack[-1])[0] <= position:
        closed = stack.pop()
    return closed


def _preorder(root: Node) -> list[Node]:
    nodes: list[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            continue
        if node.is_named and node.type not in _TRANSPARENT_TYPES:
            nodes.append(node)
        stack.extend(reversed(node.children))
    return nodes
