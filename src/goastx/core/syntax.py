"""Go syntax trees from tree-sitter, with comment groups attached the way go/parser attaches them.

tree-sitter reports comments as free-floating ``comment`` nodes. Go tooling instead
works with *comment groups* (runs of adjacent comments) and distinguishes two
attachments made while scanning tokens:

* a **lead comment** is the last group of a comment run when it ends on the line
  right before the next token; it documents whatever starts at that token.
* a **line comment** is a group that starts on the same line as the previous
  token and is followed by a line break (or ``;`` / end of file); it trails
  whatever ends at that token.
"""

import logging
from dataclasses import dataclass

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from goastx.core.errors import ParseError

logger = logging.getLogger(__name__)

SOURCE_PATH = "source"

# Statement terminators carry no position information Go cares about.
_SKIPPED_TOKEN_TYPES = frozenset({"\n"})


@dataclass(frozen=True)
class Comment:
    text: str
    start_byte: int
    end_byte: int
    start_line: int
    end_line: int


@dataclass(frozen=True)
class CommentGroup:
    comments: tuple[Comment, ...]

    @property
    def start_byte(self) -> int:
        return self.comments[0].start_byte

    @property
    def end_byte(self) -> int:
        return self.comments[-1].end_byte

    @property
    def start_line(self) -> int:
        return self.comments[0].start_line

    @property
    def end_line(self) -> int:
        return self.comments[-1].end_line

    def lines(self) -> list[str]:
        return [comment.text for comment in self.comments]


@dataclass(frozen=True)
class _Token:
    kind: str
    start_byte: int
    end_byte: int
    line: int


class SyntaxUnit:
    """A parsed Go source file: tree, source bytes and comment attachment."""

    def __init__(
        self,
        root: Node,
        source: bytes,
        package_name: str,
        comment_groups: list[CommentGroup],
        lead_comments: dict[int, CommentGroup],
        line_comments: dict[int, CommentGroup],
    ) -> None:
        self.root = root
        self.source = source
        self.package_name = package_name
        self.comment_groups = comment_groups
        self._lead_comments = lead_comments
        self._line_comments = line_comments

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def lead_comment(self, node: Node) -> CommentGroup | None:
        """Return the comment group documenting the construct that starts at ``node``."""
        return self._lead_comments.get(node.start_byte)

    def line_comment(self, node: Node) -> CommentGroup | None:
        """Return the comment group trailing the construct that ends at ``node``."""
        return self._line_comments.get(node.end_byte)


def parse_source(text: str | bytes, path: str = SOURCE_PATH) -> SyntaxUnit:
    source = text.encode("utf-8") if isinstance(text, str) else text
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        line_start = source.rfind(b"\n", 0, exc.start) + 1
        line = source.count(b"\n", 0, exc.start) + 1
        raise ParseError(
            "illegal UTF-8 encoding", path=path, line=line, column=exc.start - line_start + 1
        ) from exc

    parser = get_parser("go")
    tree = parser.parse(source)
    root = tree.root_node

    error_node = _first_error(root)
    if error_node is not None:
        row, column = error_node.start_point
        detail = f"missing {error_node.type}" if error_node.is_missing else "syntax error"
        raise ParseError(detail, path=path, line=row + 1, column=column + 1)

    package_name = _package_name(root, source)
    if package_name is None:
        raise ParseError("expected 'package'", path=path, line=1, column=1)

    tokens, comments = _collect_tokens(root, source)
    groups, leads, lines = _group_comments(tokens, comments)
    logger.debug("Parsed %s: %d token(s), %d comment group(s)", path, len(tokens), len(groups))
    return SyntaxUnit(root, source, package_name, groups, leads, lines)


def _first_error(root: Node) -> Node | None:
    if not root.has_error:
        return None
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    return root


def _package_name(root: Node, source: bytes) -> str | None:
    for child in root.named_children:
        if child.type != "package_clause":
            continue
        for name in child.named_children:
            if name.type == "package_identifier":
                return source[name.start_byte : name.end_byte].decode("utf-8")
    return None


def _collect_tokens(root: Node, source: bytes) -> tuple[list[_Token], list[Comment]]:
    tokens: list[_Token] = []
    comments: list[Comment] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            text = source[node.start_byte : node.end_byte].decode("utf-8").replace("\r", "")
            comments.append(
                Comment(
                    text=text,
                    start_byte=node.start_byte,
                    end_byte=node.end_byte,
                    start_line=node.start_point[0],
                    end_line=node.end_point[0],
                )
            )
        elif node.child_count == 0:
            if node.start_byte < node.end_byte and node.type not in _SKIPPED_TOKEN_TYPES:
                tokens.append(_Token(node.type, node.start_byte, node.end_byte, node.start_point[0]))
        else:
            stack.extend(reversed(node.children))
    return tokens, comments


def _group_comments(
    tokens: list[_Token], comments: list[Comment]
) -> tuple[list[CommentGroup], dict[int, CommentGroup], dict[int, CommentGroup]]:
    """Split comment runs into groups and record lead/line attachments.

    Lead comments are keyed by the start byte of the token that follows them,
    line comments by the end byte of the token they trail.
    """
    stream: list[_Token | Comment] = sorted([*tokens, *comments], key=lambda item: item.start_byte)
    groups: list[CommentGroup] = []
    leads: dict[int, CommentGroup] = {}
    lines: dict[int, CommentGroup] = {}

    previous: _Token | None = None
    i = 0
    while i < len(stream):
        item = stream[i]
        if isinstance(item, _Token):
            previous = item
            i += 1
            continue

        j = i
        while j < len(stream) and isinstance(stream[j], Comment):
            j += 1
        run = [c for c in stream[i:j] if isinstance(c, Comment)]
        following = stream[j] if j < len(stream) else None
        assert following is None or isinstance(following, _Token)

        pos = 0
        if previous is not None and run[0].start_line == previous.line:
            group, end_line, pos = _consume_group(run, pos, 0)
            groups.append(group)
            if following is None or following.line != end_line or following.kind == ";":
                lines[previous.end_byte] = group

        last: CommentGroup | None = None
        end_line = -1
        while pos < len(run):
            last, end_line, pos = _consume_group(run, pos, 1)
            groups.append(last)
        if last is not None and following is not None and end_line + 1 == following.line:
            leads[following.start_byte] = last

        i = j
    return groups, leads, lines


def _consume_group(run: list[Comment], pos: int, max_gap: int) -> tuple[CommentGroup, int, int]:
    end_line = run[pos].start_line
    taken: list[Comment] = []
    while pos < len(run) and run[pos].start_line <= end_line + max_gap:
        taken.append(run[pos])
        end_line = run[pos].end_line
        pos += 1
    return CommentGroup(tuple(taken)), end_line, pos
