"""Decide which construct a captured comment documents.

Priority, first hit wins:

1. a docstring that is the first statement of a function or class body;
2. the nearest enclosing class-like or method-like construct;
3. a class-like or method-like declaration starting on the very next row;
4. (Python only) a comment or docstring in the unbroken run at the top of the module;
5. otherwise inline.
"""

from dataclasses import dataclass

from tree_sitter import Node

from comment_miner.models import CommentLevel


@dataclass(frozen=True)
class _NodeKinds:
    class_types: frozenset[str]
    method_types: frozenset[str]
    comment_types: frozenset[str]
    wrapper_types: frozenset[str] = frozenset()
    docstring_type: str | None = None
    module_type: str | None = None


_NODE_KINDS = {
    "java": _NodeKinds(
        class_types=frozenset(
            {"class_declaration", "interface_declaration", "enum_declaration", "record_declaration"}
        ),
        method_types=frozenset({"method_declaration", "constructor_declaration"}),
        comment_types=frozenset({"line_comment", "block_comment"}),
    ),
    "python": _NodeKinds(
        class_types=frozenset({"class_definition"}),
        method_types=frozenset({"function_definition"}),
        comment_types=frozenset({"comment"}),
        wrapper_types=frozenset({"decorated_definition"}),
        docstring_type="string",
        module_type="module",
    ),
}


def _declaration_level(node: Node, kinds: _NodeKinds) -> CommentLevel | None:
    if node.type in kinds.wrapper_types:
        inner = node.child_by_field_name("definition")
        if inner is None:
            return None
        node = inner
    if node.type in kinds.class_types:
        return CommentLevel.CLASS
    if node.type in kinds.method_types:
        return CommentLevel.METHOD
    return None


def _last_row(node: Node) -> int:
    row, column = node.end_point[0], node.end_point[1]
    if column == 0 and row > node.start_point[0]:
        return row - 1
    return row


def _docstring_level(node: Node, kinds: _NodeKinds) -> CommentLevel | None:
    if kinds.docstring_type is None or node.type != kinds.docstring_type:
        return None
    statement = node.parent
    if statement is None or statement.type != "expression_statement":
        return None
    body = statement.parent
    if body is None or body.type != "block" or body.parent is None:
        return None
    previous = statement.prev_named_sibling
    while previous is not None and previous.type in kinds.comment_types:
        previous = previous.prev_named_sibling
    if previous is not None:
        return None
    return _declaration_level(body.parent, kinds)


def _enclosing_level(node: Node, kinds: _NodeKinds) -> CommentLevel | None:
    current = node.parent
    while current is not None:
        level = _declaration_level(current, kinds)
        if level is not None:
            return level
        current = current.parent
    return None


def _adjacent_level(node: Node, kinds: _NodeKinds) -> CommentLevel | None:
    sibling = node.next_named_sibling
    if sibling is None or sibling.start_point[0] > _last_row(node) + 1:
        return None
    return _declaration_level(sibling, kinds)


def _is_module_header(node: Node, kinds: _NodeKinds) -> bool:
    if kinds.module_type is None:
        return False
    top = node
    if node.type == kinds.docstring_type and node.parent is not None and node.parent.type == "expression_statement":
        top = node.parent
    if top.parent is None or top.parent.type != kinds.module_type:
        return False
    previous = top.prev_named_sibling
    while previous is not None and previous.type in kinds.comment_types:
        previous = previous.prev_named_sibling
    return previous is None


def determine_level(node: Node | None, language: str) -> CommentLevel:
    kinds = _NODE_KINDS.get(language)
    if node is None or kinds is None:
        return CommentLevel.INLINE
    level = _docstring_level(node, kinds) or _enclosing_level(node, kinds) or _adjacent_level(node, kinds)
    if level is not None:
        return level
    if _is_module_header(node, kinds):
        return CommentLevel.MODULE
    return CommentLevel.INLINE


def enclosing_class_name(node: Node | None, language: str) -> str:
    kinds = _NODE_KINDS.get(language)
    if node is None or kinds is None:
        return ""
    current = node.parent
    while current is not None:
        if current.type in kinds.class_types:
            name = current.child_by_field_name("name")
            if name is not None and name.text is not None:
                return name.text.decode("utf-8", errors="replace")
            return ""
        current = current.parent
    return ""
