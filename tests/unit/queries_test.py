"""Unit tests for the comment tree-sitter queries."""

from tree_sitter import Parser, Query, QueryCursor


def get_captures_with_text(query: Query, parser: Parser, source: str) -> dict[str, list[str]]:
    """Parse source and return capture names mapped to their matched text."""
    source_bytes = source.encode("utf-8")
    tree = parser.parse(source_bytes)
    cursor = QueryCursor(query)
    result: dict[str, list[str]] = {}
    for _, matched_captures in cursor.matches(tree.root_node):
        for cap_name, nodes in matched_captures.items():
            if cap_name not in result:
                result[cap_name] = []
            for node in nodes:
                text = source_bytes[node.start_byte : node.end_byte].decode("utf-8")
                result[cap_name].append(text)
    return result


class TestJavaCommentsQuery:
    """Tests for Java comment captures."""

    def test_captures_line_and_block_comments(self, java_comments_query: Query, java_parser: Parser) -> None:
        source = """
/** Javadoc. */
class Foo {
    // line
    /* block */
    void bar() {}
}
"""
        captures = get_captures_with_text(java_comments_query, java_parser, source)
        assert captures["line_comment"] == ["// line"]
        assert sorted(captures["block_comment"]) == ["/* block */", "/** Javadoc. */"]

    def test_ignores_comment_markers_in_strings(self, java_comments_query: Query, java_parser: Parser) -> None:
        source = 'class Foo { String url = "http://example.com"; }'
        captures = get_captures_with_text(java_comments_query, java_parser, source)
        assert captures == {}


class TestPythonCommentsQuery:
    """Tests for Python comment and docstring captures."""

    def test_captures_hash_comments(self, python_comments_query: Query, python_parser: Parser) -> None:
        source = "x = 1  # trailing\n# own line\n"
        captures = get_captures_with_text(python_comments_query, python_parser, source)
        assert captures["line_comment"] == ["# trailing", "# own line"]

    def test_captures_module_class_and_function_docstrings(
        self, python_comments_query: Query, python_parser: Parser
    ) -> None:
        source = '''"""Module doc."""


class Foo:
    """Class doc."""

    def bar(self):
        """Method doc."""
        return 1
'''
        captures = get_captures_with_text(python_comments_query, python_parser, source)
        assert sorted(captures["docstring"]) == ['"""Class doc."""', '"""Method doc."""', '"""Module doc."""']

    def test_later_strings_are_not_docstrings(self, python_comments_query: Query, python_parser: Parser) -> None:
        source = '''def bar():
    x = 1
    """Not a docstring."""
'''
        captures = get_captures_with_text(python_comments_query, python_parser, source)
        assert "docstring" not in captures
