"""Unit tests for the tree-sitter grammar adapter."""

import time
from typing import Any

import pytest

from comment_miner.core import grammar
from comment_miner.core.errors import GrammarFailure, ParseError, ParseTimeout, UnsupportedLanguage
from comment_miner.core.grammar import TreeSitterAdapter, get_adapter
from comment_miner.core.ports.grammar import GrammarAdapter
from comment_miner.models import CaptureKind


class _SlowParser:
    def parse(self, source: bytes) -> Any:
        time.sleep(0.5)
        return None


class _BrokenParser:
    def parse(self, source: bytes) -> Any:
        raise ValueError("bad input")


class _NoTreeParser:
    def parse(self, source: bytes) -> Any:
        return None


class TestTreeSitterAdapter:
    def test_implements_protocol(self) -> None:
        adapter: GrammarAdapter = TreeSitterAdapter("python")
        assert adapter.language == "python"
        assert hasattr(adapter, "capture")

    def test_rejects_languages_without_grammar(self) -> None:
        with pytest.raises(UnsupportedLanguage):
            TreeSitterAdapter("pharo")

    def test_java_captures_in_source_order(self) -> None:
        adapter = TreeSitterAdapter("java")
        source = "/** Doc. */\nclass Foo {\n    // note\n}\n"
        captures = adapter.capture(adapter.parse(source))

        assert [c.kind for c in captures] == [CaptureKind.BLOCK_COMMENT, CaptureKind.LINE_COMMENT]
        doc, note = captures
        assert doc.text == "/** Doc. */"
        assert (doc.start_row, doc.end_row, doc.start_column, doc.end_column) == (0, 0, 0, 11)
        assert note.text == "// note"
        assert (note.start_row, note.end_row, note.start_column) == (2, 2, 4)
        assert note.node is not None

    def test_python_docstring_and_comment(self) -> None:
        adapter = TreeSitterAdapter("python")
        source = 'def f():\n    """Doc.\n\n    More.\n    """\n    # note\n    return 1\n'
        captures = adapter.capture(adapter.parse(source))

        assert [c.kind for c in captures] == [CaptureKind.DOCSTRING, CaptureKind.LINE_COMMENT]
        doc = captures[0]
        assert (doc.start_row, doc.end_row) == (1, 4)
        assert doc.start_column == 4

    def test_columns_count_characters_not_bytes(self) -> None:
        adapter = TreeSitterAdapter("python")
        captures = adapter.capture(adapter.parse("s = 'é'  # note\n"))
        assert captures[0].start_column == 9

    def test_timeout_raises_parse_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(grammar, "get_parser", lambda language: _SlowParser())
        adapter = TreeSitterAdapter("java", timeout=0.05)
        with pytest.raises(ParseTimeout) as exc_info:
            adapter.parse("class Foo {}")
        assert exc_info.value.language == "java"
        assert isinstance(exc_info.value, GrammarFailure)

    def test_parser_error_raises_parse_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(grammar, "get_parser", lambda language: _BrokenParser())
        with pytest.raises(ParseError, match="bad input"):
            TreeSitterAdapter("java").parse("class Foo {}")

    def test_missing_tree_raises_parse_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(grammar, "get_parser", lambda language: _NoTreeParser())
        with pytest.raises(ParseError):
            TreeSitterAdapter("python").parse("x = 1")

    def test_syntax_errors_still_yield_captures(self) -> None:
        adapter = TreeSitterAdapter("java")
        captures = adapter.capture(adapter.parse("// kept\nclass {{{\n"))
        assert [c.text for c in captures] == ["// kept"]


def test_get_adapter_is_cached() -> None:
    assert get_adapter("java") is get_adapter("java")
    assert get_adapter("java") is not get_adapter("python")
