import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from functools import cache
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, QueryCursor, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from comment_miner.config import DEFAULT_PARSE_TIMEOUT
from comment_miner.core.errors import ParseError, ParseTimeout, UnsupportedLanguage
from comment_miner.core.languages import GRAMMAR_LANGUAGES
from comment_miner.models import CaptureKind, RawCapture

logger = logging.getLogger(__name__)

_CAPTURE_KINDS = {
    "line_comment": CaptureKind.LINE_COMMENT,
    "block_comment": CaptureKind.BLOCK_COMMENT,
    "docstring": CaptureKind.DOCSTRING,
}


def _load_query(language: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_path = queries_dir / f"{language}_comments.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, language)), query_text)


def _char_column(line: bytes, byte_column: int) -> int:
    return len(line[:byte_column].decode("utf-8", errors="ignore"))


class TreeSitterAdapter:
    """Parses one grammar-backed language and captures its comment nodes."""

    def __init__(self, language: str, timeout: float = DEFAULT_PARSE_TIMEOUT) -> None:
        if language not in GRAMMAR_LANGUAGES:
            raise UnsupportedLanguage(f"No grammar for '{language}'")
        self.language = language
        self.timeout = timeout
        self._query = _load_query(language)

    def parse(self, text: str) -> Tree:
        source_bytes = text.encode("utf-8")
        parser = get_parser(cast(SupportedLanguage, self.language))
        # The worker thread is not joined on timeout; it finishes in the background.
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"parse-{self.language}")
        try:
            tree = pool.submit(parser.parse, source_bytes).result(timeout=self.timeout)
        except FutureTimeoutError as exc:
            raise ParseTimeout(self.language, self.timeout) from exc
        except (ValueError, RuntimeError) as exc:
            raise ParseError(f"{self.language} parser failed: {exc}") from exc
        finally:
            pool.shutdown(wait=False)
        if tree is None:
            raise ParseError(f"{self.language} parser returned no tree")
        return tree

    def capture(self, tree: Tree) -> list[RawCapture]:
        root = tree.root_node
        source_bytes = root.text or b""
        source_lines = source_bytes.split(b"\n")
        matches = QueryCursor(self._query).captures(root)

        seen: dict[tuple[int, int], RawCapture] = {}
        for name, nodes in matches.items():
            kind = _CAPTURE_KINDS.get(name)
            if kind is None:
                continue
            for node in nodes:
                span = (node.start_byte, node.end_byte)
                if span not in seen:
                    seen[span] = self._to_capture(node, kind, source_bytes, source_lines)
        return [seen[span] for span in sorted(seen)]

    def _to_capture(self, node: Node, kind: CaptureKind, source_bytes: bytes, source_lines: list[bytes]) -> RawCapture:
        start_row, start_byte_col = node.start_point[0], node.start_point[1]
        end_row, end_byte_col = node.end_point[0], node.end_point[1]
        if end_byte_col == 0 and end_row > start_row:
            # Node swallowed the trailing newline; report the row it really ends on.
            end_row -= 1
            end_byte_col = len(source_lines[end_row])
        end_row = min(end_row, len(source_lines) - 1)

        return RawCapture(
            kind=kind,
            text=source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace"),
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            start_row=start_row,
            end_row=end_row,
            start_column=_char_column(source_lines[start_row], start_byte_col),
            end_column=_char_column(source_lines[end_row], end_byte_col),
            node=node,
        )


@cache
def get_adapter(language: str, timeout: float = DEFAULT_PARSE_TIMEOUT) -> TreeSitterAdapter:
    return TreeSitterAdapter(language, timeout)
