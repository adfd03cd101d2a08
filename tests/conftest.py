"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest
from tree_sitter import Language, Parser, Query
from tree_sitter_language_pack import get_language, get_parser

from comment_miner.config import Settings
from comment_miner.db import InMemoryCommentStore

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def queries_dir() -> Path:
    """Return the path to the queries directory."""
    return _REPO_ROOT / "src" / "comment_miner" / "queries"


@pytest.fixture
def java_parser() -> Parser:
    """Return a tree-sitter parser for Java."""
    return get_parser("java")


@pytest.fixture
def python_parser() -> Parser:
    """Return a tree-sitter parser for Python."""
    return get_parser("python")


@pytest.fixture
def java_language() -> Language:
    return get_language("java")


@pytest.fixture
def python_language() -> Language:
    return get_language("python")


@pytest.fixture
def java_comments_query(queries_dir: Path, java_language: Language) -> Query:
    return Query(java_language, (queries_dir / "java_comments.scm").read_text())


@pytest.fixture
def python_comments_query(queries_dir: Path, python_language: Language) -> Query:
    return Query(python_language, (queries_dir / "python_comments.scm").read_text())


@pytest.fixture
def settings() -> Settings:
    """Settings that never shell out to git."""
    return Settings(enrich_commit_dates=False)


@pytest.fixture
def in_memory_store() -> InMemoryCommentStore:
    return InMemoryCommentStore()
