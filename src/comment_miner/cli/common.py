import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from comment_miner.classifier.http import HttpCommentClassifier
from comment_miner.config import get_settings
from comment_miner.core.ports.classifier import CommentClassifier
from comment_miner.core.ports.store import CommentStore
from comment_miner.db.json_store import JsonCommentStore
from comment_miner.models import CommentRecord

console = Console()

_MAX_CONTENT_WIDTH = 80


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def print_error(error: Exception | str) -> None:
    console.print(f"[red]{escape(str(error))}[/red]")


def _truncate(value: str, max_width: int = _MAX_CONTENT_WIDTH) -> str:
    value = " ".join(value.split())
    if len(value) > max_width:
        return value[: max_width - 3] + "..."
    return value


def render_records(records: Sequence[CommentRecord], title: str | None = None) -> None:
    table = Table(title=title, show_lines=False)
    for header in ("id", "level", "lines", "class", "type", "content"):
        table.add_column(header)
    for record in records:
        start, end = record.line_number
        table.add_row(
            str(record.id),
            record.level.value,
            f"{start + 1}-{end + 1}",
            record.class_name,
            escape(", ".join(record.type)),
            escape(_truncate(record.content)),
        )
    console.print(table)
    console.print(f"({len(records)} rows)")


def get_store(root: Path) -> CommentStore:
    return JsonCommentStore.for_workspace(root, get_settings().store_relpath)


def get_classifier() -> CommentClassifier:
    settings = get_settings()
    return HttpCommentClassifier(settings.classifier_url, timeout=settings.classifier_timeout)
