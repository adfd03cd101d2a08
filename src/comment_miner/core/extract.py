import asyncio
import itertools
import logging
from collections.abc import Iterator
from pathlib import Path

from comment_miner.config import Settings, get_settings
from comment_miner.core.classification import determine_level, enclosing_class_name
from comment_miner.core.cleaning import clean_comment
from comment_miner.core.errors import FileTooLarge, GrammarFailure, UnreadableEntry, UnsupportedLanguage
from comment_miner.core.fallback import fallback_captures
from comment_miner.core.grammar import get_adapter
from comment_miner.core.languages import GRAMMAR_LANGUAGES, is_supported_file, resolve_language
from comment_miner.core.ports.grammar import GrammarAdapter
from comment_miner.core.segmentation import split_paragraphs
from comment_miner.core.spans import recover_span
from comment_miner.models import CommentBatch, CommentRecord, RawCapture, SourceUnit

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = frozenset({"node_modules", "__pycache__", "venv", "build", "dist", "target"})


def normalize_text(raw: str) -> str:
    if raw.startswith("\ufeff"):
        raw = raw[1:]
    return raw.replace("\r\n", "\n").replace("\r", "\n")


def read_source(path: str | Path, language: str | None = None) -> SourceUnit:
    file_path = Path(path)
    resolved_language = resolve_language(language, file_path)
    try:
        raw = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    except OSError as exc:
        raise UnreadableEntry(f"Cannot read {path}: {exc}") from exc
    return SourceUnit(
        path=str(file_path.resolve()),
        language=resolved_language,
        text=normalize_text(raw.decode("utf-8", errors="replace")),
    )


def build_records(unit: SourceUnit, captures: list[RawCapture]) -> list[CommentRecord]:
    """Turn captures into one record per paragraph.

    Captures without a syntax node (regex path) always come out ``inline``.
    """
    source_lines = unit.lines
    records: list[CommentRecord] = []
    for capture in captures:
        cleaned = clean_comment(capture.text, unit.language)
        level = determine_level(capture.node, unit.language)
        class_name = enclosing_class_name(capture.node, unit.language)
        for paragraph in split_paragraphs(cleaned, unit.language):
            span = recover_span(capture, cleaned, paragraph, source_lines)
            records.append(
                CommentRecord(
                    language=unit.language,
                    content=paragraph,
                    class_name=class_name,
                    level=level,
                    line_number=(span.start_row, span.end_row),
                    index=(span.start_column, span.end_column),
                )
            )
    return records


def extract_with_fallback(unit: SourceUnit) -> list[CommentRecord]:
    return build_records(unit, fallback_captures(unit))


def _extract_with_grammar(unit: SourceUnit, settings: Settings) -> list[CommentRecord]:
    if unit.language not in GRAMMAR_LANGUAGES:
        raise UnsupportedLanguage(f"No grammar for '{unit.language}'")
    if unit.size_bytes > settings.max_file_size:
        raise FileTooLarge(unit.path, unit.size_bytes, settings.max_file_size)
    adapter: GrammarAdapter = get_adapter(unit.language, settings.parse_timeout)
    tree = adapter.parse(unit.text)
    # Nodes inside the captures are only valid while ``tree`` is referenced.
    return build_records(unit, adapter.capture(tree))


def extract_comments(unit: SourceUnit, settings: Settings | None = None) -> list[CommentRecord]:
    """Extract paragraph records from one file; ids are left at 0."""
    settings = settings or get_settings()
    try:
        return _extract_with_grammar(unit, settings)
    except UnsupportedLanguage:
        logger.debug("Regex extraction for %s (%s)", unit.path, unit.language)
    except (FileTooLarge, GrammarFailure) as exc:
        logger.warning("Falling back to regex extraction: %s", exc)
    return extract_with_fallback(unit)


def _relative_path(path: str, root: Path | None) -> str:
    if root is None:
        return Path(path).name
    try:
        return Path(path).relative_to(root.resolve()).as_posix()
    except ValueError:
        return Path(path).as_posix()


def extract_file(
    path: str | Path,
    root: Path | None = None,
    settings: Settings | None = None,
    language: str | None = None,
) -> list[CommentRecord]:
    unit = read_source(path, language)
    relative = _relative_path(unit.path, root)
    return [record.model_copy(update={"relative_path": relative}) for record in extract_comments(unit, settings)]


def iter_source_files(root: Path) -> Iterator[Path]:
    """Yield supported files below ``root`` in a stable, sorted order."""
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", root, exc)
        return
    for entry in entries:
        try:
            is_dir = entry.is_dir() and not entry.is_symlink()
        except OSError as exc:
            logger.warning("Skipping unreadable entry %s: %s", entry, exc)
            continue
        if is_dir:
            if entry.name.startswith(".") or entry.name in _SKIPPED_DIRS:
                continue
            yield from iter_source_files(entry)
        elif is_supported_file(entry):
            yield entry


def assign_ids(batch: CommentBatch) -> CommentBatch:
    """Number every record of the batch sequentially, in the batch's file order."""
    counter = itertools.count()
    return {
        path: [record.model_copy(update={"id": next(counter)}) for record in records]
        for path, records in batch.items()
    }


async def extract_tree(root: str | Path, settings: Settings | None = None) -> CommentBatch:
    """Extract every supported file under ``root``.

    Files are processed concurrently; a file that fails to read or extract
    contributes an empty list. Ids are assigned afterwards in traversal order.
    """
    settings = settings or get_settings()
    root_path = Path(root).resolve()
    files = list(iter_source_files(root_path))
    semaphore = asyncio.Semaphore(settings.workers)

    async def _extract_one(path: Path) -> list[CommentRecord]:
        async with semaphore:
            try:
                return await asyncio.to_thread(extract_file, path, root_path, settings)
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", path, exc)
            except Exception:
                logger.exception("Comment extraction failed for %s", path)
            return []

    results = await asyncio.gather(*(_extract_one(path) for path in files))
    logger.info("Extracted %d comment(s) from %d file(s)", sum(map(len, results)), len(files))
    return assign_ids({str(path): records for path, records in zip(files, results, strict=True)})
