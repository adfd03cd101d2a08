"""Extraction + reconciliation + classification + persistence, end to end."""

import asyncio
import logging
from pathlib import Path

from comment_miner.config import Settings, get_settings
from comment_miner.core.enrich import enrich_commit_dates
from comment_miner.core.extract import assign_ids, extract_file, extract_tree
from comment_miner.core.ports.classifier import CommentClassifier
from comment_miner.core.ports.store import CommentStore
from comment_miner.core.reconcile import reconcile_batch, separate_by_content
from comment_miner.models import CommentBatch, Reconciliation

logger = logging.getLogger(__name__)


async def _maybe_enrich(batch: CommentBatch, settings: Settings) -> CommentBatch:
    if not settings.enrich_commit_dates:
        return batch
    return await enrich_commit_dates(batch, settings)


async def classify_workspace(
    root: str | Path,
    store: CommentStore,
    classifier: CommentClassifier | None,
    settings: Settings | None = None,
) -> CommentBatch:
    """Extract every file under ``root``, classify all of it and replace the stored batch."""
    settings = settings or get_settings()
    batch = await _maybe_enrich(await extract_tree(root, settings), settings)
    if classifier is not None:
        batch = assign_ids(await classifier.classify_all(batch))
    await store.save(batch)
    return batch


async def update_file(
    path: str | Path,
    root: str | Path,
    store: CommentStore,
    classifier: CommentClassifier | None,
    settings: Settings | None = None,
) -> Reconciliation:
    """Re-extract one file and only send comments with new content to the classifier."""
    settings = settings or get_settings()
    file_path = Path(path).resolve()
    key = str(file_path)

    current = await asyncio.to_thread(extract_file, file_path, Path(root), settings)
    current = (await _maybe_enrich({key: current}, settings))[key]

    stored = await store.load()
    result = separate_by_content(stored.get(key), current)
    logger.info(
        "%s: %d preserved, %d to reclassify", file_path.name, len(result.preserved), len(result.to_reclassify)
    )

    classified = result.to_reclassify
    if classifier is not None and classified:
        classified = await classifier.classify_file(classified)

    stored[key] = [*result.preserved, *classified]
    await store.save(assign_ids(stored))
    return Reconciliation(preserved=result.preserved, to_reclassify=classified)


async def update_workspace(
    root: str | Path,
    store: CommentStore,
    classifier: CommentClassifier | None,
    settings: Settings | None = None,
) -> dict[str, Reconciliation]:
    """Reconcile every file under ``root`` against the stored batch.

    Files that no longer exist drop out of the stored batch.
    """
    settings = settings or get_settings()
    current = await _maybe_enrich(await extract_tree(root, settings), settings)
    results = reconcile_batch(await store.load(), current)

    pending = {path: result.to_reclassify for path, result in results.items() if result.to_reclassify}
    if classifier is not None and pending:
        pending = await classifier.classify_all(pending)

    merged: CommentBatch = {}
    for path, result in results.items():
        classified = pending.get(path, result.to_reclassify)
        merged[path] = [*result.preserved, *classified]
        results[path] = Reconciliation(preserved=result.preserved, to_reclassify=classified)

    await store.save(assign_ids(merged))
    return results
