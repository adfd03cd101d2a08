import asyncio
import logging

from comment_miner.config import Settings, get_settings
from comment_miner.core.errors import CommitLookupFailure
from comment_miner.db.git import get_line_commit_date
from comment_miner.models import CommentBatch, CommentRecord

logger = logging.getLogger(__name__)


async def lookup_commit_date(path: str, line: int, timeout: float) -> str:
    """Best-effort commit date for a 1-based line; every failure becomes ``""``."""
    try:
        date = await asyncio.wait_for(asyncio.to_thread(get_line_commit_date, path, line, timeout), timeout + 1)
    except (CommitLookupFailure, asyncio.TimeoutError) as exc:
        logger.debug("Commit date lookup failed for %s:%d: %s", path, line, exc)
        return ""
    return date or ""


async def enrich_commit_dates(batch: CommentBatch, settings: Settings | None = None) -> CommentBatch:
    """Fill ``last_commit_date`` for every record that has none yet."""
    settings = settings or get_settings()
    semaphore = asyncio.Semaphore(settings.git_concurrency)

    async def _enrich(path: str, record: CommentRecord) -> CommentRecord:
        if record.last_commit_date:
            return record
        async with semaphore:
            date = await lookup_commit_date(path, record.line_number[0] + 1, settings.git_timeout)
        return record.model_copy(update={"last_commit_date": date})

    paths = list(batch)
    results = await asyncio.gather(
        *(asyncio.gather(*(_enrich(path, record) for record in batch[path])) for path in paths)
    )
    return {path: list(records) for path, records in zip(paths, results, strict=True)}
