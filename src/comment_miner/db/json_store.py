import logging
from pathlib import Path

from pydantic import ValidationError

from comment_miner.core.errors import StoreError
from comment_miner.db.helpers import BATCH_ADAPTER, dump_batch, edit_record
from comment_miner.models import CommentBatch, CommentLevel, CommentRecord

logger = logging.getLogger(__name__)


class JsonCommentStore:
    """Batch persisted as one JSON object: absolute file path -> list of records."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @classmethod
    def for_workspace(cls, root: str | Path, relpath: str) -> "JsonCommentStore":
        return cls(Path(root) / relpath)

    async def load(self) -> CommentBatch:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No stored comments at %s", self.path)
            return {}
        except OSError as exc:
            raise StoreError(f"Cannot read {self.path}: {exc}") from exc
        if not raw.strip():
            return {}
        try:
            return BATCH_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            raise StoreError(f"Invalid comment store {self.path}: {exc}") from exc

    async def save(self, batch: CommentBatch) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(dump_batch(batch))
        except OSError as exc:
            raise StoreError(f"Cannot write {self.path}: {exc}") from exc
        logger.info("Saved %d file(s) to %s", len(batch), self.path)

    async def update_record(
        self,
        record_id: int,
        level: CommentLevel | None = None,
        type: list[str] | None = None,
    ) -> CommentRecord:
        batch, updated = edit_record(await self.load(), record_id, level=level, type=type)
        await self.save(batch)
        return updated
