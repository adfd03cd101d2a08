from comment_miner.db.helpers import edit_record
from comment_miner.models import CommentBatch, CommentLevel, CommentRecord


class InMemoryCommentStore:
    def __init__(self, batch: CommentBatch | None = None) -> None:
        self.batch: CommentBatch = dict(batch or {})
        self.saves = 0

    async def load(self) -> CommentBatch:
        return dict(self.batch)

    async def save(self, batch: CommentBatch) -> None:
        self.batch = dict(batch)
        self.saves += 1

    async def update_record(
        self,
        record_id: int,
        level: CommentLevel | None = None,
        type: list[str] | None = None,
    ) -> CommentRecord:
        self.batch, updated = edit_record(self.batch, record_id, level=level, type=type)
        return updated
