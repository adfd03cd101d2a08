from typing import Protocol

from comment_miner.models import CommentBatch, CommentLevel, CommentRecord


class CommentStore(Protocol):
    async def load(self) -> CommentBatch: ...

    async def save(self, batch: CommentBatch) -> None: ...

    async def update_record(
        self,
        record_id: int,
        level: CommentLevel | None = None,
        type: list[str] | None = None,
    ) -> CommentRecord: ...
