from typing import Protocol

from comment_miner.models import CommentBatch, CommentRecord


class CommentClassifier(Protocol):
    async def classify_file(self, records: list[CommentRecord]) -> list[CommentRecord]: ...

    async def classify_all(self, batch: CommentBatch) -> CommentBatch: ...
