from pydantic import TypeAdapter

from comment_miner.core.errors import StoreError
from comment_miner.models import CommentBatch, CommentLevel, CommentRecord

BATCH_ADAPTER: TypeAdapter[CommentBatch] = TypeAdapter(CommentBatch)


def dump_batch(batch: CommentBatch) -> bytes:
    return BATCH_ADAPTER.dump_json(batch, by_alias=True, indent=2)


def edit_record(
    batch: CommentBatch,
    record_id: int,
    level: CommentLevel | None = None,
    type: list[str] | None = None,
) -> tuple[CommentBatch, CommentRecord]:
    """Return a copy of ``batch`` with one record's level and/or type replaced."""
    changes: dict[str, object] = {}
    if level is not None:
        changes["level"] = CommentLevel(level)
    if type is not None:
        changes["type"] = [tag for tag in type if tag]
    for path, records in batch.items():
        for position, record in enumerate(records):
            if record.id == record_id:
                updated = record.model_copy(update=changes)
                edited = dict(batch)
                edited[path] = [*records[:position], updated, *records[position + 1 :]]
                return edited, updated
    raise StoreError(f"Comment {record_id} not found")
