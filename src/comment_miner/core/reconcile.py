"""Content-keyed merge of a previous extraction with a fresh one."""

from collections.abc import Iterable

from comment_miner.models import CommentBatch, CommentLevel, CommentRecord, Reconciliation


def separate_by_content(
    previous: Iterable[CommentRecord] | None,
    current: Iterable[CommentRecord],
) -> Reconciliation:
    """Split ``current`` into records whose content was seen before and the rest.

    Preserved records take ``type`` and ``level`` from the previous record with
    the same content. When several previous records share content, the last
    one wins. Neither input is modified.
    """
    known: dict[str, tuple[list[str], CommentLevel]] = {}
    for record in previous or ():
        known[record.content] = (record.type, record.level)

    preserved: list[CommentRecord] = []
    to_reclassify: list[CommentRecord] = []
    for record in current:
        match = known.get(record.content)
        if match is None:
            to_reclassify.append(record.model_copy(update={"type": []}))
        else:
            tags, level = match
            preserved.append(record.model_copy(update={"type": list(tags), "level": level}))
    return Reconciliation(preserved=preserved, to_reclassify=to_reclassify)


def reconcile_batch(previous: CommentBatch, current: CommentBatch) -> dict[str, Reconciliation]:
    return {path: separate_by_content(previous.get(path), records) for path, records in current.items()}
