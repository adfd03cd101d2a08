from comment_miner.db.git import get_line_commit_date
from comment_miner.db.json_store import JsonCommentStore
from comment_miner.db.memory import InMemoryCommentStore

__all__ = [
    "InMemoryCommentStore",
    "JsonCommentStore",
    "get_line_commit_date",
]
