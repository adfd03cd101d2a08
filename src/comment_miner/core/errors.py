class CommentMinerError(Exception):
    """Base class for every error raised by comment-miner."""


class GrammarFailure(CommentMinerError):
    """The grammar path could not produce a tree; callers fall back to regex."""


class ParseTimeout(GrammarFailure):
    def __init__(self, language: str, timeout: float) -> None:
        super().__init__(f"{language} parse exceeded {timeout:g}s")
        self.language = language
        self.timeout = timeout


class ParseError(GrammarFailure):
    pass


class UnsupportedLanguage(CommentMinerError, ValueError):
    pass


class FileTooLarge(CommentMinerError):
    def __init__(self, path: str, size: int, limit: int) -> None:
        super().__init__(f"{path} is {size} bytes (limit {limit})")
        self.path = path
        self.size = size
        self.limit = limit


class UnreadableEntry(CommentMinerError, OSError):
    pass


class StoreError(CommentMinerError):
    pass


class ClassifierError(CommentMinerError):
    pass


class CommitLookupFailure(CommentMinerError):
    pass
