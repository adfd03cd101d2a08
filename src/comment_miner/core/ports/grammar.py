from typing import Any, Protocol

from comment_miner.models import RawCapture


class GrammarAdapter(Protocol):
    language: str

    def parse(self, text: str) -> Any: ...

    def capture(self, tree: Any) -> list[RawCapture]: ...
