from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CommentLevel(str, Enum):
    MODULE = "module"
    CLASS = "class"
    METHOD = "method"
    INLINE = "inline"


class CaptureKind(str, Enum):
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    DOCSTRING = "docstring"


class SourceUnit(BaseModel):
    """One file's normalised text for a single extraction pass."""

    model_config = ConfigDict(frozen=True)

    path: str
    language: str
    text: str

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    @property
    def total_lines(self) -> int:
        return self.text.count("\n") + 1

    @property
    def size_bytes(self) -> int:
        return len(self.text.encode("utf-8"))


@dataclass(frozen=True)
class RawCapture:
    """A matched comment or docstring.

    ``node`` is the live tree-sitter node for grammar captures and ``None`` for
    regex captures. It is only valid while the tree it came from is alive.
    """

    kind: CaptureKind
    text: str
    start_byte: int
    end_byte: int
    start_row: int
    end_row: int
    start_column: int
    end_column: int
    node: Any = field(default=None, compare=False, repr=False)


class CommentRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = 0
    language: str
    content: str
    class_name: str = Field(default="", alias="className")
    relative_path: str = Field(default="", alias="relativePath")
    level: CommentLevel = CommentLevel.INLINE
    type: list[str] = Field(default_factory=list)
    line_number: tuple[int, int] = Field(alias="lineNumber")
    index: tuple[int, int] = (0, 0)
    last_commit_date: str = Field(default="", alias="lastCommitDate")

    @field_validator("content")
    @classmethod
    def _content_is_trimmed(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("comment content must not be empty")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _drop_blank_tags(cls, value: Any) -> Any:
        # Older batches store an unclassified comment as [""].
        if isinstance(value, list):
            return [tag for tag in value if tag]
        return value

    @model_validator(mode="after")
    def _check_rows(self) -> "CommentRecord":
        start, end = self.line_number
        if start < 0 or end < start:
            raise ValueError(f"invalid line range {list(self.line_number)}")
        return self


CommentBatch = dict[str, list[CommentRecord]]


class Reconciliation(BaseModel):
    preserved: list[CommentRecord] = Field(default_factory=list)
    to_reclassify: list[CommentRecord] = Field(default_factory=list)

    @property
    def merged(self) -> list[CommentRecord]:
        return [*self.preserved, *self.to_reclassify]
