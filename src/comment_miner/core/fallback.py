"""Regex comment matcher used when no syntax tree is available."""

import re

from comment_miner.models import CaptureKind, RawCapture, SourceUnit

_PATTERNS: dict[str, re.Pattern[str]] = {
    "java": re.compile(r"/\*[\s\S]*?\*/|//.*"),
    "python": re.compile(r"#.*|'''[\s\S]*?'''|\"\"\"[\s\S]*?\"\"\""),
    "pharo": re.compile(r'"[^"]*"'),
}


def _kind_of(text: str, language: str) -> CaptureKind:
    if language == "python":
        return CaptureKind.LINE_COMMENT if text.startswith("#") else CaptureKind.DOCSTRING
    if text.startswith("//"):
        return CaptureKind.LINE_COMMENT
    return CaptureKind.BLOCK_COMMENT


def fallback_captures(unit: SourceUnit) -> list[RawCapture]:
    pattern = _PATTERNS.get(unit.language)
    if pattern is None:
        return []
    text = unit.text
    # Offsets are character offsets into the normalised text, not byte offsets.
    captures: list[RawCapture] = []
    for match in pattern.finditer(text):
        start, end = match.start(), match.end()
        if start == end:
            continue
        last = end - 1
        start_row = text.count("\n", 0, start)
        end_row = text.count("\n", 0, last)
        captures.append(
            RawCapture(
                kind=_kind_of(match.group(), unit.language),
                text=match.group(),
                start_byte=start,
                end_byte=end,
                start_row=start_row,
                end_row=end_row,
                start_column=start - (text.rfind("\n", 0, start) + 1),
                end_column=end - (text.rfind("\n", 0, last) + 1),
            )
        )
    return captures
