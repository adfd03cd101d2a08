"""Strip comment syntax from captured comment text.

Every cleaner works line by line and returns exactly as many lines as it was
given, so row ``i`` of the cleaned text is row ``start_row + i`` of the file.
"""

import re
from collections.abc import Callable

_BLOCK_OPEN = re.compile(r"^\s*/\*+(?!/)\s?")
_BLOCK_CLOSE = re.compile(r"\s*\*+/\s*$")
_BLOCK_CONTINUATION = re.compile(r"^\s*\*(?!/)\s?")
_SLASH_LINE = re.compile(r"^\s*//\s?")
_HASH_LINE = re.compile(r"^\s*#\s?")
_DOCSTRING_OPEN = re.compile(r"^\s*[rRuUbBfF]{0,2}(\"\"\"|'''|\"|')")
_PHARO_OPEN = re.compile(r'^\s*"')
_PHARO_CLOSE = re.compile(r'"\s*$')

Cleaner = Callable[[list[str]], list[str]]


def _clean_block(lines: list[str]) -> list[str]:
    lines = list(lines)
    lines[0] = _BLOCK_OPEN.sub("", lines[0])
    lines[-1] = _BLOCK_CLOSE.sub("", lines[-1])
    return [lines[0], *(_BLOCK_CONTINUATION.sub("", line) for line in lines[1:])]


def _line_cleaner(marker: re.Pattern[str]) -> Cleaner:
    def clean(lines: list[str]) -> list[str]:
        return [marker.sub("", line) for line in lines]

    return clean


def _dedent_tail(lines: list[str]) -> list[str]:
    indents = [len(line) - len(line.lstrip()) for line in lines[1:] if line.strip()]
    if not indents:
        return lines
    margin = min(indents)
    return [lines[0], *(line[margin:] if line.strip() else "" for line in lines[1:])]


def _clean_docstring(lines: list[str]) -> list[str]:
    lines = list(lines)
    opening = _DOCSTRING_OPEN.match(lines[0])
    quote = opening.group(1) if opening else '"""'
    if opening:
        lines[0] = lines[0][opening.end() :]
    stripped = lines[-1].rstrip()
    if stripped.endswith(quote):
        lines[-1] = stripped[: -len(quote)]
    return _dedent_tail(lines)


def _clean_pharo(lines: list[str]) -> list[str]:
    lines = list(lines)
    lines[0] = _PHARO_OPEN.sub("", lines[0])
    lines[-1] = _PHARO_CLOSE.sub("", lines[-1])
    return lines


# (language, prefix that selects the style, cleaner); first match wins.
_CLEANERS: dict[str, tuple[tuple[str, Cleaner], ...]] = {
    "java": (
        ("/*", _clean_block),
        ("//", _line_cleaner(_SLASH_LINE)),
    ),
    "python": (
        ("#", _line_cleaner(_HASH_LINE)),
        ("", _clean_docstring),
    ),
    "pharo": (("", _clean_pharo),),
}


def clean_comment(text: str, language: str) -> str:
    """Return ``text`` without comment markers, preserving its line count."""
    lines = text.split("\n")
    head = text.lstrip()
    for prefix, cleaner in _CLEANERS.get(language, ()):
        if head.startswith(prefix):
            return "\n".join(cleaner(lines))
    return text
