"""Map a paragraph back onto rows and columns of the original file.

Recovery is substring based and falls through three row tiers (whole run,
first line only, the capture's own rows) and two column tiers (search in the
original line, the capture's own columns).
"""

from typing import NamedTuple

from comment_miner.models import RawCapture


class Span(NamedTuple):
    start_row: int
    end_row: int
    start_column: int
    end_column: int


def _first_content_line(lines: list[str]) -> str:
    for line in lines:
        if line.strip():
            return line.strip()
    return ""


def _run_matches(cleaned_lines: list[str], start: int, paragraph_lines: list[str]) -> bool:
    if start + len(paragraph_lines) > len(cleaned_lines):
        return False
    for offset, line in enumerate(paragraph_lines[1:], start=1):
        wanted = line.strip()
        if wanted and wanted not in cleaned_lines[start + offset]:
            return False
    return True


def _locate_rows(cleaned_lines: list[str], paragraph_lines: list[str]) -> tuple[int, int]:
    """Return the paragraph's (first, last) row relative to the comment."""
    first = _first_content_line(paragraph_lines)
    last_index = len(cleaned_lines) - 1
    if first:
        for i, line in enumerate(cleaned_lines):
            if line.strip() and first in line and _run_matches(cleaned_lines, i, paragraph_lines):
                return i, i + len(paragraph_lines) - 1
        for i, line in enumerate(cleaned_lines):
            if first in line:
                return i, min(i + len(paragraph_lines) - 1, last_index)
    return 0, last_index


def recover_span(capture: RawCapture, cleaned: str, paragraph: str, source_lines: list[str]) -> Span:
    paragraph_lines = paragraph.split("\n")
    first_row, last_row = _locate_rows(cleaned.split("\n"), paragraph_lines)

    max_row = max(len(source_lines) - 1, 0)
    start_row = min(capture.start_row + first_row, capture.end_row, max_row)
    end_row = min(capture.start_row + last_row, capture.end_row, max_row)
    end_row = max(end_row, start_row)

    start_column = capture.start_column
    first_text = _first_content_line(paragraph_lines)
    if first_text and start_row < len(source_lines):
        found = source_lines[start_row].find(first_text)
        if found >= 0:
            start_column = found

    end_column = capture.end_column
    last_text = _first_content_line(paragraph_lines[::-1])
    if last_text and end_row < len(source_lines):
        found = source_lines[end_row].find(last_text)
        if found >= 0:
            end_column = found + len(last_text)

    return Span(start_row, end_row, start_column, end_column)
