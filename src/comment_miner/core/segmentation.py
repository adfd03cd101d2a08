import re
from collections.abc import Iterator

# A whole line that is one opening or closing tag, e.g. <p>, </pre>, <ul class="x">.
_HTML_TAG_LINE = re.compile(r"^</?[a-zA-Z][^>]*>$")

_TAG_BOUNDARY_LANGUAGES = frozenset({"java"})


def is_html_tag_line(line: str) -> bool:
    return _HTML_TAG_LINE.match(line.strip()) is not None


def is_boundary_line(line: str, language: str) -> bool:
    if not line.strip():
        return True
    return language in _TAG_BOUNDARY_LANGUAGES and is_html_tag_line(line)


def split_paragraphs(cleaned: str, language: str) -> Iterator[str]:
    """Yield the non-empty paragraphs of ``cleaned`` in source order."""
    current: list[str] = []
    for line in cleaned.split("\n"):
        if is_boundary_line(line, language):
            if current:
                paragraph = "\n".join(current).strip()
                if paragraph:
                    yield paragraph
                current = []
        else:
            current.append(line)
    if current:
        paragraph = "\n".join(current).strip()
        if paragraph:
            yield paragraph
