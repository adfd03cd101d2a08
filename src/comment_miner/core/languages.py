import tempfile
from pathlib import Path

from comment_miner.core.errors import UnsupportedLanguage

_LANGUAGE_ALIASES = {
    "java": "java",
    "python": "python",
    "py": "python",
    "python3": "python",
    "pharo": "pharo",
    "smalltalk": "pharo",
    "st": "pharo",
}

_EXTENSION_LANGUAGE_MAP = {
    ".java": "java",
    ".py": "python",
    ".st": "pharo",
}

_LANGUAGE_DEFAULT_EXTENSIONS = {
    "java": ".java",
    "pharo": ".st",
    "python": ".py",
}

_SUPPORTED_LANGUAGES = set(_LANGUAGE_DEFAULT_EXTENSIONS)

# Languages with a tree-sitter grammar; the rest only have the regex path.
GRAMMAR_LANGUAGES = frozenset({"java", "python"})

SUPPORTED_EXTENSIONS = frozenset(_EXTENSION_LANGUAGE_MAP)


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise UnsupportedLanguage(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise UnsupportedLanguage(f"Unsupported file extension: {suffix}")


def resolve_language(language: str | None, file_path: Path | None) -> str:
    if language:
        return normalize_language(language)
    if file_path:
        return detect_language_from_path(file_path)
    raise UnsupportedLanguage("Language must be provided when no file path is available.")


def is_supported_file(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def write_temp_code_file(source: str, language: str) -> Path:
    suffix = _LANGUAGE_DEFAULT_EXTENSIONS.get(language, ".txt")
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as temp_file:
        temp_file.write(source.encode("utf-8"))
        temp_file.flush()
        return Path(temp_file.name)
