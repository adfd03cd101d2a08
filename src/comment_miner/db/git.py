import re
import subprocess
from datetime import datetime, timezone
from pathlib import Path

from comment_miner.core.errors import CommitLookupFailure

_AUTHOR_TIME = re.compile(r"^author-time (\d+)$", re.MULTILINE)
_UNCOMMITTED = "0" * 40


def get_line_commit_date(file_path: str, line: int, timeout: float = 5.0) -> str | None:
    """Return the ISO-8601 author time of the commit that last touched ``line`` (1-based).

    Returns ``None`` when the file is untracked, the line is uncommitted or git
    reports an error. Raises ``CommitLookupFailure`` if git cannot be run or
    does not answer within ``timeout`` seconds.
    """
    resolved = Path(file_path).resolve()
    try:
        result = subprocess.run(
            ["git", "blame", "-L", f"{line},{line}", "--porcelain", "--", resolved.name],
            cwd=resolved.parent,
            check=False,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommitLookupFailure(f"git blame timed out for {resolved}:{line}") from exc
    except OSError as exc:
        raise CommitLookupFailure(f"git blame could not run for {resolved}:{line}: {exc}") from exc
    if result.returncode != 0:
        return None
    output = result.stdout
    if output.startswith(_UNCOMMITTED):
        return None
    match = _AUTHOR_TIME.search(output)
    if match is None:
        return None
    stamp = datetime.fromtimestamp(int(match.group(1)), tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")
