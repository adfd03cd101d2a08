"""Unit tests for commit-date enrichment."""

import threading
import time

import pytest

from comment_miner.config import Settings
from comment_miner.core import enrich
from comment_miner.core.enrich import enrich_commit_dates, lookup_commit_date
from comment_miner.core.errors import CommitLookupFailure
from comment_miner.models import CommentRecord


def _record(start: int, date: str = "") -> CommentRecord:
    return CommentRecord(language="python", content=f"line {start}", line_number=(start, start), last_commit_date=date)


class TestLookupCommitDate:
    @pytest.mark.asyncio
    async def test_failure_becomes_empty_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _fail(path: str, line: int, timeout: float) -> str:
            raise CommitLookupFailure("git blame timed out")

        monkeypatch.setattr(enrich, "get_line_commit_date", _fail)
        assert await lookup_commit_date("/w/a.py", 1, 1.0) == ""

    @pytest.mark.asyncio
    async def test_no_date_becomes_empty_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(enrich, "get_line_commit_date", lambda path, line, timeout: None)
        assert await lookup_commit_date("/w/a.py", 1, 1.0) == ""


class TestEnrichCommitDates:
    @pytest.mark.asyncio
    async def test_uses_one_based_start_line(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[tuple[str, int]] = []

        def _lookup(path: str, line: int, timeout: float) -> str:
            seen.append((path, line))
            return f"date-{line}"

        monkeypatch.setattr(enrich, "get_line_commit_date", _lookup)
        batch = await enrich_commit_dates({"/w/a.py": [_record(0), _record(4)]}, Settings())

        assert [r.last_commit_date for r in batch["/w/a.py"]] == ["date-1", "date-5"]
        assert sorted(seen) == [("/w/a.py", 1), ("/w/a.py", 5)]

    @pytest.mark.asyncio
    async def test_existing_dates_are_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(enrich, "get_line_commit_date", lambda path, line, timeout: "new")
        batch = await enrich_commit_dates({"/w/a.py": [_record(0, date="old"), _record(1)]}, Settings())
        assert [r.last_commit_date for r in batch["/w/a.py"]] == ["old", "new"]

    @pytest.mark.asyncio
    async def test_failed_lookups_leave_empty_dates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _fail(path: str, line: int, timeout: float) -> str:
            raise CommitLookupFailure("git missing")

        monkeypatch.setattr(enrich, "get_line_commit_date", _fail)
        batch = await enrich_commit_dates({"/w/a.py": [_record(0)], "/w/b.py": []}, Settings())
        assert batch == {"/w/a.py": [_record(0)], "/w/b.py": []}

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        lock = threading.Lock()
        running = 0
        peak = 0

        def _slow(path: str, line: int, timeout: float) -> str:
            nonlocal running, peak
            with lock:
                running += 1
                peak = max(peak, running)
            time.sleep(0.02)
            with lock:
                running -= 1
            return "d"

        monkeypatch.setattr(enrich, "get_line_commit_date", _slow)
        batch = {f"/w/{n}.py": [_record(i) for i in range(3)] for n in range(4)}
        result = await enrich_commit_dates(batch, Settings(git_concurrency=2))

        assert peak <= 2
        assert list(result) == list(batch)
        assert all(r.last_commit_date == "d" for records in result.values() for r in records)
