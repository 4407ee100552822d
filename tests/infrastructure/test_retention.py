"""Tests for the retention sweeper."""
import asyncio
import logging
import os
from datetime import timedelta

import pytest

from civle.domain.day_key import DatePartitioner
from civle.domain.score_entry import ScoreEntry
from civle.infrastructure.repositories.score_repository import JsonScoreRepository
from civle.infrastructure.repositories.screenshot_repository import FileScreenshotRepository
from civle.infrastructure.retention import RetentionSweeper
from tests.conftest import FIXED_NOW, TODAY, TWO_DAYS_AGO, YESTERDAY

PNG = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def score_repo(tmp_path):
    return JsonScoreRepository(str(tmp_path / "scores"))


@pytest.fixture
def screenshot_repo(tmp_path):
    return FileScreenshotRepository(str(tmp_path / "screenshots"))


@pytest.fixture
def sweeper(score_repo, screenshot_repo):
    return RetentionSweeper(DatePartitioner(), [score_repo, screenshot_repo], clock=lambda: FIXED_NOW)


@pytest.fixture
def populated(score_repo, screenshot_repo):
    for day in (TODAY, YESTERDAY, TWO_DAYS_AGO):
        score_repo.save(day, [ScoreEntry(10)])
        screenshot_repo.store_winner(day, PNG, "Ann", 10)


class TestSweep:
    def test_removes_only_files_outside_window(self, sweeper, score_repo, screenshot_repo, populated):
        deleted = sweeper.sweep()
        assert len(deleted) == 2
        assert [d for d, _ in score_repo.day_keyed_files()] == [YESTERDAY, TODAY]
        assert [d for d, _ in screenshot_repo.day_keyed_files()] == [YESTERDAY, TODAY]

    def test_empty_stores(self, sweeper):
        assert sweeper.sweep() == []

    def test_explicit_now_overrides_clock(self, sweeper, score_repo, populated):
        # a day later, TODAY is the only survivor (as "yesterday")
        sweeper.sweep(FIXED_NOW + timedelta(days=1))
        assert [d for d, _ in score_repo.day_keyed_files()] == [TODAY]

    def test_foreign_files_are_kept(self, sweeper, score_repo, populated):
        stray = os.path.join(score_repo.scores_dir, "backup.json")
        with open(stray, "w") as f:
            f.write("[]")
        sweeper.sweep()
        assert os.path.exists(stray)

    def test_deletion_failure_is_logged_and_skipped(self, sweeper, score_repo, screenshot_repo, populated,
                                                    monkeypatch, caplog):
        def broken_remove(locator):
            raise PermissionError("read-only")

        monkeypatch.setattr(score_repo, "remove", broken_remove)
        with caplog.at_level(logging.ERROR, logger="civle.retention"):
            deleted = sweeper.sweep()

        # the screenshot store is still swept
        assert len(deleted) == 1
        assert TWO_DAYS_AGO in [d for d, _ in score_repo.day_keyed_files()]
        assert TWO_DAYS_AGO not in [d for d, _ in screenshot_repo.day_keyed_files()]
        assert "read-only" in caplog.text

    def test_listing_failure_skips_store(self, sweeper, score_repo, screenshot_repo, populated, monkeypatch):
        def broken_listing():
            raise OSError("disk gone")

        monkeypatch.setattr(score_repo, "day_keyed_files", broken_listing)
        deleted = sweeper.sweep()
        assert len(deleted) == 1


class TestRunForever:
    def test_sweeps_at_start_and_stops_on_cancel(self, sweeper, score_repo, populated):
        stale = score_repo.path_for(TWO_DAYS_AGO)

        async def scenario():
            task = asyncio.create_task(sweeper.run_forever(3600))
            for _ in range(200):
                if not os.path.exists(stale):
                    break
                await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())
        assert not os.path.exists(stale)

    def test_failed_sweep_does_not_stop_loop(self, sweeper, monkeypatch, caplog):
        calls = []

        def failing_sweep(now=None):
            calls.append(now)
            raise RuntimeError("boom")

        monkeypatch.setattr(sweeper, "sweep", failing_sweep)

        async def scenario():
            task = asyncio.create_task(sweeper.run_forever(0.01))
            for _ in range(200):
                if len(calls) >= 2:
                    break
                await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        with caplog.at_level(logging.ERROR, logger="civle.retention"):
            asyncio.run(scenario())
        assert len(calls) >= 2
        assert "Retention sweep failed" in caplog.text
