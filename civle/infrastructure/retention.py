"""Retention sweeper -- deletes day-keyed artifacts outside {today, yesterday}.

Runs once at startup and then on a fixed interval from the app lifespan.
Every deletion is best-effort: a failure is logged and the sweep moves on.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List

from civle.domain.day_key import DatePartitioner
from civle.infrastructure.repositories.base import DayKeyedRepository

log = logging.getLogger("civle.retention")


class RetentionSweeper:
    def __init__(
        self,
        partitioner: DatePartitioner,
        repositories: Iterable[DayKeyedRepository],
        clock: Callable[[], datetime] | None = None,
    ):
        self._partitioner = partitioner
        self._repositories = list(repositories)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def sweep(self, now: datetime | None = None) -> List[str]:
        """Delete stale artifacts and return the locators actually removed."""
        keep = self._partitioner.retention_window(now or self._clock())
        deleted = []
        for repo in self._repositories:
            try:
                files = repo.day_keyed_files()
            except OSError as exc:
                log.error("Error listing %s: %s", type(repo).__name__, exc)
                continue
            for day_key, locator in files:
                if day_key in keep:
                    continue
                try:
                    repo.remove(locator)
                except OSError as exc:
                    log.error("Error deleting %s: %s", locator, exc)
                    continue
                log.info("Deleted old file: %s", locator)
                deleted.append(locator)
        return deleted

    async def run_forever(self, interval_seconds: float) -> None:
        """Sweep now, then every *interval_seconds* until cancelled."""
        while True:
            try:
                await asyncio.to_thread(self.sweep)
            except Exception:
                log.exception("Retention sweep failed")
            await asyncio.sleep(interval_seconds)
