"""Day persistence across the local cache and the remote store."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Protocol

from coaching_dashboard.config import RemoteConfig
from coaching_dashboard.domain.days import DayRecord, RangedDayRecord, with_totals

_logger = logging.getLogger(__name__)


class RemoteStoreError(RuntimeError):
    """Raised when the remote store cannot answer a query."""


class LocalCache(Protocol):
    """On-device store of day records keyed by date."""

    def load_all(self) -> dict[date, DayRecord]:
        """Return every cached record, or an empty mapping."""

    def save_merge(self, days: dict[date, DayRecord]) -> None:
        """Merge records into the cache, replacing entries for the same date."""

    def pending_dates(self) -> list[date]:
        """Return dates whose remote write has not succeeded yet."""

    def mark_pending(self, day: date) -> None:
        """Remember a date whose remote write failed."""

    def clear_pending(self, day: date) -> None:
        """Forget a date once the remote store holds it."""


class DayRepository(Protocol):
    """Remote table of day rows keyed by date."""

    def upsert(self, record: DayRecord) -> str | None:
        """Write the row for ``record.date``; return an error message on failure."""

    def fetch_one(self, day: date) -> DayRecord | None:
        """Return the record for a date, if a row exists."""

    def fetch_all(self) -> list[DayRecord]:
        """Return every record ascending by date."""

    def fetch_range(self, start: date, end: date) -> list[RangedDayRecord]:
        """Return records with start <= date <= end, ascending."""


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a save, tagged with the store that holds the write."""

    ok: bool
    source: Literal["local", "remote"]
    error: str | None = None

    @property
    def status_label(self) -> str:
        """Short sync status for display."""
        return "synced" if self.source == "remote" else "saved locally"


@dataclass(frozen=True)
class SyncReport:
    """Outcome of replaying the pending-write outbox."""

    synced: list[date] = field(default_factory=list)
    failed: list[date] = field(default_factory=list)


@dataclass
class PersistenceService:
    """Cache-aside persistence: local write-through with remote when configured."""

    local_cache: LocalCache
    remote: DayRepository | None
    remote_config: RemoteConfig

    def is_remote_enabled(self) -> bool:
        """Return True when a remote repository is wired and configured."""
        return self._active_remote() is not None

    async def save_day(self, record: DayRecord) -> SaveResult:
        """Cache the record locally, then upsert remotely when configured."""
        self.local_cache.save_merge({record.date: record})
        remote = self._active_remote()
        if remote is None:
            return SaveResult(ok=True, source="local")

        error = await _upsert(remote, record)
        if error is not None:
            self.local_cache.mark_pending(record.date)
            return SaveResult(ok=False, source="local", error=error)
        self.local_cache.clear_pending(record.date)
        return SaveResult(ok=True, source="remote")

    async def load_day(self, day: date) -> DayRecord | None:
        """Return a day's record, preferring the remote store."""
        remote = self._active_remote()
        if remote is None:
            return self.local_cache.load_all().get(day)

        try:
            record = await asyncio.to_thread(remote.fetch_one, day)
        except Exception:
            _logger.exception("Remote load failed", extra={"day": day.isoformat()})
            record = None
        if record is None:
            return self.local_cache.load_all().get(day)
        return record

    async def load_all_days(self) -> dict[date, DayRecord]:
        """Return every record keyed by date, falling back to the local cache."""
        remote = self._active_remote()
        if remote is None:
            return self.local_cache.load_all()

        try:
            records = await asyncio.to_thread(remote.fetch_all)
        except Exception:
            _logger.exception("Remote load of all days failed")
            return self.local_cache.load_all()
        return {record.date: record for record in records}

    async def load_day_range(self, start: date, end: date) -> list[RangedDayRecord]:
        """Return records within [start, end] ascending by date.

        A remote failure yields an empty list; the local cache is not consulted.
        """
        remote = self._active_remote()
        if remote is None:
            cached = self.local_cache.load_all()
            return [
                with_totals(cached[day])
                for day in sorted(cached)
                if start <= day <= end
            ]

        try:
            return await asyncio.to_thread(remote.fetch_range, start, end)
        except Exception:
            _logger.exception(
                "Remote range load failed",
                extra={"start": start.isoformat(), "end": end.isoformat()},
            )
            return []

    def pending_dates(self) -> list[date]:
        """Return dates saved locally but not yet written remotely."""
        return self.local_cache.pending_dates()

    async def sync_pending(self) -> SyncReport:
        """Replay cached records whose remote write previously failed."""
        report = SyncReport()
        remote = self._active_remote()
        if remote is None:
            return report

        for day in self.local_cache.pending_dates():
            # Re-read per date: saves may land while earlier upserts are awaited.
            record = self.local_cache.load_all().get(day)
            if record is None:
                self.local_cache.clear_pending(day)
                continue
            if await _upsert(remote, record) is None:
                self.local_cache.clear_pending(day)
                report.synced.append(day)
            else:
                report.failed.append(day)
        if report.synced or report.failed:
            _logger.info(
                "Outbox replay: synced=%s failed=%s",
                len(report.synced),
                len(report.failed),
            )
        return report

    def _active_remote(self) -> DayRepository | None:
        if self.remote is None or not self.remote_config.is_configured():
            return None
        return self.remote


async def _upsert(remote: DayRepository, record: DayRecord) -> str | None:
    try:
        error = await asyncio.to_thread(remote.upsert, record)
    except Exception as exc:
        _logger.exception("Remote save raised", extra={"day": record.date.isoformat()})
        return f"{type(exc).__name__}: {exc}"
    if error is not None:
        _logger.warning("Remote save failed: date=%s error=%s", record.date, error)
    return error
