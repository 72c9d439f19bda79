"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime

import pytest

from coaching_dashboard.config import RemoteConfig, Settings
from coaching_dashboard.containers import AppContainer
from coaching_dashboard.domain.days import (
    DayRecord,
    RangedDayRecord,
    dump_cached_day,
    parse_cached_day,
    with_totals,
)
from coaching_dashboard.domain.protocol import FatLossProtocol
from coaching_dashboard.services.dashboard import DashboardService
from coaching_dashboard.services.day_log import DayLogService
from coaching_dashboard.services.persistence import (
    DayRepository,
    LocalCache,
    PersistenceService,
    RemoteStoreError,
)

CONFIGURED = RemoteConfig(url="https://example.supabase.co", key="anon-key")
UNCONFIGURED = RemoteConfig()


@dataclass
class InMemoryLocalCache(LocalCache):
    """In-memory local cache that stores the serialized shape, like the file."""

    entries: dict[str, dict[str, object]] = field(default_factory=dict)
    pending: set[date] = field(default_factory=set)

    def load_all(self) -> dict[date, DayRecord]:
        return {
            date.fromisoformat(key): parse_cached_day(raw)
            for key, raw in self.entries.items()
        }

    def save_merge(self, days: dict[date, DayRecord]) -> None:
        for day, record in days.items():
            self.entries[day.isoformat()] = dump_cached_day(record)

    def pending_dates(self) -> list[date]:
        return sorted(self.pending)

    def mark_pending(self, day: date) -> None:
        self.pending.add(day)

    def clear_pending(self, day: date) -> None:
        self.pending.discard(day)


@dataclass
class InMemoryDayRepository(DayRepository):
    """In-memory remote store that can be switched into failure mode."""

    rows: dict[date, DayRecord] = field(default_factory=dict)
    failing: bool = False
    upserts: list[DayRecord] = field(default_factory=list)

    def upsert(self, record: DayRecord) -> str | None:
        if self.failing:
            return "remote unavailable"
        self.upserts.append(record)
        self.rows[record.date] = record
        return None

    def fetch_one(self, day: date) -> DayRecord | None:
        self._check()
        return self.rows.get(day)

    def fetch_all(self) -> list[DayRecord]:
        self._check()
        return [self.rows[day] for day in sorted(self.rows)]

    def fetch_range(self, start: date, end: date) -> list[RangedDayRecord]:
        self._check()
        return [
            with_totals(self.rows[day])
            for day in sorted(self.rows)
            if start <= day <= end
        ]

    def _check(self) -> None:
        if self.failing:
            raise RemoteStoreError("remote unavailable")


@dataclass
class RaisingDayRepository(DayRepository):
    """Remote store whose every call raises."""

    def upsert(self, record: DayRecord) -> str | None:
        raise ConnectionError("network down")

    def fetch_one(self, day: date) -> DayRecord | None:
        raise ConnectionError("network down")

    def fetch_all(self) -> list[DayRecord]:
        raise ConnectionError("network down")

    def fetch_range(self, start: date, end: date) -> list[RangedDayRecord]:
        raise ConnectionError("network down")


def fixed_clock() -> datetime:
    return datetime(2025, 6, 1, 7, 30)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        supabase_url=None,
        supabase_anon_key=None,
        local_cache_path=tmp_path / "cache.json",
    )


@pytest.fixture
def local_cache() -> InMemoryLocalCache:
    return InMemoryLocalCache()


@pytest.fixture
def remote() -> InMemoryDayRepository:
    return InMemoryDayRepository()


@pytest.fixture
def container(settings: Settings, local_cache: InMemoryLocalCache) -> AppContainer:
    persistence_service = PersistenceService(
        local_cache=local_cache,
        remote=None,
        remote_config=UNCONFIGURED,
    )
    return AppContainer(
        settings=settings,
        persistence_service=persistence_service,
        day_log_service=DayLogService(persistence_service, clock=fixed_clock),
        dashboard_service=DashboardService(FatLossProtocol()),
    )


@pytest.fixture
def remote_container(
    settings: Settings,
    local_cache: InMemoryLocalCache,
    remote: InMemoryDayRepository,
) -> AppContainer:
    persistence_service = PersistenceService(
        local_cache=local_cache,
        remote=remote,
        remote_config=CONFIGURED,
    )
    return AppContainer(
        settings=settings,
        persistence_service=persistence_service,
        day_log_service=DayLogService(persistence_service, clock=fixed_clock),
        dashboard_service=DashboardService(FatLossProtocol()),
    )
