"""Supabase repository for daily logs."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from supabase import Client

from coaching_dashboard.domain.days import (
    DayRecord,
    MalformedDayRecordError,
    RangedDayRecord,
    day_to_row,
    row_to_day,
    row_to_ranged_day,
)
from coaching_dashboard.services.persistence import DayRepository, RemoteStoreError

DAILY_LOGS_TABLE = "daily_logs"

_T = TypeVar("_T")


@dataclass
class SupabaseDayRepository(DayRepository):
    """Supabase implementation for day rows keyed by date."""

    client: Client
    table_name: str = DAILY_LOGS_TABLE

    def upsert(self, record: DayRecord) -> str | None:
        """Insert or replace the row for the record's date.

        Failures are returned as text for the caller to log and report.
        """
        try:
            self.client.table(self.table_name).upsert(
                day_to_row(record), on_conflict="date"
            ).execute()
        except Exception as exc:
            return f"{type(exc).__name__}: {exc}"
        return None

    def fetch_one(self, day: date) -> DayRecord | None:
        """Return the record for a date, if a row exists."""
        try:
            response = (
                self.client.table(self.table_name)
                .select("*")
                .eq("date", day.isoformat())
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise RemoteStoreError(f"Failed to load {day.isoformat()}") from exc
        if not response.data:
            return None
        return _parse(row_to_day, response.data[0])

    def fetch_all(self) -> list[DayRecord]:
        """Return every record ascending by date."""
        try:
            response = (
                self.client.table(self.table_name)
                .select("*")
                .order("date", desc=False)
                .execute()
            )
        except Exception as exc:
            raise RemoteStoreError("Failed to load daily logs") from exc
        return [_parse(row_to_day, row) for row in response.data or []]

    def fetch_range(self, start: date, end: date) -> list[RangedDayRecord]:
        """Return records with start <= date <= end, ascending."""
        try:
            response = (
                self.client.table(self.table_name)
                .select("*")
                .gte("date", start.isoformat())
                .lte("date", end.isoformat())
                .order("date", desc=False)
                .execute()
            )
        except Exception as exc:
            raise RemoteStoreError(
                f"Failed to load {start.isoformat()}..{end.isoformat()}"
            ) from exc
        return [_parse(row_to_ranged_day, row) for row in response.data or []]


def _parse(parser: Callable[[dict[str, object]], _T], row: dict[str, object]) -> _T:
    try:
        return parser(row)
    except MalformedDayRecordError as exc:
        raise RemoteStoreError(f"Malformed row for {row.get('date')}") from exc
