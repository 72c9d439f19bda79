"""JSON file implementation of the local day cache."""

import json
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from coaching_dashboard.domain.days import (
    DayRecord,
    MalformedDayRecordError,
    dump_cached_day,
    parse_cached_day,
)
from coaching_dashboard.services.persistence import LocalCache

CACHE_NAMESPACE = "coaching_dashboard_v1"

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileLocalCache(LocalCache):
    """Local cache stored as one JSON document on disk.

    The document holds a namespaced date -> record mapping plus the list of
    dates waiting for a remote write. Read and write failures are logged and
    treated as an empty cache or a skipped write.
    """

    path: Path
    namespace: str = CACHE_NAMESPACE

    @property
    def pending_key(self) -> str:
        return f"{self.namespace}:pending"

    def load_all(self) -> dict[date, DayRecord]:
        """Return every cached record that passes validation."""
        stored = self._read_document().get(self.namespace)
        if not isinstance(stored, dict):
            return {}
        days: dict[date, DayRecord] = {}
        for key, raw in stored.items():
            try:
                record = parse_cached_day(raw)
            except MalformedDayRecordError:
                _logger.warning("Skipping malformed cached day: %s", key)
                continue
            days[record.date] = record
        return days

    def save_merge(self, days: dict[date, DayRecord]) -> None:
        """Merge records into the document, last write wins per date."""
        document = self._read_document()
        stored = document.get(self.namespace)
        if not isinstance(stored, dict):
            stored = {}
        for day, record in days.items():
            stored[day.isoformat()] = dump_cached_day(record)
        document[self.namespace] = stored
        self._write_document(document)

    def pending_dates(self) -> list[date]:
        """Return outbox dates in ascending order."""
        raw = self._read_document().get(self.pending_key)
        if not isinstance(raw, list):
            return []
        pending: set[date] = set()
        for value in raw:
            try:
                pending.add(date.fromisoformat(str(value)))
            except ValueError:
                _logger.warning("Skipping malformed pending date: %s", value)
        return sorted(pending)

    def mark_pending(self, day: date) -> None:
        """Add a date to the outbox."""
        document = self._read_document()
        pending = _pending_strings(document.get(self.pending_key))
        if day.isoformat() in pending:
            return
        pending.append(day.isoformat())
        document[self.pending_key] = sorted(pending)
        self._write_document(document)

    def clear_pending(self, day: date) -> None:
        """Remove a date from the outbox."""
        document = self._read_document()
        pending = _pending_strings(document.get(self.pending_key))
        if day.isoformat() not in pending:
            return
        document[self.pending_key] = [
            value for value in pending if value != day.isoformat()
        ]
        self._write_document(document)

    def _read_document(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, RecursionError, ValueError):
            _logger.warning("Local cache unreadable, treating as empty: %s", self.path)
            return {}
        if not isinstance(document, dict):
            _logger.warning("Local cache has unexpected shape: %s", self.path)
            return {}
        return document

    def _write_document(self, document: dict[str, object]) -> None:
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(document, ensure_ascii=False), encoding="utf-8"
            )
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError):
            _logger.exception("Failed to write local cache: %s", self.path)


def _pending_strings(raw: object) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [str(value) for value in raw]
