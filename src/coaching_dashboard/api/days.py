"""Day log API endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from coaching_dashboard.api.models import DayPatch, MealCreate, PresetAdd
from coaching_dashboard.domain.days import MalformedDayRecordError, MealEntry
from coaching_dashboard.services.day_log import DayChange, DayEditError

if TYPE_CHECKING:
    from coaching_dashboard.containers import AppContainer
    from coaching_dashboard.domain.days import DayRecord

router = APIRouter(tags=["days"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _day_payload(record: DayRecord) -> dict[str, object]:
    return record.model_dump(mode="json", by_alias=True)


def _change_payload(change: DayChange) -> dict[str, object]:
    return {
        "day": _day_payload(change.record),
        "ok": change.result.ok,
        "source": change.result.source,
        "status": change.result.status_label,
        "error": change.result.error,
    }


@router.get("/sync-status")
async def sync_status(request: Request) -> dict[str, object]:
    """Report which store is in use and what is waiting to sync."""
    persistence = _container(request).persistence_service
    pending = persistence.pending_dates()
    return {
        "mode": "remote" if persistence.is_remote_enabled() else "local",
        "pending": [day.isoformat() for day in pending],
        "pending_count": len(pending),
    }


@router.post("/sync")
async def sync(request: Request) -> dict[str, object]:
    """Replay locally saved days that never reached the remote store."""
    report = await _container(request).persistence_service.sync_pending()
    return {
        "synced": [day.isoformat() for day in report.synced],
        "failed": [day.isoformat() for day in report.failed],
    }


@router.get("/days")
async def list_days(request: Request) -> dict[str, object]:
    """Return every stored day keyed by date."""
    days = await _container(request).persistence_service.load_all_days()
    return {
        "days": {
            day.isoformat(): _day_payload(record)
            for day, record in sorted(days.items())
        }
    }


@router.get("/days/range")
async def list_day_range(request: Request, start: date, end: date) -> dict[str, object]:
    """Return days between start and end inclusive, with meal totals."""
    records = await _container(request).persistence_service.load_day_range(
        start, end
    )
    return {"days": [_day_payload(record) for record in records]}


@router.get("/days/{day}")
async def get_day(day: date, request: Request) -> dict[str, object]:
    """Return a day, or an empty record when nothing is stored yet."""
    record = await _container(request).day_log_service.get_day(day)
    return {"day": _day_payload(record)}


@router.patch("/days/{day}")
async def patch_day(day: date, patch: DayPatch, request: Request) -> dict[str, object]:
    """Update measurements and notes for a day."""
    updates = patch.model_dump(exclude_unset=True)
    try:
        change = await _container(request).day_log_service.update_day(day, updates)
    except MalformedDayRecordError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return _change_payload(change)


@router.post("/days/{day}/meals")
async def add_meal(day: date, meal: MealCreate, request: Request) -> dict[str, object]:
    """Log a custom meal."""
    entry = MealEntry(**meal.model_dump(exclude={"time"}), time=meal.time or "")
    change = await _container(request).day_log_service.add_meal(day, entry)
    return _change_payload(change)


@router.post("/days/{day}/presets")
async def add_preset(
    day: date, preset: PresetAdd, request: Request
) -> dict[str, object]:
    """Log servings of a preset food."""
    try:
        change = await _container(request).day_log_service.add_preset(
            day, preset.index, preset.quantity
        )
    except DayEditError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return _change_payload(change)


@router.delete("/days/{day}/meals/{index}")
async def remove_meal(day: date, index: int, request: Request) -> dict[str, object]:
    """Remove a logged meal by its position."""
    try:
        change = await _container(request).day_log_service.remove_meal(day, index)
    except DayEditError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return _change_payload(change)


@router.post("/days/{day}/checklist/{key}")
async def toggle_checklist(day: date, key: str, request: Request) -> dict[str, object]:
    """Flip one checklist flag."""
    try:
        change = await _container(request).day_log_service.toggle_checklist(day, key)
    except DayEditError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return _change_payload(change)


@router.post("/days/{day}/lock")
async def lock_day(day: date, request: Request) -> dict[str, object]:
    """Mark a day as final."""
    change = await _container(request).day_log_service.lock_day(day)
    return _change_payload(change)


@router.get("/days/{day}/summary")
async def day_summary(day: date, request: Request) -> dict[str, object]:
    """Return the day's budget view against the protocol."""
    container = _container(request)
    record = await container.day_log_service.get_day(day)
    dashboard = container.dashboard_service
    return {
        "summary": asdict(dashboard.summarize(record)),
        "days_until_goal": dashboard.days_until_goal(day),
    }


@router.get("/trends")
async def trends(request: Request) -> dict[str, object]:
    """Return chart points for every day with biometric readings."""
    container = _container(request)
    days = await container.persistence_service.load_all_days()
    points = container.dashboard_service.trend(days.values())
    return {"points": [asdict(point) for point in points]}


@router.get("/presets")
async def presets(request: Request) -> dict[str, object]:
    """Return the preset food catalogue with positions."""
    catalogue = _container(request).day_log_service.presets
    return {
        "presets": [
            {"index": index, **asdict(preset)}
            for index, preset in enumerate(catalogue)
        ]
    }
