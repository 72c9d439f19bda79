"""Editing operations for a single day's log."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime

from pydantic import ValidationError

from coaching_dashboard.domain.days import (
    CHECKLIST_KEYS,
    DayRecord,
    MalformedDayRecordError,
    MealEntry,
    derive_checklist,
    empty_day,
)
from coaching_dashboard.domain.protocol import PRESET_FOODS, PresetFood
from coaching_dashboard.services.persistence import PersistenceService, SaveResult


class DayEditError(ValueError):
    """Raised when an edit refers to something the day does not have."""


@dataclass(frozen=True)
class DayChange:
    """A saved record together with where the save landed."""

    record: DayRecord
    result: SaveResult


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class DayLogService:
    """Applies partial updates to a day and persists every change."""

    persistence: PersistenceService
    presets: tuple[PresetFood, ...] = PRESET_FOODS
    clock: Callable[[], datetime] = _local_now

    async def get_day(self, day: date) -> DayRecord:
        """Return the stored record, or an empty one for a new date."""
        record = await self.persistence.load_day(day)
        return record if record is not None else empty_day(day)

    async def update_day(self, day: date, updates: dict[str, object]) -> DayChange:
        """Merge field updates into the day and save it."""
        current = await self.get_day(day)
        merged = current.model_dump()
        merged.update(updates)
        merged["date"] = day
        try:
            record = DayRecord.model_validate(merged)
        except ValidationError as exc:
            raise MalformedDayRecordError(str(exc)) from exc
        if "meals" in updates:
            record = _with_derived_checklist(record)
        return await self._save(record)

    async def add_meal(self, day: date, meal: MealEntry) -> DayChange:
        """Append a meal, stamping the current time when none is given."""
        if not meal.time:
            meal = meal.model_copy(update={"time": self.clock().strftime("%H:%M")})
        current = await self.get_day(day)
        record = current.model_copy(update={"meals": [*current.meals, meal]})
        return await self._save(_with_derived_checklist(record))

    async def add_preset(self, day: date, index: int, quantity: int = 1) -> DayChange:
        """Append ``quantity`` servings of a preset food."""
        if not 0 <= index < len(self.presets):
            raise DayEditError(f"Unknown preset: {index}")
        if quantity < 1:
            raise DayEditError("Quantity must be at least 1")
        meal = self.presets[index].to_meal(quantity, self.clock().strftime("%H:%M"))
        return await self.add_meal(day, meal)

    async def remove_meal(self, day: date, index: int) -> DayChange:
        """Remove the meal at ``index``. Checklist flags stay as they were."""
        current = await self.get_day(day)
        if not 0 <= index < len(current.meals):
            raise DayEditError(f"No meal at index {index}")
        meals = [meal for i, meal in enumerate(current.meals) if i != index]
        record = current.model_copy(update={"meals": meals})
        return await self._save(_with_derived_checklist(record))

    async def toggle_checklist(self, day: date, key: str) -> DayChange:
        """Flip one checklist flag by hand."""
        if key not in CHECKLIST_KEYS:
            raise DayEditError(f"Unknown checklist item: {key}")
        current = await self.get_day(day)
        checklist = current.checklist.model_copy(
            update={key: not getattr(current.checklist, key)}
        )
        return await self._save(current.model_copy(update={"checklist": checklist}))

    async def lock_day(self, day: date) -> DayChange:
        """Mark the day's summary as final."""
        current = await self.get_day(day)
        return await self._save(current.model_copy(update={"locked": True}))

    async def _save(self, record: DayRecord) -> DayChange:
        result = await self.persistence.save_day(record)
        return DayChange(record=record, result=result)


def _with_derived_checklist(record: DayRecord) -> DayRecord:
    checklist = derive_checklist(record.checklist, record.meals)
    if checklist is record.checklist:
        return record
    return record.model_copy(update={"checklist": checklist})
