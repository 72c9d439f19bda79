"""Day record models and conversion between the cache and row shapes."""

import datetime
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CHECKLIST_KEYS = ("sardines", "fermented", "fiber", "resistant_starch")


class MalformedDayRecordError(ValueError):
    """Raised when stored data does not fit the day record schema."""


class MealEntry(BaseModel):
    """One logged food item."""

    name: str
    calories: float = 0
    protein: float = 0
    fat: float = 0
    carbs: float = 0
    tags: list[str] = Field(default_factory=list)
    time: str = ""

    @field_validator("calories", "protein", "fat", "carbs", mode="before")
    @classmethod
    def _zero_when_missing(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _empty_tags_when_missing(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("time", mode="before")
    @classmethod
    def _empty_time_when_missing(cls, value: object) -> object:
        return "" if value is None else value


class Checklist(BaseModel):
    """Daily dietary-category flags."""

    sardines: bool = False
    fermented: bool = False
    fiber: bool = False
    resistant_starch: bool = False


class DayRecord(BaseModel):
    """One calendar day's biometrics and meal log.

    Attribute names are the row names; aliases carry the camelCase shape the
    local cache stores.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: datetime.date
    weight: float | None = None
    hrv: float | None = None
    rhr: float | None = None
    sleep_score: float | None = Field(default=None, alias="sleepScore")
    sleep_duration: str = Field(default="", alias="sleepDuration")
    xert_burn: float = Field(default=0, alias="xertBurn")
    meals: list[MealEntry] = Field(default_factory=list)
    checklist: Checklist = Field(default_factory=Checklist)
    locked: bool = False
    notes: str = ""

    @field_validator("sleep_duration", "notes", mode="before")
    @classmethod
    def _empty_text_when_missing(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("xert_burn", mode="before")
    @classmethod
    def _zero_burn_when_missing(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("meals", mode="before")
    @classmethod
    def _no_meals_when_missing(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("checklist", mode="before")
    @classmethod
    def _default_checklist_when_missing(cls, value: object) -> object:
        return Checklist() if value is None else value

    @field_validator("locked", mode="before")
    @classmethod
    def _unlocked_when_missing(cls, value: object) -> object:
        return False if value is None else value


class RangedDayRecord(DayRecord):
    """Day record returned by range queries, with stored meal aggregates."""

    total_calories: float = Field(default=0, alias="totalCalories")
    total_protein: float = Field(default=0, alias="totalProtein")


@dataclass(frozen=True)
class MealTotals:
    """Summed macros over a day's meals."""

    calories: float
    protein: float
    fat: float
    carbs: float


def empty_day(day: datetime.date) -> DayRecord:
    """Return a fresh record with every field at its default."""
    return DayRecord(date=day)


def meal_totals(meals: list[MealEntry]) -> MealTotals:
    """Sum macros over a list of meals. An empty list sums to zero."""
    return MealTotals(
        calories=sum(meal.calories for meal in meals),
        protein=sum(meal.protein for meal in meals),
        fat=sum(meal.fat for meal in meals),
        carbs=sum(meal.carbs for meal in meals),
    )


def derive_checklist(checklist: Checklist, meals: list[MealEntry]) -> Checklist:
    """Set flags whose category appears in any meal's tags.

    Flags are only ever raised here; removing the meal that satisfied a flag
    leaves the flag set.
    """
    tags = {tag for meal in meals for tag in meal.tags}
    updates = {
        key: True
        for key in CHECKLIST_KEYS
        if key in tags and not getattr(checklist, key)
    }
    if not updates:
        return checklist
    return checklist.model_copy(update=updates)


def parse_cached_day(raw: object) -> DayRecord:
    """Validate one record read from the local cache."""
    try:
        return DayRecord.model_validate(raw)
    except ValidationError as exc:
        raise MalformedDayRecordError(str(exc)) from exc


def dump_cached_day(record: DayRecord) -> dict[str, object]:
    """Return the camelCase JSON shape stored in the local cache."""
    return record.model_dump(mode="json", by_alias=True)


def day_to_row(record: DayRecord) -> dict[str, object]:
    """Return the ``daily_logs`` row for a record, with derived totals."""
    totals = meal_totals(record.meals)
    return {
        "date": record.date.isoformat(),
        "weight": record.weight,
        "hrv": record.hrv,
        "rhr": record.rhr,
        "sleep_score": record.sleep_score,
        "sleep_duration": record.sleep_duration,
        "xert_burn": record.xert_burn,
        "meals": [meal.model_dump(mode="json") for meal in record.meals],
        "checklist": record.checklist.model_dump(mode="json"),
        "locked": record.locked,
        "notes": record.notes,
        "total_calories": totals.calories,
        "total_protein": totals.protein,
    }


def row_to_day(row: dict[str, object]) -> DayRecord:
    """Build a record from a ``daily_logs`` row."""
    try:
        return DayRecord.model_validate(_row_fields(row))
    except ValidationError as exc:
        raise MalformedDayRecordError(str(exc)) from exc


def row_to_ranged_day(row: dict[str, object]) -> RangedDayRecord:
    """Build a record from a row, keeping the stored aggregate columns."""
    fields = _row_fields(row)
    fields["total_calories"] = row.get("total_calories") or 0
    fields["total_protein"] = row.get("total_protein") or 0
    try:
        return RangedDayRecord.model_validate(fields)
    except ValidationError as exc:
        raise MalformedDayRecordError(str(exc)) from exc


def with_totals(record: DayRecord) -> RangedDayRecord:
    """Attach aggregates computed from the record's own meals."""
    totals = meal_totals(record.meals)
    return RangedDayRecord(
        **record.model_dump(exclude={"total_calories", "total_protein"}),
        total_calories=totals.calories,
        total_protein=totals.protein,
    )


def _row_fields(row: dict[str, object]) -> dict[str, object]:
    if not row.get("date"):
        raise MalformedDayRecordError("Row is missing its date")
    return {column: row.get(column) for column in _ROW_COLUMNS}


_ROW_COLUMNS = (
    "date",
    "weight",
    "hrv",
    "rhr",
    "sleep_score",
    "sleep_duration",
    "xert_burn",
    "meals",
    "checklist",
    "locked",
    "notes",
)
