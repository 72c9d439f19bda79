"""Pydantic request models for the dashboard API."""

from pydantic import BaseModel, ConfigDict, Field


class DayPatch(BaseModel):
    """Partial update of a day's measurements and notes.

    Accepts the camelCase names the day payloads are returned with as well as
    the row names. Unknown keys are rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    weight: float | None = None
    hrv: float | None = None
    rhr: float | None = None
    sleep_score: float | None = Field(default=None, alias="sleepScore")
    sleep_duration: str | None = Field(default=None, alias="sleepDuration")
    xert_burn: float | None = Field(default=None, alias="xertBurn")
    notes: str | None = None


class MealCreate(BaseModel):
    """A custom meal entered by hand."""

    name: str = Field(min_length=1)
    calories: float = Field(gt=0)
    protein: float = 0
    fat: float = 0
    carbs: float = 0
    tags: list[str] = Field(default_factory=list)
    time: str | None = None


class PresetAdd(BaseModel):
    """Servings of a preset food to log."""

    index: int = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
