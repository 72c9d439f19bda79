"""Fat-loss protocol constants and derived summary models."""

from dataclasses import dataclass
from datetime import date

from coaching_dashboard.domain.days import MealEntry

HOT_DEFICIT_KCAL = 750
SHALLOW_DEFICIT_KCAL = 300


@dataclass(frozen=True)
class FatLossProtocol:
    """Fixed targets the daily budget is computed against."""

    baseline_burn: float = 2180
    target_deficit: float = 500
    protein_target: float = 160
    goal_weight: float = 183
    goal_date: date = date(2026, 4, 1)

    @property
    def rest_day_budget(self) -> float:
        """Calories allowed on a day without extra training burn."""
        return self.baseline_burn - self.target_deficit


@dataclass(frozen=True)
class PresetFood:
    """A food that can be logged with one tap."""

    name: str
    calories: float
    protein: float
    fat: float
    carbs: float
    tags: tuple[str, ...] = ()

    def to_meal(self, quantity: int, time: str) -> MealEntry:
        """Return a meal entry for ``quantity`` servings."""
        name = f"{self.name} ×{quantity}" if quantity > 1 else self.name
        return MealEntry(
            name=name,
            calories=self.calories * quantity,
            protein=self.protein * quantity,
            fat=self.fat * quantity,
            carbs=self.carbs * quantity,
            tags=list(self.tags),
            time=time,
        )


PRESET_FOODS: tuple[PresetFood, ...] = (
    PresetFood("Coffee w/ cream", 50, 0.5, 5, 0),
    PresetFood("Rice cake block", 135, 2, 1.75, 27.5, ("carb",)),
    PresetFood("Sardines (1 can)", 200, 23, 11, 0, ("sardines", "protein")),
    PresetFood("Mackerel (1 can)", 200, 22, 12, 0, ("sardines", "protein")),
    PresetFood("Greek yogurt (170g)", 100, 17, 0.7, 6, ("protein", "fermented")),
    PresetFood("Kimchi (100g)", 15, 1, 0.5, 2, ("fermented", "fiber")),
    PresetFood("Sauerkraut (100g)", 19, 1, 0.1, 4, ("fermented", "fiber")),
    PresetFood("Oats (50g dry)", 190, 7, 3.5, 34, ("fiber", "resistant_starch")),
    PresetFood(
        "Lentils (100g cooked)",
        116,
        9,
        0.4,
        20,
        ("fiber", "resistant_starch", "protein"),
    ),
    PresetFood("Banana", 105, 1.3, 0.4, 27, ("fiber",)),
    PresetFood("Chicken breast (150g)", 230, 43, 5, 0, ("protein",)),
    PresetFood("Eggs (2 large)", 140, 12, 10, 1, ("protein",)),
    PresetFood("Whey protein scoop", 120, 24, 1, 3, ("protein",)),
    PresetFood("Cold rice (150g)", 180, 3, 0.3, 40, ("resistant_starch", "carb")),
    PresetFood("Sugar solution (100g)", 400, 0, 0, 100, ("carb",)),
)


@dataclass(frozen=True)
class DeficitAlert:
    """Warning shown when the day's deficit leaves the target band."""

    level: str
    message: str


@dataclass(frozen=True)
class DaySummary:
    """Budget view of a single day."""

    day: date
    total_calories: float
    total_protein: float
    total_fat: float
    total_carbs: float
    budget: float
    calories_remaining: float
    protein_remaining: float
    calories_pct: float
    protein_pct: float
    total_burn: float
    actual_deficit: float
    weight_to_lose: float | None
    alert: DeficitAlert | None


@dataclass(frozen=True)
class TrendPoint:
    """One day on the trend charts."""

    day: date
    weight: float | None
    hrv: float | None
    rhr: float | None
    sleep_score: float | None
    deficit: float | None
