"""Budget and trend calculations against the fat-loss protocol."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from coaching_dashboard.domain.days import DayRecord, meal_totals
from coaching_dashboard.domain.protocol import (
    HOT_DEFICIT_KCAL,
    SHALLOW_DEFICIT_KCAL,
    DaySummary,
    DeficitAlert,
    FatLossProtocol,
    TrendPoint,
)


@dataclass
class DashboardService:
    """Derives daily budgets, alerts and chart series from day records."""

    protocol: FatLossProtocol

    def day_budget(self, record: DayRecord) -> float:
        """Calories allowed today: rest-day budget plus training burn."""
        return self.protocol.rest_day_budget + record.xert_burn

    def total_burn(self, record: DayRecord) -> float:
        """Calories burned today: baseline burn plus training burn."""
        return self.protocol.baseline_burn + record.xert_burn

    def summarize(self, record: DayRecord) -> DaySummary:
        """Return the budget view for one day."""
        totals = meal_totals(record.meals)
        budget = self.day_budget(record)
        total_burn = self.total_burn(record)
        actual_deficit = total_burn - totals.calories
        weight_to_lose = (
            record.weight - self.protocol.goal_weight if record.weight else None
        )
        return DaySummary(
            day=record.date,
            total_calories=totals.calories,
            total_protein=totals.protein,
            total_fat=totals.fat,
            total_carbs=totals.carbs,
            budget=budget,
            calories_remaining=budget - totals.calories,
            protein_remaining=self.protocol.protein_target - totals.protein,
            calories_pct=_percent(totals.calories, budget),
            protein_pct=_percent(totals.protein, self.protocol.protein_target),
            total_burn=total_burn,
            actual_deficit=actual_deficit,
            weight_to_lose=weight_to_lose,
            alert=deficit_alert(totals.calories, actual_deficit),
        )

    def trend(self, records: Iterable[DayRecord]) -> list[TrendPoint]:
        """Return chart points for days with at least one biometric reading.

        Deficit is only reported for locked days.
        """
        points = []
        for record in sorted(records, key=lambda item: item.date):
            if not (record.weight or record.hrv or record.rhr or record.sleep_score):
                continue
            deficit = None
            if record.locked:
                deficit = self.total_burn(record) - meal_totals(record.meals).calories
            points.append(
                TrendPoint(
                    day=record.date,
                    weight=record.weight,
                    hrv=record.hrv,
                    rhr=record.rhr,
                    sleep_score=record.sleep_score,
                    deficit=deficit,
                )
            )
        return points

    def days_until_goal(self, today: date) -> int:
        """Whole days left until the goal date, never negative."""
        return max(0, (self.protocol.goal_date - today).days)


def deficit_alert(total_calories: float, actual_deficit: float) -> DeficitAlert | None:
    """Return a warning when the deficit leaves the target band."""
    if total_calories == 0:
        return None
    if actual_deficit > HOT_DEFICIT_KCAL:
        return DeficitAlert(
            level="hot", message="Deficit running hot, consider adding calories"
        )
    if actual_deficit < SHALLOW_DEFICIT_KCAL:
        return DeficitAlert(
            level="shallow", message="Deficit too shallow, watch portions"
        )
    return None


def _percent(value: float, target: float) -> float:
    if target == 0:
        return 0.0
    return value / target * 100
