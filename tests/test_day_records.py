"""Tests for day record validation and shape conversion."""

from datetime import date

import pytest

from coaching_dashboard.domain.days import (
    Checklist,
    DayRecord,
    MalformedDayRecordError,
    MealEntry,
    day_to_row,
    derive_checklist,
    dump_cached_day,
    empty_day,
    meal_totals,
    parse_cached_day,
    row_to_day,
    row_to_ranged_day,
)


def test_empty_day_has_consistent_defaults() -> None:
    record = empty_day(date(2025, 6, 1))

    assert record.weight is None
    assert record.sleep_score is None
    assert record.sleep_duration == ""
    assert record.xert_burn == 0
    assert record.meals == []
    assert record.checklist == Checklist()
    assert record.locked is False
    assert record.notes == ""


def test_cached_shape_uses_camel_case_keys() -> None:
    record = DayRecord(date=date(2025, 6, 1), sleep_score=80, xert_burn=250)

    payload = dump_cached_day(record)

    assert payload["date"] == "2025-06-01"
    assert payload["sleepScore"] == 80
    assert payload["xertBurn"] == 250
    assert payload["checklist"]["resistant_starch"] is False
    assert parse_cached_day(payload) == record


def test_row_uses_snake_case_and_derived_totals() -> None:
    record = DayRecord(
        date=date(2025, 6, 1),
        sleep_score=77,
        sleep_duration="6h 50m",
        meals=[
            MealEntry(name="Oats (50g dry)", calories=190, protein=7),
            MealEntry(name="Whey protein scoop", calories=120, protein=24),
        ],
    )

    row = day_to_row(record)

    assert row["date"] == "2025-06-01"
    assert row["sleep_score"] == 77
    assert row["sleep_duration"] == "6h 50m"
    assert row["total_calories"] == 310
    assert row["total_protein"] == 31
    assert row["meals"][0]["name"] == "Oats (50g dry)"


def test_row_totals_are_zero_without_meals() -> None:
    row = day_to_row(empty_day(date(2025, 6, 1)))

    assert row["total_calories"] == 0
    assert row["total_protein"] == 0


def test_row_to_day_fills_defaults_for_null_columns() -> None:
    record = row_to_day(
        {
            "date": "2025-06-01",
            "weight": 190.2,
            "hrv": None,
            "rhr": None,
            "sleep_score": None,
            "sleep_duration": None,
            "xert_burn": None,
            "meals": None,
            "checklist": None,
            "locked": None,
            "notes": None,
        }
    )

    assert record.weight == 190.2
    assert record.xert_burn == 0
    assert record.meals == []
    assert record.checklist == Checklist()
    assert record.locked is False
    assert record.notes == ""


def test_row_to_ranged_day_keeps_stored_totals() -> None:
    record = row_to_ranged_day(
        {"date": "2025-06-01", "total_calories": 1450, "total_protein": 150.5}
    )

    assert record.total_calories == 1450
    assert record.total_protein == 150.5


def test_malformed_rows_fail_loudly() -> None:
    with pytest.raises(MalformedDayRecordError):
        row_to_day({"date": "2025-06-01", "weight": "heavy"})
    with pytest.raises(MalformedDayRecordError):
        row_to_day({"weight": 190})
    with pytest.raises(MalformedDayRecordError):
        parse_cached_day({"date": "not-a-date"})


def test_meal_totals_sum_all_macros() -> None:
    totals = meal_totals(
        [
            MealEntry(name="Eggs (2 large)", calories=140, protein=12, fat=10, carbs=1),
            MealEntry(name="Banana", calories=105, protein=1.5, fat=0.5, carbs=27),
        ]
    )

    assert totals.calories == 245
    assert totals.protein == 13.5
    assert totals.fat == 10.5
    assert totals.carbs == 28


def test_derive_checklist_sets_flags_from_tags() -> None:
    meals = [
        MealEntry(name="Kimchi (100g)", calories=15, tags=["fermented", "fiber"]),
    ]

    checklist = derive_checklist(Checklist(), meals)

    assert checklist == Checklist(fermented=True, fiber=True)


def test_derive_checklist_never_clears_flags() -> None:
    checklist = Checklist(sardines=True)

    assert derive_checklist(checklist, []) == Checklist(sardines=True)
