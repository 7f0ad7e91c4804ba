from __future__ import annotations

from datetime import date as DateType, timedelta
from typing import Iterable

from fitlog.core.coerce import round_half_up
from fitlog.models.daily_log import DailyLog, Meal, Workout

WEEK_DAYS = 7
MONTH_DAYS = 30

_MEAL_FIELDS = {
    "calories": "calories",
    "protein": "protein_g",
    "carbs": "carbs_g",
    "fat": "fat_g",
    "fibre": "fibre_g",
}


def window(days: int, today: DateType) -> tuple[DateType, DateType]:
    """Trailing window of `days` calendar days ending today (inclusive)."""
    return today - timedelta(days=days - 1), today


def meal_totals(meals: Iterable[Meal]) -> dict[str, float]:
    meals = list(meals)
    return {
        key: sum(getattr(m, attr) or 0 for m in meals)
        for key, attr in _MEAL_FIELDS.items()
    }


def workout_totals(workouts: Iterable[Workout]) -> dict[str, float]:
    workouts = list(workouts)
    return {
        "activeCalories": sum(w.active_calories or 0 for w in workouts),
        "totalMins": sum(w.duration_mins or 0 for w in workouts),
        "workoutCount": len(workouts),
    }


def day_summary(daily: DailyLog) -> dict:
    macros = meal_totals(daily.meals)
    exercise = workout_totals(daily.workouts)
    return {
        "date": daily.date.isoformat(),
        "weight": daily.weight_kg,
        **macros,
        "activeCalories": exercise["activeCalories"],
        "netCalories": macros["calories"] - exercise["activeCalories"],
        "workoutMins": exercise["totalMins"],
        "workoutCount": exercise["workoutCount"],
    }


def average(days: list[dict], key: str) -> int:
    """Mean of a per-day value over the days that have a log, rounded."""
    if not days:
        return 0
    return round_half_up(sum(d[key] for d in days) / len(days))


def total_workouts(days: list[dict]) -> int:
    return sum(d["workoutCount"] for d in days)
