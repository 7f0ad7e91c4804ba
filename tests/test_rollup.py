from datetime import date
from types import SimpleNamespace

from fitlog.core import rollup


def _meal(**kw):
    base = dict(calories=None, protein_g=None, carbs_g=None, fat_g=None, fibre_g=None)
    return SimpleNamespace(**{**base, **kw})


def _workout(active=None, mins=None):
    return SimpleNamespace(active_calories=active, duration_mins=mins)


def test_window_is_inclusive_of_today():
    assert rollup.window(7, date(2026, 3, 10)) == (date(2026, 3, 4), date(2026, 3, 10))
    assert rollup.window(30, date(2026, 3, 30)) == (date(2026, 3, 1), date(2026, 3, 30))


def test_meal_totals_treat_missing_as_zero():
    totals = rollup.meal_totals([_meal(calories=600, protein_g=40), _meal(calories=None, fibre_g=5)])
    assert totals == {"calories": 600, "protein": 40, "carbs": 0, "fat": 0, "fibre": 5}


def test_workout_totals():
    totals = rollup.workout_totals([_workout(300, 45), _workout(None, 15)])
    assert totals == {"activeCalories": 300, "totalMins": 60, "workoutCount": 2}


def test_day_summary_net_calories():
    day = SimpleNamespace(
        date=date(2026, 3, 1),
        weight_kg=80.0,
        meals=[_meal(calories=2000, protein_g=150)],
        workouts=[_workout(400, 60)],
    )
    summary = rollup.day_summary(day)
    assert summary["date"] == "2026-03-01"
    assert summary["netCalories"] == 1600
    assert summary["workoutMins"] == 60
    assert summary["weight"] == 80.0


def test_average_rounds_half_up_and_handles_empty():
    assert rollup.average([], "calories") == 0
    assert rollup.average([{"calories": 1}, {"calories": 2}], "calories") == 2
    assert rollup.average([{"calories": 1000}, {"calories": 500}, {"calories": 0}], "calories") == 500


def test_total_workouts():
    assert rollup.total_workouts([{"workoutCount": 2}, {"workoutCount": 0}, {"workoutCount": 1}]) == 3
