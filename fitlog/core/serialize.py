"""ORM rows -> camelCase JSON dicts, the shape the dashboard frontend reads."""

from __future__ import annotations

from datetime import date as DateType

from pydantic.alias_generators import to_camel
from sqlalchemy import inspect

from fitlog.models.daily_log import DailyLog, Meal


def row_to_dict(obj) -> dict:
    return {
        to_camel(attr.key): getattr(obj, attr.key)
        for attr in inspect(obj).mapper.column_attrs
    }


def meal_to_dict(meal: Meal) -> dict:
    out = row_to_dict(meal)
    out["components"] = [row_to_dict(c) for c in meal.components]
    return out


def daily_log_to_dict(daily: DailyLog) -> dict:
    out = row_to_dict(daily)
    out["meals"] = [meal_to_dict(m) for m in daily.meals]
    out["workouts"] = [row_to_dict(w) for w in daily.workouts]
    out["supplements"] = [row_to_dict(s) for s in daily.supplements]
    out["sleep"] = row_to_dict(daily.sleep) if daily.sleep else None
    out["activityRings"] = row_to_dict(daily.activity_rings) if daily.activity_rings else None
    return out


def empty_daily_log(d: DateType) -> dict:
    return {"date": d.isoformat(), "meals": [], "workouts": [], "supplements": []}
