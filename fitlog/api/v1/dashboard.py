from datetime import date as DateType

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload

from fitlog.core import rollup
from fitlog.core.db import get_db
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import daily_log_to_dict, row_to_dict
from fitlog.models.body_metrics import BodyMetric
from fitlog.models.daily_log import DailyLog, Meal
from fitlog.models.goal import Goal

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

WEIGHT_TREND_POINTS = 7


def _logs_between(db: Session, user_id: int, start: DateType | None, end: DateType | None) -> list[DailyLog]:
    q = (
        db.query(DailyLog)
        .options(selectinload(DailyLog.meals), selectinload(DailyLog.workouts))
        .filter(DailyLog.user_id == user_id)
    )
    if start is not None:
        q = q.filter(DailyLog.date >= start)
    if end is not None:
        q = q.filter(DailyLog.date <= end)
    return q.order_by(DailyLog.date.asc()).all()


@router.get("/today")
def dashboard_today(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    today = DateType.today()

    daily = (
        db.query(DailyLog)
        .options(
            selectinload(DailyLog.meals).selectinload(Meal.components),
            selectinload(DailyLog.workouts),
            selectinload(DailyLog.supplements),
        )
        .filter(DailyLog.user_id == user_id, DailyLog.date == today)
        .one_or_none()
    )

    meals = daily.meals if daily else []
    workouts = daily.workouts if daily else []
    macros = rollup.meal_totals(meals)
    exercise = rollup.workout_totals(workouts)

    goals = db.query(Goal).filter(Goal.user_id == user_id).all()

    # last N weights, returned oldest first for the chart
    weights = (
        db.query(BodyMetric)
        .filter(BodyMetric.user_id == user_id)
        .order_by(BodyMetric.date.desc(), BodyMetric.id.desc())
        .limit(WEIGHT_TREND_POINTS)
        .all()
    )

    return {
        "date": today.isoformat(),
        "log": daily_log_to_dict(daily) if daily else None,
        "macros": macros,
        "exercise": exercise,
        "netCalories": macros["calories"] - exercise["activeCalories"],
        "supplements": [row_to_dict(s) for s in daily.supplements] if daily else [],
        "goals": [row_to_dict(g) for g in goals],
        "weightTrend": [{"date": w.date.isoformat(), "weightKg": w.weight_kg} for w in reversed(weights)],
    }


@router.get("/weekly")
def dashboard_weekly(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    start, end = rollup.window(rollup.WEEK_DAYS, DateType.today())
    days = [rollup.day_summary(d) for d in _logs_between(db, user_id, start, end)]

    return {
        "startDate": start.isoformat(),
        "endDate": end.isoformat(),
        "days": days,
        "averages": {
            "calories": rollup.average(days, "calories"),
            "protein": rollup.average(days, "protein"),
        },
        "totalWorkouts": rollup.total_workouts(days),
    }


@router.get("/monthly")
def dashboard_monthly(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    start, end = rollup.window(rollup.MONTH_DAYS, DateType.today())
    days = [rollup.day_summary(d) for d in _logs_between(db, user_id, start, end)]

    weights = (
        db.query(BodyMetric)
        .filter(BodyMetric.user_id == user_id, BodyMetric.date >= start, BodyMetric.date <= end)
        .order_by(BodyMetric.date.asc(), BodyMetric.id.asc())
        .all()
    )

    return {
        "startDate": start.isoformat(),
        "endDate": end.isoformat(),
        "days": days,
        "weightData": [{"date": w.date.isoformat(), "weightKg": w.weight_kg} for w in weights],
        "daysLogged": len(days),
        "totalWorkouts": rollup.total_workouts(days),
    }


@router.get("/total")
def dashboard_total(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    days = [rollup.day_summary(d) for d in _logs_between(db, user_id, None, None)]

    return {
        "startDate": days[0]["date"] if days else None,
        "endDate": days[-1]["date"] if days else None,
        "daysLogged": len(days),
        "averages": {
            key: rollup.average(days, key)
            for key in ("calories", "protein", "carbs", "fat", "fibre", "activeCalories", "workoutMins")
        },
        "totalWorkouts": rollup.total_workouts(days),
    }
