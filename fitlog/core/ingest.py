"""
Daily-log ingestion: turn one JSON document describing a whole day into a
DailyLog plus its child rows.

Everything written for one document (parent, children, the standalone
weight sample and the audit row) shares a single transaction, so an import
either lands completely or not at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as DateType
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fitlog.core.coerce import opt_float, opt_int, opt_str, parse_date, pct, to_float, to_int
from fitlog.models.body_metrics import BodyMetric
from fitlog.models.daily_log import (
    ActivityRings,
    DailyLog,
    Meal,
    MealComponent,
    SleepLog,
    Supplement,
    Workout,
)
from fitlog.models.import_log import ImportLog

log = logging.getLogger(__name__)

AUTO_WEIGHT_NOTE = "Auto-logged from daily import"


class IngestError(Exception):
    pass


class IngestValidationError(IngestError):
    """Document rejected before anything was written."""


class DailyLogExists(IngestError):
    def __init__(self, d: DateType, log_id: int | None):
        super().__init__(f"Daily log for {d.isoformat()} already exists")
        self.date = d
        self.log_id = log_id


@dataclass
class DailyDocument:
    date: DateType
    meta: dict = field(default_factory=dict)
    sleep: dict | None = None
    meals: list = field(default_factory=list)
    totals: dict = field(default_factory=dict)
    workouts: list = field(default_factory=list)
    supplements: list = field(default_factory=list)
    activity_rings: dict | None = None
    steps: dict = field(default_factory=dict)


@dataclass
class IngestResult:
    log_id: int
    meals_created: int = 0
    workouts_created: int = 0
    supplements_created: int = 0
    sleep_logged: bool = False
    activity_logged: bool = False
    weight_logged: bool = False
    overwritten: bool = False

    def as_response(self) -> dict:
        return {
            "logId": self.log_id,
            "mealsCreated": self.meals_created,
            "workoutsCreated": self.workouts_created,
            "supplementsCreated": self.supplements_created,
            "sleepLogged": self.sleep_logged,
            "activityLogged": self.activity_logged,
            "weightLogged": self.weight_logged,
        }


# ---------- Input normalization ----------

def _section(data: dict, key: str, kind: type, default):
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise IngestValidationError(f"'{key}' must be a JSON {'object' if kind is dict else 'array'}")
    return value


def _records(items: list, key: str) -> list[dict]:
    for item in items:
        if not isinstance(item, dict):
            raise IngestValidationError(f"every entry in '{key}' must be a JSON object")
    return items


def normalize_document(data: Any) -> DailyDocument:
    if not isinstance(data, dict):
        raise IngestValidationError("import body must be a JSON object")

    raw_date = data.get("date")
    if not raw_date:
        raise IngestValidationError("date is required")
    try:
        d = parse_date(raw_date)
    except ValueError as e:
        raise IngestValidationError(str(e))

    nutrition = _section(data, "nutrition", dict, {})

    return DailyDocument(
        date=d,
        meta=_section(data, "meta", dict, {}),
        sleep=_section(data, "sleep", dict, None),
        meals=_records(_section(nutrition, "meals", list, []), "nutrition.meals"),
        totals=_section(nutrition, "totals", dict, {}),
        workouts=_records(_section(data, "workouts", list, []), "workouts"),
        supplements=_records(_section(data, "supplements", list, []), "supplements"),
        activity_rings=_section(data, "activity_rings", dict, None),
        steps=_section(data, "steps", dict, {}),
    )


# ---------- Lookups ----------

def find_daily_log(db: Session, user_id: int, d: DateType) -> DailyLog | None:
    return (
        db.query(DailyLog)
        .filter(DailyLog.user_id == user_id, DailyLog.date == d)
        .one_or_none()
    )


# ---------- Writers ----------

def _create_daily_log(db: Session, user_id: int, doc: DailyDocument) -> DailyLog:
    meta = doc.meta
    daily = DailyLog(
        user_id=user_id,
        date=doc.date,
        weight_kg=to_float(meta.get("weight_kg")),
        wake_time=opt_str(meta.get("wake_time")),
        sleep_time=opt_str(meta.get("sleep_time")),
        notes=opt_str(meta.get("notes")),
    )
    db.add(daily)
    try:
        db.flush()
    except IntegrityError:
        # Another request inserted the same (user, date) after our pre-check
        db.rollback()
        existing = find_daily_log(db, user_id, doc.date)
        raise DailyLogExists(doc.date, existing.id if existing else None)
    return daily


def _write_sleep(db: Session, daily: DailyLog, sleep: dict | None) -> bool:
    if not sleep or not sleep.get("total_mins"):
        return False

    total = to_int(sleep["total_mins"])
    deep = opt_int(sleep.get("deep_mins"))
    rem = opt_int(sleep.get("rem_mins"))

    db.add(
        SleepLog(
            daily_log=daily,
            date=daily.date,
            bed_time=opt_str(sleep.get("bed_time")),
            wake_time=opt_str(sleep.get("wake_time")),
            total_mins=total,
            awake_mins=opt_int(sleep.get("awake_mins")),
            rem_mins=rem,
            core_mins=opt_int(sleep.get("core_mins")),
            deep_mins=deep,
            deep_sleep_pct=pct(deep, total),
            rem_pct=pct(rem, total),
        )
    )
    return True


def _write_workouts(db: Session, daily: DailyLog, workouts: list[dict]) -> int:
    for w in workouts:
        db.add(
            Workout(
                daily_log=daily,
                type=w.get("type") or "other",
                start_time=opt_str(w.get("start_time")),
                end_time=opt_str(w.get("end_time")),
                duration_mins=to_int(w.get("duration_mins")),
                active_calories=to_float(w.get("active_calories")),
                total_calories=to_float(w.get("total_calories")),
                avg_heart_rate=to_int(w.get("avg_heart_rate")),
                max_heart_rate=to_int(w.get("max_heart_rate")),
                distance_km=to_float(w.get("distance_km")),
                avg_pace=opt_str(w.get("avg_pace")),
                effort_level=to_int(w.get("effort_level")),
                notes=opt_str(w.get("notes")),
            )
        )
    return len(workouts)


def build_components(components: list[dict] | None) -> list[MealComponent]:
    return [
        MealComponent(
            name=c.get("name"),
            weight_g=to_float(c.get("weight_g")),
            calories=to_float(c.get("calories")),
            protein_g=to_float(c.get("protein_g")),
            carbs_g=to_float(c.get("carbs_g")),
            fat_g=to_float(c.get("fat_g")),
            fibre_g=to_float(c.get("fibre_g")),
        )
        for c in components or []
    ]


def _write_meals(db: Session, daily: DailyLog, meals: list[dict]) -> int:
    for m in meals:
        components = m.get("components")
        if components is not None and not isinstance(components, list):
            raise IngestValidationError("meal 'components' must be a JSON array")

        db.add(
            Meal(
                daily_log=daily,
                meal_type=m.get("meal_type") or "snack",
                name=m.get("name") or "Unnamed meal",
                calories=to_float(m.get("calories")),
                protein_g=to_float(m.get("protein_g")),
                carbs_g=to_float(m.get("carbs_g")),
                fat_g=to_float(m.get("fat_g")),
                fibre_g=to_float(m.get("fibre_g")),
                notes=opt_str(m.get("notes")),
                components=build_components(components),
            )
        )
    return len(meals)


def _write_supplements(db: Session, daily: DailyLog, supplements: list[dict]) -> int:
    for s in supplements:
        db.add(
            Supplement(
                daily_log=daily,
                name=s.get("name"),
                dose_mg=to_float(s.get("dose_mg")),
                taken_at=opt_str(s.get("taken_at")),
                notes=opt_str(s.get("notes")),
            )
        )
    return len(supplements)


def _write_activity(db: Session, daily: DailyLog, rings: dict | None, steps: dict) -> bool:
    if rings is None:
        return False

    db.add(
        ActivityRings(
            daily_log=daily,
            move_cal=opt_int(rings.get("move_cal")),
            move_goal=opt_int(rings.get("move_goal")),
            exercise_mins=opt_int(rings.get("exercise_mins")),
            exercise_goal=opt_int(rings.get("exercise_goal")),
            stand_hrs=opt_int(rings.get("stand_hrs")),
            stand_goal=opt_int(rings.get("stand_goal")),
            step_count=opt_int(steps.get("count")),
            step_distance_km=opt_float(steps.get("distance_km")),
        )
    )
    return True


def record_body_metric_sample(db: Session, user_id: int, d: DateType, weight_kg: float | None) -> bool:
    """
    Mirror the day's weight into the standalone BodyMetric series used by
    the trend charts.
    """
    # 0 kg is never a real sample, even when KEEP_ZERO_VALUES stores it on the log
    if not weight_kg:
        return False
    db.add(BodyMetric(user_id=user_id, date=d, weight_kg=weight_kg, notes=AUTO_WEIGHT_NOTE))
    return True


def _record_failure(db: Session, user_id: int, d: DateType, data: Any, exc: Exception) -> None:
    try:
        db.add(
            ImportLog(
                user_id=user_id,
                date=d,
                status="error",
                error_message=str(exc),
                raw_json=data,
            )
        )
        db.commit()
    except Exception:
        db.rollback()
        log.warning("could not record failed import for %s", d, exc_info=True)


# ---------- Pipeline ----------

def ingest_daily_log(db: Session, user_id: int, data: Any, overwrite: bool = False) -> IngestResult:
    """
    Materialize one day's JSON document for `user_id`.

    Plain imports refuse a date that already has a DailyLog
    (DailyLogExists). Overwrite imports delete the existing log and its
    children first, inside the same transaction as the re-import.
    """
    doc = normalize_document(data)

    existing = find_daily_log(db, user_id, doc.date)
    if existing is not None and not overwrite:
        raise DailyLogExists(doc.date, existing.id)

    try:
        if existing is not None:
            db.delete(existing)
            db.flush()

        daily = _create_daily_log(db, user_id, doc)

        result = IngestResult(log_id=daily.id, overwritten=existing is not None)
        result.sleep_logged = _write_sleep(db, daily, doc.sleep)
        result.workouts_created = _write_workouts(db, daily, doc.workouts)
        result.meals_created = _write_meals(db, daily, doc.meals)
        result.supplements_created = _write_supplements(db, daily, doc.supplements)
        result.activity_logged = _write_activity(db, daily, doc.activity_rings, doc.steps)

        # Also record a standalone body-metric sample
        result.weight_logged = record_body_metric_sample(db, user_id, doc.date, daily.weight_kg)

        db.add(
            ImportLog(
                user_id=user_id,
                daily_log_id=daily.id,
                date=doc.date,
                meals_count=result.meals_created,
                workouts_count=result.workouts_created,
                status="success",
                raw_json=data,
            )
        )
        db.commit()
    except IngestError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        log.exception("import of %s failed for user %s", doc.date, user_id)
        if not overwrite:
            _record_failure(db, user_id, doc.date, data, e)
        raise

    log.info(
        "imported %s for user %s: %d meals, %d workouts, %d supplements%s",
        doc.date,
        user_id,
        result.meals_created,
        result.workouts_created,
        result.supplements_created,
        " (overwrite)" if result.overwritten else "",
    )
    return result
