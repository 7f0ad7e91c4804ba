from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fitlog.api.v1.common import CamelModel, get_owned_child, get_owned_log
from fitlog.core.coerce import to_float, to_int
from fitlog.core.db import get_db
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import row_to_dict
from fitlog.models.daily_log import Workout

router = APIRouter(prefix="/workouts", tags=["workouts"])

_INT_FIELDS = ("duration_mins", "avg_heart_rate", "max_heart_rate", "effort_level")
_FLOAT_FIELDS = ("active_calories", "total_calories", "distance_km")
_TEXT_FIELDS = ("type", "start_time", "end_time", "avg_pace", "notes")


class WorkoutIn(CamelModel):
    daily_log_id: int | None = None
    type: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    duration_mins: float | None = None
    active_calories: float | None = None
    total_calories: float | None = None
    avg_heart_rate: float | None = None
    max_heart_rate: float | None = None
    distance_km: float | None = None
    avg_pace: str | None = None
    effort_level: float | None = None
    notes: str | None = None


def _apply(workout: Workout, payload: WorkoutIn, fields: set[str]) -> None:
    for f in _TEXT_FIELDS:
        if f in fields and not (f == "type" and not payload.type):
            setattr(workout, f, getattr(payload, f))
    for f in _INT_FIELDS:
        if f in fields:
            setattr(workout, f, to_int(getattr(payload, f)))
    for f in _FLOAT_FIELDS:
        if f in fields:
            setattr(workout, f, to_float(getattr(payload, f)))


@router.post("", status_code=201)
def create_workout(payload: WorkoutIn, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    if not payload.daily_log_id or not payload.type:
        raise HTTPException(status_code=400, detail="dailyLogId and type are required")
    daily = get_owned_log(db, payload.daily_log_id, user_id)

    workout = Workout(daily_log=daily)
    _apply(workout, payload, set(_TEXT_FIELDS + _INT_FIELDS + _FLOAT_FIELDS))
    db.add(workout)
    db.commit()
    db.refresh(workout)
    return row_to_dict(workout)


@router.put("/{workout_id}")
def update_workout(
    workout_id: int,
    payload: WorkoutIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    workout = get_owned_child(db, Workout, workout_id, user_id)
    _apply(workout, payload, payload.model_fields_set)
    db.commit()
    db.refresh(workout)
    return row_to_dict(workout)


@router.delete("/{workout_id}")
def delete_workout(workout_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    workout = get_owned_child(db, Workout, workout_id, user_id)
    db.delete(workout)
    db.commit()
    return {"success": True}
