import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from fitlog.api.v1.common import CamelModel, get_owned_log, parse_date_param
from fitlog.core.coerce import to_float
from fitlog.core.db import get_db
from fitlog.core.ingest import find_daily_log
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import daily_log_to_dict, empty_daily_log
from fitlog.models.daily_log import DailyLog, Meal

log = logging.getLogger(__name__)

router = APIRouter(prefix="/logs", tags=["logs"])


class DailyLogIn(CamelModel):
    date: str | None = None
    weight_kg: float | None = None
    wake_time: str | None = None
    sleep_time: str | None = None
    notes: str | None = None


def _apply(daily: DailyLog, payload: DailyLogIn) -> None:
    # Fields left out of the body keep their stored value
    sent = payload.model_fields_set
    if "weight_kg" in sent:
        daily.weight_kg = to_float(payload.weight_kg)
    for f in ("wake_time", "sleep_time", "notes"):
        if f in sent:
            setattr(daily, f, getattr(payload, f))


@router.get("/{date_str}")
def get_daily_log(date_str: str, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    """
    Full log for one date: meals with components, workouts, supplements,
    sleep and activity rings. Dates with nothing logged return an empty shell.
    """
    d = parse_date_param(date_str)

    daily = (
        db.query(DailyLog)
        .options(
            selectinload(DailyLog.meals).selectinload(Meal.components),
            selectinload(DailyLog.workouts),
            selectinload(DailyLog.supplements),
        )
        .filter(DailyLog.user_id == user_id, DailyLog.date == d)
        .one_or_none()
    )
    if daily is None:
        return empty_daily_log(d)
    return daily_log_to_dict(daily)


@router.post("")
def upsert_daily_log(payload: DailyLogIn, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    if not payload.date:
        raise HTTPException(status_code=400, detail="Date is required")
    d = parse_date_param(payload.date)

    daily = find_daily_log(db, user_id, d)
    if daily is None:
        daily = DailyLog(user_id=user_id, date=d)
        db.add(daily)
    _apply(daily, payload)

    try:
        db.commit()
    except IntegrityError:
        # Another request created the same (user, date) row first; update that one
        db.rollback()
        daily = find_daily_log(db, user_id, d)
        if daily is None:
            raise
        log.info("daily log %s for user %s created concurrently, updating it", d, user_id)
        _apply(daily, payload)
        db.commit()
    db.refresh(daily)
    return daily_log_to_dict(daily)


@router.put("/{log_id}")
def update_daily_log(
    log_id: int,
    payload: DailyLogIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    daily = get_owned_log(db, log_id, user_id)
    _apply(daily, payload)

    db.commit()
    db.refresh(daily)
    return daily_log_to_dict(daily)
