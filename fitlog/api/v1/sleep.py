from datetime import date as DateType, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fitlog.api.v1.common import parse_date_param
from fitlog.core.db import get_db
from fitlog.core.rollup import average
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import row_to_dict
from fitlog.models.daily_log import DailyLog, SleepLog

router = APIRouter(prefix="/sleep", tags=["sleep"])

_TREND_FIELDS = ("total_mins", "deep_mins", "rem_mins", "core_mins", "deep_sleep_pct")


def _user_sleep(db: Session, user_id: int):
    return (
        db.query(SleepLog)
        .join(DailyLog, SleepLog.daily_log_id == DailyLog.id)
        .filter(DailyLog.user_id == user_id)
    )


@router.get("")
def list_sleep(
    limit: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    rows = _user_sleep(db, user_id).order_by(SleepLog.date.desc()).limit(limit).all()
    return [{**row_to_dict(s), "notes": s.daily_log.notes} for s in rows]


@router.get("/trends")
def sleep_trends(
    days: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """
    Sleep logs for the last `days` days plus rounded averages for the charts.
    """
    since = DateType.today() - timedelta(days=days)
    rows = _user_sleep(db, user_id).filter(SleepLog.date >= since).order_by(SleepLog.date.asc()).all()

    logs = [row_to_dict(s) for s in rows]
    values = [{f: getattr(s, f) or 0 for f in _TREND_FIELDS} for s in rows]

    return {
        "logs": logs,
        "averages": {
            "totalMins": average(values, "total_mins"),
            "deepMins": average(values, "deep_mins"),
            "remMins": average(values, "rem_mins"),
            "coreMins": average(values, "core_mins"),
            "deepPct": average(values, "deep_sleep_pct"),
        },
    }


@router.get("/{date_str}")
def get_sleep_for_date(date_str: str, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    d = parse_date_param(date_str)
    entry = _user_sleep(db, user_id).filter(SleepLog.date == d).first()
    if entry is None:
        raise HTTPException(status_code=404, detail="No sleep data for this date")

    return {
        **row_to_dict(entry),
        "notes": entry.daily_log.notes,
        "supplements": [row_to_dict(s) for s in entry.daily_log.supplements],
    }
