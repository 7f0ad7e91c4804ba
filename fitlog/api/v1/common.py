from datetime import date as DateType

from fastapi import HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from fitlog.core.coerce import parse_date
from fitlog.models.daily_log import DailyLog


class CamelModel(BaseModel):
    """Request bodies use the frontend's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_date_param(value: str) -> DateType:
    try:
        return parse_date(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date format: {value}, expected YYYY-MM-DD")


def get_owned_log(db: Session, log_id: int, user_id: int) -> DailyLog:
    daily = db.get(DailyLog, log_id)
    if daily is None or daily.user_id != user_id:
        raise HTTPException(status_code=404, detail="Daily log not found")
    return daily


def get_owned_child(db: Session, model, row_id: int, user_id: int):
    """Fetch a DailyLog child row (meal, workout, supplement) owned by user_id."""
    row = (
        db.query(model)
        .join(DailyLog, model.daily_log_id == DailyLog.id)
        .filter(model.id == row_id, DailyLog.user_id == user_id)
        .one_or_none()
    )
    if row is None:
        raise HTTPException(status_code=404, detail=f"{model.__name__} not found")
    return row
