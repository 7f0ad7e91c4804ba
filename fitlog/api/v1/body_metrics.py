# fitlog/api/v1/body_metrics.py

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fitlog.api.v1.common import CamelModel, parse_date_param
from fitlog.core.coerce import to_float
from fitlog.core.db import get_db
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import row_to_dict
from fitlog.models.body_metrics import BodyMetric

router = APIRouter(prefix="/metrics", tags=["body-metrics"])


class BodyMetricIn(CamelModel):
    date: str | None = None
    weight_kg: float | None = None
    notes: str | None = None


@router.get("")
def list_body_metrics(
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """
    Body metrics newest first, optionally bounded by from/to (inclusive).
    """
    q = db.query(BodyMetric).filter(BodyMetric.user_id == user_id)
    if date_from:
        q = q.filter(BodyMetric.date >= parse_date_param(date_from))
    if date_to:
        q = q.filter(BodyMetric.date <= parse_date_param(date_to))

    rows = q.order_by(BodyMetric.date.desc(), BodyMetric.id.desc()).limit(limit).all()
    return [row_to_dict(r) for r in rows]


@router.post("", status_code=201)
def create_body_metric(
    payload: BodyMetricIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    if not payload.date:
        raise HTTPException(status_code=400, detail="Date is required")

    entry = BodyMetric(
        user_id=user_id,
        date=parse_date_param(payload.date),
        weight_kg=to_float(payload.weight_kg),
        notes=payload.notes,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return row_to_dict(entry)
