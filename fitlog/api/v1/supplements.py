from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fitlog.api.v1.common import CamelModel, get_owned_child, get_owned_log
from fitlog.core.coerce import to_float
from fitlog.core.db import get_db
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import row_to_dict
from fitlog.models.daily_log import Supplement

router = APIRouter(prefix="/supplements", tags=["supplements"])


class SupplementIn(CamelModel):
    daily_log_id: int | None = None
    name: str | None = None
    dose_mg: float | None = None
    taken_at: str | None = None
    notes: str | None = None


@router.post("", status_code=201)
def create_supplement(
    payload: SupplementIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    if not payload.daily_log_id or not payload.name:
        raise HTTPException(status_code=400, detail="dailyLogId and name are required")
    daily = get_owned_log(db, payload.daily_log_id, user_id)

    supplement = Supplement(
        daily_log=daily,
        name=payload.name,
        dose_mg=to_float(payload.dose_mg),
        taken_at=payload.taken_at,
        notes=payload.notes,
    )
    db.add(supplement)
    db.commit()
    db.refresh(supplement)
    return row_to_dict(supplement)


@router.put("/{supplement_id}")
def update_supplement(
    supplement_id: int,
    payload: SupplementIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    supplement = get_owned_child(db, Supplement, supplement_id, user_id)
    sent = payload.model_fields_set

    if "name" in sent and payload.name:
        supplement.name = payload.name
    if "dose_mg" in sent:
        supplement.dose_mg = to_float(payload.dose_mg)
    if "taken_at" in sent:
        supplement.taken_at = payload.taken_at
    if "notes" in sent:
        supplement.notes = payload.notes

    db.commit()
    db.refresh(supplement)
    return row_to_dict(supplement)


@router.delete("/{supplement_id}")
def delete_supplement(
    supplement_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    supplement = get_owned_child(db, Supplement, supplement_id, user_id)
    db.delete(supplement)
    db.commit()
    return {"success": True}
