from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fitlog.api.v1.common import CamelModel, get_owned_child, get_owned_log
from fitlog.core.coerce import to_float
from fitlog.core.db import get_db
from fitlog.core.ingest import build_components
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import meal_to_dict
from fitlog.models.daily_log import Meal

router = APIRouter(prefix="/meals", tags=["meals"])

_MACROS = ("calories", "protein_g", "carbs_g", "fat_g", "fibre_g")


class MealComponentIn(CamelModel):
    name: str | None = None
    weight_g: float | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fibre_g: float | None = None


class MealIn(CamelModel):
    daily_log_id: int | None = None
    meal_type: str | None = None
    name: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fibre_g: float | None = None
    notes: str | None = None
    components: list[MealComponentIn] | None = None


def _components(payload: MealIn):
    return build_components([c.model_dump() for c in payload.components or []])


@router.post("", status_code=201)
def create_meal(payload: MealIn, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    if not payload.daily_log_id or not payload.meal_type or not payload.name:
        raise HTTPException(status_code=400, detail="dailyLogId, mealType, and name are required")
    daily = get_owned_log(db, payload.daily_log_id, user_id)

    meal = Meal(
        daily_log=daily,
        meal_type=payload.meal_type,
        name=payload.name,
        notes=payload.notes,
        components=_components(payload),
        **{f: to_float(getattr(payload, f)) for f in _MACROS},
    )
    db.add(meal)
    db.commit()
    db.refresh(meal)
    return meal_to_dict(meal)


@router.put("/{meal_id}")
def update_meal(
    meal_id: int,
    payload: MealIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """
    Update the fields present in the body. A components list replaces the
    meal's components wholesale.
    """
    meal = get_owned_child(db, Meal, meal_id, user_id)
    sent = payload.model_fields_set

    for f in ("meal_type", "name", "notes"):
        if f in sent and getattr(payload, f) is not None:
            setattr(meal, f, getattr(payload, f))
    for f in _MACROS:
        if f in sent:
            setattr(meal, f, to_float(getattr(payload, f)))

    if payload.components is not None:
        # delete-orphan cascade removes the old rows on flush
        meal.components = _components(payload)

    db.commit()
    db.refresh(meal)
    return meal_to_dict(meal)


@router.delete("/{meal_id}")
def delete_meal(meal_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    meal = get_owned_child(db, Meal, meal_id, user_id)
    db.delete(meal)
    db.commit()
    return {"success": True}
