from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fitlog.api.v1.common import CamelModel
from fitlog.core.coerce import to_float
from fitlog.core.db import get_db
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import row_to_dict
from fitlog.models.goal import MealTemplate

router = APIRouter(prefix="/templates", tags=["templates"])


class MealTemplateIn(CamelModel):
    name: str | None = None
    meal_type: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fibre_g: float | None = None
    components: list[dict[str, Any]] | None = None


@router.get("")
def list_templates(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    rows = (
        db.query(MealTemplate)
        .filter(MealTemplate.user_id == user_id)
        .order_by(MealTemplate.created_at.desc(), MealTemplate.id.desc())
        .all()
    )
    return [row_to_dict(t) for t in rows]


@router.post("", status_code=201)
def create_template(
    payload: MealTemplateIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Save a meal as a reusable template."""
    if not payload.name or not payload.meal_type:
        raise HTTPException(status_code=400, detail="name and mealType are required")

    template = MealTemplate(
        user_id=user_id,
        name=payload.name,
        meal_type=payload.meal_type,
        calories=to_float(payload.calories),
        protein_g=to_float(payload.protein_g),
        carbs_g=to_float(payload.carbs_g),
        fat_g=to_float(payload.fat_g),
        fibre_g=to_float(payload.fibre_g),
        components=payload.components or None,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return row_to_dict(template)


@router.delete("/{template_id}")
def delete_template(template_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    template = db.get(MealTemplate, template_id)
    if template is None or template.user_id != user_id:
        raise HTTPException(status_code=404, detail="Template not found")
    db.delete(template)
    db.commit()
    return {"success": True}
