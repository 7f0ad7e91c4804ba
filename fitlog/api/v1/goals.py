from datetime import date as DateType

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fitlog.api.v1.common import CamelModel, parse_date_param
from fitlog.core.coerce import to_float
from fitlog.core.db import get_db
from fitlog.core.security import get_current_user_id
from fitlog.core.serialize import row_to_dict
from fitlog.models.goal import Goal

router = APIRouter(prefix="/goals", tags=["goals"])


class GoalIn(CamelModel):
    goal_type: str | None = None
    target_value: float | None = None
    start_date: str | None = None
    target_date: str | None = None


def _owned_goal(db: Session, goal_id: int, user_id: int) -> Goal:
    goal = db.get(Goal, goal_id)
    if goal is None or goal.user_id != user_id:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("")
def list_goals(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    rows = db.query(Goal).filter(Goal.user_id == user_id).order_by(Goal.created_at.desc(), Goal.id.desc()).all()
    return [row_to_dict(g) for g in rows]


@router.post("", status_code=201)
def create_goal(payload: GoalIn, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    if not payload.goal_type or not payload.target_value:
        raise HTTPException(status_code=400, detail="goalType and targetValue are required")

    goal = Goal(
        user_id=user_id,
        goal_type=payload.goal_type,
        target_value=payload.target_value,
        start_date=parse_date_param(payload.start_date) if payload.start_date else DateType.today(),
        target_date=parse_date_param(payload.target_date) if payload.target_date else None,
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return row_to_dict(goal)


@router.put("/{goal_id}")
def update_goal(
    goal_id: int,
    payload: GoalIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    goal = _owned_goal(db, goal_id, user_id)

    # Only overwrite what was actually sent
    if payload.goal_type:
        goal.goal_type = payload.goal_type
    if payload.target_value:
        goal.target_value = to_float(payload.target_value)
    if payload.start_date:
        goal.start_date = parse_date_param(payload.start_date)
    if payload.target_date:
        goal.target_date = parse_date_param(payload.target_date)

    db.commit()
    db.refresh(goal)
    return row_to_dict(goal)
