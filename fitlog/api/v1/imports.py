from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from fitlog.core.db import get_db
from fitlog.core.ingest import DailyLogExists, IngestValidationError, ingest_daily_log
from fitlog.core.security import get_current_user_id
from fitlog.models.import_log import ImportLog

router = APIRouter(prefix="/import", tags=["import"])

HISTORY_LIMIT = 30

SCHEMA_EXAMPLE = {
    "date": "2026-02-24",
    "meta": {"weight_kg": 82.5, "wake_time": "06:30", "sleep_time": "22:30", "notes": ""},
    "sleep": {
        "bed_time": "22:00",
        "wake_time": "06:30",
        "total_mins": 480,
        "awake_mins": 15,
        "rem_mins": 100,
        "core_mins": 280,
        "deep_mins": 85,
    },
    "workouts": [
        {
            "type": "indoor_walk",
            "start_time": "05:30",
            "end_time": "06:30",
            "duration_mins": 60,
            "active_calories": 350,
            "total_calories": 450,
            "distance_km": 5.5,
            "avg_heart_rate": 95,
            "max_heart_rate": 120,
            "avg_pace": "10:54",
            "effort_level": 2,
        }
    ],
    "nutrition": {
        "meals": [
            {
                "meal_type": "lunch",
                "name": "Chicken Rice",
                "calories": 650,
                "protein_g": 45,
                "carbs_g": 70,
                "fat_g": 18,
                "fibre_g": 5,
                "components": [
                    {"name": "Chicken", "weight_g": 200, "calories": 330, "protein_g": 40, "carbs_g": 0, "fat_g": 7}
                ],
            }
        ],
        "totals": {"calories": 2000, "protein_g": 150, "carbs_g": 200, "fat_g": 65, "fibre_g": 25},
    },
    "supplements": [{"name": "Creatine", "dose_mg": 10000, "taken_at": "06:30"}],
    "activity_rings": {
        "move_cal": 800,
        "move_goal": 720,
        "exercise_mins": 60,
        "exercise_goal": 45,
        "stand_hrs": 12,
        "stand_goal": 12,
    },
    "steps": {"count": 12000, "distance_km": 8.5},
}


def _run_import(db: Session, user_id: int, payload: Dict[str, Any], overwrite: bool):
    try:
        return ingest_daily_log(db, user_id, payload, overwrite=overwrite)
    except IngestValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DailyLogExists as e:
        return JSONResponse(
            status_code=409,
            content={
                "detail": "Log for this date already exists. Use /v1/import/daily/overwrite to replace.",
                "date": payload.get("date"),
                "id": e.log_id,
            },
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/daily")
def import_daily(
    payload: Dict[str, Any],
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """
    Import a full day's data from one JSON document. Refuses dates that
    already have a log.
    """
    result = _run_import(db, user_id, payload, overwrite=False)
    if isinstance(result, JSONResponse):
        return result
    return {"success": True, "date": payload.get("date"), **result.as_response()}


@router.post("/daily/overwrite")
def import_daily_overwrite(
    payload: Dict[str, Any],
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """
    Re-import a day, replacing any existing log (and everything under it).
    """
    result = _run_import(db, user_id, payload, overwrite=True)
    if isinstance(result, JSONResponse):
        return result
    return {
        "success": True,
        "overwritten": result.overwritten,
        "date": payload.get("date"),
        **result.as_response(),
    }


@router.get("/history")
def import_history(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    rows = (
        db.query(ImportLog)
        .filter(ImportLog.user_id == user_id)
        .order_by(ImportLog.imported_at.desc(), ImportLog.id.desc())
        .limit(HISTORY_LIMIT)
        .all()
    )
    return [
        {
            "id": r.id,
            "date": r.date.isoformat(),
            "importedAt": r.imported_at.isoformat() if r.imported_at else None,
            "mealsCount": r.meals_count,
            "workoutsCount": r.workouts_count,
            "status": r.status,
            "errorMessage": r.error_message,
        }
        for r in rows
    ]


@router.get("/schema")
def import_schema():
    return {"description": "Daily log JSON format for import", "example": SCHEMA_EXAMPLE}
