import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fitlog.core.config import settings
from fitlog.core.db import engine

log = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _ping_db() -> bool:
    if engine is None:
        return False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        log.warning("health check: database unreachable: %s", e)
        return False
    return True


@router.get("/health")
def health():
    db_ok = _ping_db()
    return {
        "status": "ok" if db_ok else "degraded",
        "environment": settings.ENVIRONMENT,
        "db": db_ok,
        "dialect": engine.dialect.name if engine is not None else None,
    }
