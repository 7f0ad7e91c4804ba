import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from fitlog.core.config import settings
from fitlog.core.db import Base, engine
import fitlog.models  # noqa: F401  (register tables on Base.metadata)
from fitlog.api.v1.health import router as health_router
from fitlog.api.v1.imports import router as import_router
from fitlog.api.v1.logs import router as logs_router
from fitlog.api.v1.meals import router as meals_router
from fitlog.api.v1.workouts import router as workouts_router
from fitlog.api.v1.supplements import router as supplements_router
from fitlog.api.v1.body_metrics import router as body_metrics_router
from fitlog.api.v1.sleep import router as sleep_router
from fitlog.api.v1.goals import router as goals_router
from fitlog.api.v1.templates import router as templates_router
from fitlog.api.v1.dashboard import router as dashboard_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("fitlog")

app = FastAPI(title="fitlog", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.perf_counter()
    response = await call_next(request)
    log.info(
        "%s %s %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - t0) * 1000,
    )
    return response


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


if engine:
    Base.metadata.create_all(bind=engine)

app.include_router(health_router, prefix="/v1")
app.include_router(import_router, prefix="/v1")
app.include_router(logs_router, prefix="/v1")
app.include_router(meals_router, prefix="/v1")
app.include_router(workouts_router, prefix="/v1")
app.include_router(supplements_router, prefix="/v1")
app.include_router(body_metrics_router, prefix="/v1")
app.include_router(sleep_router, prefix="/v1")
app.include_router(goals_router, prefix="/v1")
app.include_router(templates_router, prefix="/v1")
app.include_router(dashboard_router, prefix="/v1")

# Prebuilt dashboard bundle, mounted last so /v1 routes win
if settings.FRONTEND_DIR and Path(settings.FRONTEND_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.FRONTEND_DIR, html=True), name="frontend")
