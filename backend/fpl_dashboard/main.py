import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fpl_dashboard.api.routes.analysis import router as analysis_router
from fpl_dashboard.api.routes.gameweeks import router as gameweeks_router
from fpl_dashboard.api.routes.players import router as players_router
from fpl_dashboard.api.routes.refresh import router as refresh_router
from fpl_dashboard.core.config import settings
from fpl_dashboard.core.logging_config import configure_logging
from fpl_dashboard.db.session import SessionLocal
from fpl_dashboard.services.scheduler import start_scheduler, stop_scheduler

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema is managed by `python -m fpl_dashboard.db.init_db`, not here
    start_scheduler()
    yield
    stop_scheduler()


app = FastAPI(title="FPL Snapshot Dashboard", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(players_router)
app.include_router(gameweeks_router)
app.include_router(analysis_router)
app.include_router(refresh_router)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.get("/health")
def health():
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as exc:
        logger.warning("Health check DB ping failed: %s", exc)
        db_ok = False
    finally:
        db.close()
    return {"ok": True, "db": db_ok}
