import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from embodied_journal.api import analytics as analytics_router
from embodied_journal.api import dashboard as dashboard_router
from embodied_journal.api import rituals as rituals_router
from embodied_journal.api import trades as trades_router
from embodied_journal.core.config import settings
from embodied_journal.core.logging import setup_logging
from embodied_journal.db.database import Base, engine
from embodied_journal.schemas.trade import field_errors
from embodied_journal.services.clock import MinuteClock
from embodied_journal.services.trade_entry import TradeValidationError

import embodied_journal.models  # noqa: F401  registers every table on Base.metadata

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create DB tables on startup (development convenience; use Alembic
    migrations in production) and run the displayed clock while serving.
    """
    if settings.create_tables_on_startup:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ensured (create_all)")
        except Exception:
            logger.exception("Error creating tables on startup")

    app.state.clock.start()
    try:
        yield
    finally:
        await app.state.clock.stop()


app = FastAPI(title="Embodied Trader Journal API", lifespan=lifespan)
app.state.clock = MinuteClock(interval_seconds=settings.clock_interval_seconds)

# CORS - keep permissive for local dev, lock down in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trades_router.router)
app.include_router(rituals_router.router)
app.include_router(rituals_router.micro_wins_router)
app.include_router(analytics_router.router)
app.include_router(dashboard_router.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation failed", "errors": field_errors(exc.errors())},
    )


@app.exception_handler(TradeValidationError)
async def trade_validation_handler(request: Request, exc: TradeValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation failed", "errors": exc.errors},
    )


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
