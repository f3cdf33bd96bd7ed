import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import IntegrityError

from app.config import settings
from app.api.routes import plan, saved_plans, simulation
from app.core.logging import setup_logging
from app.db.database import create_tables
from app.services.plan_service import PlanNotFoundError, SavedPlanNotFoundError

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.AUTO_CREATE_TABLES:
        logger.info("Creating database tables...")
        await create_tables()
    yield


app = FastAPI(
    title="Stakeplan API",
    description="Bankroll planning with compounding day-by-day betting projections",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(plan.router, tags=["plan"])
app.include_router(saved_plans.router, tags=["saved-plans"])
app.include_router(simulation.router, tags=["simulation"])


@app.exception_handler(PlanNotFoundError)
async def plan_not_found_handler(request: Request, exc: PlanNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(SavedPlanNotFoundError)
async def saved_plan_not_found_handler(request: Request, exc: SavedPlanNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.error(f"Integrity error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=409, content={"detail": "Conflict"})


@app.api_route("/health", methods=["GET", "HEAD"])
async def health_check():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}
