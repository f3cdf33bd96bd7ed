"""API routes for the simulation sandbox and calculators."""

from fastapi import APIRouter

from app.api.schemas.simulation import (
    ParlayRequest,
    ParlayResponse,
    SimulationCompareRequest,
    SimulationCompareResponse,
)
from app.core import analytics

router = APIRouter()


@router.post("/simulation/compare", response_model=SimulationCompareResponse)
async def compare_simulation(payload: SimulationCompareRequest):
    """
    Compare a sandbox copy of a plan against the real plan.

    The sandbox is edited client-side with the same plan operations; only
    the real plan is ever stored.
    """
    original = payload.original.model_dump()
    simulated = payload.simulated.model_dump()
    comparison = analytics.compare_simulation(
        original["config"],
        original["plan"],
        simulated["config"],
        simulated["plan"],
    )
    return {"comparison": comparison}


@router.post("/calculator/parlay", response_model=ParlayResponse)
async def parlay_calculator(payload: ParlayRequest):
    """Combined odds and potential win of a parlay."""
    return analytics.calculate_parlay_potential_win(payload.stake, payload.odds)
