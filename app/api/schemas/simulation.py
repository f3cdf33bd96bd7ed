"""Pydantic schemas for simulation sandbox and calculator endpoints."""

from typing import List, Optional
from pydantic import BaseModel, Field

from app.api.schemas.plan import BettingConfig, DayResult


class PlanSnapshot(BaseModel):
    config: Optional[BettingConfig] = None
    plan: List[DayResult] = []


class SimulationCompareRequest(BaseModel):
    """Real plan and its sandbox copy."""
    original: PlanSnapshot
    simulated: PlanSnapshot


class SimulationComparison(BaseModel):
    originalBalance: float
    simulatedBalance: float
    originalProfit: float
    simulatedProfit: float
    difference: float
    percentageDifference: float


class SimulationCompareResponse(BaseModel):
    """Comparison is null when either plan is empty."""
    comparison: Optional[SimulationComparison] = None


class ParlayRequest(BaseModel):
    stake: float = Field(..., ge=0)
    odds: List[float] = Field(..., min_length=1)


class ParlayResponse(BaseModel):
    combinedOdds: float
    potentialWin: float
    profit: float
