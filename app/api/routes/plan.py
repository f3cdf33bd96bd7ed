"""API routes for the active plan."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_owner_id
from app.api.schemas.plan import (
    BankrollAddition,
    BetUpdate,
    BettingConfig,
    DayResult,
    OddsHistoryEntry,
    PlanState,
    PlanStatsResponse,
)
from app.core import plan_engine
from app.db.database import get_db
from app.services.plan_service import PlanService

router = APIRouter()


@router.get("/plan", response_model=PlanState)
async def get_plan(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Get the owner's active config, plan and current balance."""
    return await PlanService(db).get_state(owner_id)


@router.post("/plan", response_model=PlanState, status_code=201)
async def create_plan(
    config: BettingConfig,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Generate a new plan from a betting configuration.

    Replaces the owner's active plan and resets the balance to the
    configured initial budget.
    """
    return await PlanService(db).create_plan(owner_id, config.model_dump())


@router.delete("/plan", response_model=PlanState)
async def reset_plan(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Discard the active plan."""
    return await PlanService(db).reset_plan(owner_id)


@router.post("/plan/preview", response_model=List[DayResult])
async def preview_plan(config: BettingConfig):
    """Project a plan without storing it."""
    data = config.model_dump()
    return plan_engine.generate_plan(data, data["initialBudget"])


@router.get("/plan/default-config", response_model=BettingConfig)
async def get_default_config():
    """Default strategy: 30 days starting today."""
    return plan_engine.default_config(date.today())


@router.post("/plan/days/{day_index}/bets", response_model=PlanState)
async def add_bet(
    day_index: int,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Add a bet to a day (0-based index).

    The new bet uses the configured stake, capped to the percentage left
    unallocated on that day. Unknown days leave the plan unchanged.
    """
    return await PlanService(db).add_bet(owner_id, day_index)


@router.patch("/plan/days/{day_index}/bets/{bet_id}", response_model=PlanState)
async def update_bet(
    day_index: int,
    bet_id: str,
    updates: BetUpdate,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a bet's stake percentage, odds or result and recalculate forward.

    Send "result": null to clear a recorded outcome.
    """
    return await PlanService(db).update_bet(
        owner_id, day_index, bet_id, updates.model_dump(exclude_unset=True)
    )


@router.delete("/plan/days/{day_index}/bets/{bet_id}", response_model=PlanState)
async def remove_bet(
    day_index: int,
    bet_id: str,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Remove a bet from a day and recalculate forward."""
    return await PlanService(db).remove_bet(owner_id, day_index, bet_id)


@router.post("/plan/bankroll", response_model=PlanState)
async def add_bankroll(
    payload: BankrollAddition,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Add money to the bankroll.

    The plan is regenerated from the current balance plus the amount;
    recorded results are discarded.
    """
    return await PlanService(db).add_bankroll(owner_id, payload.amount)


@router.get("/plan/stats", response_model=PlanStatsResponse)
async def get_plan_stats(
    goal: Optional[float] = Query(None, gt=0, description="Profit goal to track progress against"),
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Win rate, ROI, streaks and bankroll alert for the active plan."""
    return await PlanService(db).get_stats(owner_id, goal)


@router.get("/plan/odds-history", response_model=List[OddsHistoryEntry])
async def get_odds_history(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Resolved bets of the active plan, most recent first."""
    return await PlanService(db).get_odds_history(owner_id)
