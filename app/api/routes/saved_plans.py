"""API routes for saved plans."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_owner_id
from app.api.schemas.plan import PlanState
from app.api.schemas.saved_plan import SavePlanRequest, SavedPlanResponse, SavedPlansResponse
from app.db.database import get_db
from app.services.plan_service import PlanService

router = APIRouter()


@router.get("/saved-plans", response_model=SavedPlansResponse)
async def list_saved_plans(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Get the owner's saved plans, most recently saved first."""
    plans = await PlanService(db).list_saved_plans(owner_id)
    return {"plans": plans}


@router.post("/saved-plans", response_model=SavedPlanResponse, status_code=201)
async def save_plan(
    payload: SavePlanRequest,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Save a named plan (the active plan when no config/plan is sent)."""
    config = payload.config.model_dump() if payload.config else None
    plan = [d.model_dump() for d in payload.plan] if payload.plan is not None else None
    return await PlanService(db).save_plan(
        owner_id,
        payload.name,
        plan_id=payload.id,
        config=config,
        plan=plan,
    )


@router.delete("/saved-plans/{plan_id}", response_model=SavedPlansResponse)
async def delete_saved_plan(
    plan_id: str,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a saved plan and return the remaining ones."""
    service = PlanService(db)
    await service.delete_saved_plan(owner_id, plan_id)
    return {"plans": await service.list_saved_plans(owner_id)}


@router.post("/saved-plans/{plan_id}/load", response_model=PlanState)
async def load_saved_plan(
    plan_id: str,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Make a saved plan the active plan.

    The balance becomes the balance after its last completed day, or its
    initial budget when no day is completed.
    """
    return await PlanService(db).load_saved_plan(owner_id, plan_id)
