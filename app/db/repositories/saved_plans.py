from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import SavedPlan


class SavedPlanRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, owner_id: str, plan_id: str) -> Optional[SavedPlan]:
        result = await self.session.execute(
            select(SavedPlan).where(
                SavedPlan.owner_id == owner_id,
                SavedPlan.id == plan_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_owner(self, owner_id: str) -> List[SavedPlan]:
        """Get all saved plans of an owner, most recently saved first."""
        result = await self.session.execute(
            select(SavedPlan)
            .where(SavedPlan.owner_id == owner_id)
            .order_by(SavedPlan.saved_at.desc())
        )
        return list(result.scalars().all())

    async def upsert(
        self,
        owner_id: str,
        plan_id: str,
        name: str,
        config: Dict,
        plan: List[Dict],
        saved_at: datetime,
    ) -> SavedPlan:
        existing = await self.get(owner_id, plan_id)
        if existing:
            existing.name = name
            existing.config = config
            existing.plan = plan
            existing.saved_at = saved_at
            await self.session.commit()
            return existing

        saved = SavedPlan(
            id=plan_id,
            owner_id=owner_id,
            name=name,
            config=config,
            plan=plan,
            saved_at=saved_at,
        )
        self.session.add(saved)
        await self.session.commit()
        await self.session.refresh(saved)
        return saved

    async def delete(self, saved: SavedPlan) -> None:
        await self.session.delete(saved)
        await self.session.commit()
