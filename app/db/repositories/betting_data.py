from typing import Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import BettingData


class BettingDataRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_owner(self, owner_id: str) -> Optional[BettingData]:
        result = await self.session.execute(
            select(BettingData).where(BettingData.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        owner_id: str,
        config_json: Optional[Dict],
        plan_json: Optional[List[Dict]],
        current_balance: float,
    ) -> BettingData:
        data = BettingData(
            owner_id=owner_id,
            config_json=config_json,
            plan_json=plan_json,
            current_balance=current_balance,
        )
        self.session.add(data)
        await self.session.commit()
        await self.session.refresh(data)
        return data

    async def upsert(
        self,
        owner_id: str,
        config_json: Optional[Dict],
        plan_json: Optional[List[Dict]],
        current_balance: float,
    ) -> BettingData:
        """Replace the owner's stored config, plan and balance (last write wins)."""
        existing = await self.get_by_owner(owner_id)
        if existing:
            existing.config_json = config_json
            existing.plan_json = plan_json
            existing.current_balance = current_balance
            await self.session.commit()
            await self.session.refresh(existing)
            return existing
        return await self.create(owner_id, config_json, plan_json, current_balance)

    async def clear(self, owner_id: str) -> BettingData:
        """Reset the owner's active plan to an empty state."""
        return await self.upsert(owner_id, None, None, 0.0)
