"""Service for managing an owner's active plan and saved plans."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core import analytics, plan_engine
from app.db.models import BettingData, SavedPlan
from app.db.repositories.betting_data import BettingDataRepository
from app.db.repositories.saved_plans import SavedPlanRepository

logger = logging.getLogger(__name__)


class PlanNotFoundError(Exception):
    """The owner has no active plan to operate on."""

    def __init__(self, owner_id: str):
        self.owner_id = owner_id
        super().__init__(f"No active plan for owner {owner_id}")


class SavedPlanNotFoundError(Exception):
    def __init__(self, plan_id: str):
        self.plan_id = plan_id
        super().__init__(f"Saved plan {plan_id} not found")


def _state(config: Optional[Dict], plan: Optional[List[Dict]], current_balance: float) -> dict:
    return {
        "config": config,
        "plan": plan or [],
        "currentBalance": current_balance,
    }


def _saved_plan_dict(saved: SavedPlan) -> dict:
    return {
        "id": saved.id,
        "name": saved.name,
        "config": saved.config,
        "plan": saved.plan,
        "savedAt": saved.saved_at,
    }


class PlanService:
    """
    Loads an owner's state, applies one plan engine operation and persists
    the result. The engine never sees the database.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.data_repo = BettingDataRepository(session)
        self.saved_repo = SavedPlanRepository(session)

    async def get_state(self, owner_id: str) -> dict:
        """Get the owner's stored config, plan and balance (empty if none)."""
        data = await self.data_repo.get_by_owner(owner_id)
        if not data:
            return _state(None, [], 0.0)
        return _state(data.config_json, data.plan_json, data.current_balance)

    async def _load_active(self, owner_id: str) -> Tuple[BettingData, Dict, List[Dict]]:
        data = await self.data_repo.get_by_owner(owner_id)
        if not data or not data.config_json:
            raise PlanNotFoundError(owner_id)
        return data, data.config_json, data.plan_json or []

    async def _save(
        self,
        owner_id: str,
        config: Optional[Dict],
        plan: List[Dict],
        current_balance: float,
    ) -> dict:
        await self.data_repo.upsert(owner_id, config, plan or None, current_balance)
        return _state(config, plan, current_balance)

    async def _save_mutation(self, owner_id: str, config: Dict, plan: List[Dict]) -> dict:
        return await self._save(
            owner_id, config, plan, plan_engine.derive_current_balance(plan, config)
        )

    # ------------------------------------------------------------------
    # Active plan
    # ------------------------------------------------------------------

    async def create_plan(self, owner_id: str, config: Dict) -> dict:
        """Generate a fresh plan from a configuration and make it active."""
        plan = plan_engine.generate_plan(config, config["initialBudget"])
        logger.info(
            f"Generated {len(plan)}-day plan for {owner_id} "
            f"(budget {config['initialBudget']}, stake {config['stakePercentage']}%)"
        )
        return await self._save(owner_id, config, plan, config["initialBudget"])

    async def reset_plan(self, owner_id: str) -> dict:
        await self.data_repo.clear(owner_id)
        logger.info(f"Reset active plan for {owner_id}")
        return _state(None, [], 0.0)

    async def add_bet(self, owner_id: str, day_index: int) -> dict:
        _, config, plan = await self._load_active(owner_id)
        new_plan = plan_engine.add_bet_to_day(plan, day_index, config)
        if new_plan is plan:
            logger.warning(f"Add bet ignored for {owner_id}: no day at index {day_index}")
        return await self._save_mutation(owner_id, config, new_plan)

    async def remove_bet(self, owner_id: str, day_index: int, bet_id: str) -> dict:
        _, config, plan = await self._load_active(owner_id)
        new_plan = plan_engine.remove_bet_from_day(plan, day_index, bet_id, config)
        if new_plan is plan:
            logger.warning(f"Remove bet ignored for {owner_id}: no bet {bet_id} on day index {day_index}")
        return await self._save_mutation(owner_id, config, new_plan)

    async def update_bet(
        self,
        owner_id: str,
        day_index: int,
        bet_id: str,
        updates: Dict,
    ) -> dict:
        _, config, plan = await self._load_active(owner_id)
        new_plan = plan_engine.update_bet(plan, day_index, bet_id, updates, config)
        if new_plan is plan:
            logger.warning(f"Update bet ignored for {owner_id}: no bet {bet_id} on day index {day_index}")
        else:
            logger.info(f"Updated bet {bet_id} (day index {day_index}) for {owner_id}: {updates}")
        return await self._save_mutation(owner_id, config, new_plan)

    async def add_bankroll(self, owner_id: str, amount: float) -> dict:
        """
        Add money to the bankroll.

        The plan is regenerated from current balance + amount and every
        recorded result is discarded.
        """
        data, config, plan = await self._load_active(owner_id)
        new_config, new_plan, new_balance = plan_engine.add_bankroll(
            config, plan, data.current_balance, amount
        )
        logger.info(
            f"Bankroll addition for {owner_id}: {data.current_balance:.2f} + {amount:.2f} "
            f"-> {new_balance:.2f}, plan regenerated"
        )
        return await self._save(owner_id, new_config, new_plan, new_balance)

    async def get_stats(self, owner_id: str, goal: Optional[float] = None) -> dict:
        """Stats, streaks and bankroll alert, plus progress towards a profit goal if given."""
        data, config, plan = await self._load_active(owner_id)
        goal_progress = None
        if goal is not None:
            goal_progress = analytics.calculate_goal_progress(
                data.current_balance, config["initialBudget"], goal
            )
        return {
            "stats": analytics.calculate_plan_stats(plan, config),
            "streaks": analytics.calculate_streaks(plan),
            "bankrollAlert": analytics.check_bankroll_alert(
                data.current_balance,
                config["initialBudget"],
                settings.BANKROLL_ALERT_THRESHOLD,
            ),
            "currentBalance": data.current_balance,
            "goalProgress": goal_progress,
        }

    async def get_odds_history(self, owner_id: str) -> List[dict]:
        _, _, plan = await self._load_active(owner_id)
        return analytics.build_odds_history(plan)

    # ------------------------------------------------------------------
    # Saved plans
    # ------------------------------------------------------------------

    async def list_saved_plans(self, owner_id: str) -> List[dict]:
        saved = await self.saved_repo.list_for_owner(owner_id)
        return [_saved_plan_dict(s) for s in saved]

    async def save_plan(
        self,
        owner_id: str,
        name: str,
        plan_id: Optional[str] = None,
        config: Optional[Dict] = None,
        plan: Optional[List[Dict]] = None,
    ) -> dict:
        """Save the given config and plan, or the active plan when omitted."""
        if config is None or plan is None:
            _, config, plan = await self._load_active(owner_id)

        saved = await self.saved_repo.upsert(
            owner_id=owner_id,
            plan_id=plan_id or str(uuid.uuid4()),
            name=name,
            config=config,
            plan=plan,
            saved_at=datetime.now(timezone.utc),
        )
        logger.info(f"Saved plan '{name}' ({saved.id}) for {owner_id}")
        return _saved_plan_dict(saved)

    async def delete_saved_plan(self, owner_id: str, plan_id: str) -> None:
        saved = await self.saved_repo.get(owner_id, plan_id)
        if not saved:
            raise SavedPlanNotFoundError(plan_id)
        await self.saved_repo.delete(saved)
        logger.info(f"Deleted saved plan {plan_id} for {owner_id}")

    async def load_saved_plan(self, owner_id: str, plan_id: str) -> dict:
        """Make a saved plan the active one, keeping its recorded results."""
        saved = await self.saved_repo.get(owner_id, plan_id)
        if not saved:
            raise SavedPlanNotFoundError(plan_id)
        logger.info(f"Loaded saved plan {plan_id} for {owner_id}")
        return await self._save_mutation(owner_id, saved.config, saved.plan)
