"""Pydantic schemas for saved plan endpoints."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from app.api.schemas.plan import BettingConfig, DayResult
from app.core.constants import MAX_PLAN_NAME_LENGTH


class SavePlanRequest(BaseModel):
    """
    Save a named plan.

    Send config and plan together, or neither to save the owner's active
    plan. Sending an existing id overwrites that saved plan.
    """
    id: Optional[str] = Field(None, max_length=36)
    name: str = Field(..., min_length=1, max_length=MAX_PLAN_NAME_LENGTH)
    config: Optional[BettingConfig] = None
    plan: Optional[List[DayResult]] = None

    @model_validator(mode="after")
    def check_config_and_plan_together(self):
        if (self.config is None) != (self.plan is None):
            raise ValueError("config and plan must be sent together")
        return self


class SavedPlanResponse(BaseModel):
    id: str
    name: str
    config: BettingConfig
    plan: List[DayResult]
    savedAt: datetime


class SavedPlansResponse(BaseModel):
    """Schema for the saved plans list."""
    plans: List[SavedPlanResponse]
