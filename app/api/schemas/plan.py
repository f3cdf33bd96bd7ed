"""Pydantic schemas for plan endpoints."""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from app.core.constants import BETTING_LIMITS, DATE_FORMAT

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class BettingConfig(BaseModel):
    """Staking strategy a plan is generated from."""
    initialBudget: float = Field(..., ge=BETTING_LIMITS["MIN_INITIAL_BUDGET"])
    odds: float = Field(..., ge=BETTING_LIMITS["MIN_ODDS"], le=BETTING_LIMITS["MAX_ODDS"])
    reinvestmentPercentage: float = Field(
        ..., ge=BETTING_LIMITS["MIN_REINVESTMENT"], le=BETTING_LIMITS["MAX_REINVESTMENT"]
    )
    betsPerDay: int = Field(
        ..., ge=BETTING_LIMITS["MIN_BETS_PER_DAY"], le=BETTING_LIMITS["MAX_BETS_PER_DAY"]
    )
    stakePercentage: float = Field(
        ..., ge=BETTING_LIMITS["MIN_STAKE_PERCENTAGE"], le=BETTING_LIMITS["MAX_STAKE_PERCENTAGE"]
    )
    startDate: str = Field(..., pattern=ISO_DATE_PATTERN)  # YYYY-MM-DD
    endDate: str = Field(..., pattern=ISO_DATE_PATTERN)

    @model_validator(mode="after")
    def check_date_range(self):
        try:
            start = datetime.strptime(self.startDate, DATE_FORMAT).date()
            end = datetime.strptime(self.endDate, DATE_FORMAT).date()
        except ValueError:
            raise ValueError("startDate and endDate must be valid calendar dates")
        if end < start:
            raise ValueError("endDate must not be before startDate")
        return self


class IndividualBet(BaseModel):
    """A single wager within a day."""
    id: str
    stakePercentage: float
    stake: float
    odds: float
    potentialWin: float
    result: Optional[Literal["win", "lose"]] = None


class DayResult(BaseModel):
    """One calendar day of a plan."""
    day: int = Field(..., ge=1)
    date: str
    bets: List[IndividualBet]
    currentBalance: float
    totalStake: float
    totalPotentialWin: float
    balanceAfterDay: float
    result: Optional[Literal["completed"]] = None


class PlanState(BaseModel):
    """Schema for the stored state of an owner (GET /plan and every mutation)."""
    config: Optional[BettingConfig] = None
    plan: List[DayResult] = []
    currentBalance: float = 0.0


class BetUpdate(BaseModel):
    """
    Partial update of a bet.

    Fields that are not sent are left unchanged; sending "result": null
    clears a recorded outcome.
    """
    stakePercentage: Optional[float] = Field(
        None, ge=BETTING_LIMITS["MIN_STAKE_PERCENTAGE"], le=BETTING_LIMITS["MAX_STAKE_PERCENTAGE"]
    )
    odds: Optional[float] = Field(None, ge=BETTING_LIMITS["MIN_ODDS"], le=BETTING_LIMITS["MAX_ODDS"])
    result: Optional[Literal["win", "lose"]] = None


class BankrollAddition(BaseModel):
    amount: float = Field(..., gt=0)


class StreakInfo(BaseModel):
    currentStreak: int
    type: Literal["win", "lose", "none"]
    longestWinStreak: int
    longestLoseStreak: int
    totalWins: int
    totalLosses: int


class PlanStats(BaseModel):
    totalDays: int
    completedDays: int
    pendingDays: int
    winRate: float  # As percentage
    roi: float  # As percentage
    totalProfit: float
    totalBets: int
    wonBets: int
    lostBets: int
    averageOdds: float


class BankrollAlert(BaseModel):
    isAlert: bool
    percentageRemaining: float
    amountRemaining: float


class GoalProgress(BaseModel):
    progress: float  # As percentage, capped at 100
    remaining: float
    achieved: bool


class PlanStatsResponse(BaseModel):
    """Schema for the GET /plan/stats response (goalProgress only when a goal is given)."""
    stats: PlanStats
    streaks: StreakInfo
    bankrollAlert: BankrollAlert
    currentBalance: float
    goalProgress: Optional[GoalProgress] = None


class OddsHistoryEntry(BaseModel):
    id: str
    date: str
    odds: float
    stake: float
    result: Literal["win", "lose"]
    profit: float
