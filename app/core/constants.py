"""Constants for the Stakeplan platform."""

# Bet outcomes
RESULT_WIN = "win"
RESULT_LOSE = "lose"

# Day status once every bet of the day has an outcome
DAY_COMPLETED = "completed"

# Input limits enforced by the API schemas (the engine itself never checks them)
BETTING_LIMITS = {
    "MIN_ODDS": 1.01,
    "MAX_ODDS": 100,
    "MIN_STAKE_PERCENTAGE": 1,
    "MAX_STAKE_PERCENTAGE": 100,
    "MIN_REINVESTMENT": 0,
    "MAX_REINVESTMENT": 100,
    "MIN_BETS_PER_DAY": 1,
    "MAX_BETS_PER_DAY": 10,
    "MIN_INITIAL_BUDGET": 0.01,
}

# Default strategy offered to new users
DEFAULT_CONFIG = {
    "INITIAL_BUDGET": 25.0,
    "ODDS": 1.6,
    "REINVESTMENT_PERCENTAGE": 50.0,
    "BETS_PER_DAY": 1,
    "STAKE_PERCENTAGE": 10.0,
    "PLAN_DAYS": 30,
}

# Smallest stake percentage the add-bet helper will propose
MIN_PROPOSED_STAKE_PERCENTAGE = 1

# Date format used for plan dates
DATE_FORMAT = "%Y-%m-%d"

# Saved plan name length
MAX_PLAN_NAME_LENGTH = 100
