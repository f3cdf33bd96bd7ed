"""
Plan projection and recalculation engine.

Every function here is pure: it takes plan values (lists of day dicts with
camelCase keys, exactly as they are stored as JSON) and returns new values.
Callers own the state and always pass the previously returned plan into the
next operation.
"""

import uuid
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple

from app.core.calculations import (
    calculate_balance_after_day,
    calculate_potential_win,
    calculate_projected_profit,
    calculate_resolved_profit,
    calculate_stake,
)
from app.core.constants import (
    DATE_FORMAT,
    DAY_COMPLETED,
    DEFAULT_CONFIG,
    MIN_PROPOSED_STAKE_PERCENTAGE,
)


def parse_plan_date(value: str) -> date:
    """Parse a plan date string. e.g., '2024-01-31' -> date(2024, 1, 31)"""
    return datetime.strptime(value[:10], DATE_FORMAT).date()


def make_bet_id() -> str:
    return str(uuid.uuid4())


def _build_bet(bet_id: str, balance: float, stake_percentage: float, odds: float) -> Dict:
    stake = calculate_stake(balance, stake_percentage)
    return {
        "id": bet_id,
        "stakePercentage": stake_percentage,
        "stake": stake,
        "odds": odds,
        "potentialWin": calculate_potential_win(stake, odds),
        "result": None,
    }


def _clone_plan(plan: List[Dict]) -> List[Dict]:
    """Copy every day and every bet so the caller's plan is never touched."""
    return [
        {**day, "bets": [dict(bet) for bet in (day.get("bets") or [])]}
        for day in plan
    ]


def _is_day_completed(bets: List[Dict]) -> bool:
    return len(bets) > 0 and all(bet.get("result") is not None for bet in bets)


def _has_day(plan: List[Dict], day_index: int) -> bool:
    return 0 <= day_index < len(plan)


def generate_plan(config: Dict, start_balance: float) -> List[Dict]:
    """
    Generate a full plan from a betting configuration.

    Every day is projected optimistically (all bets win) and the balance is
    chained from one day to the next.

    Args:
        config: BettingConfig dict
        start_balance: Balance of day 1, normally config["initialBudget"]

    Returns:
        List of DayResult dicts, one per calendar day of the inclusive range
    """
    plan = []
    current_balance = start_balance
    start_date = parse_plan_date(config["startDate"])
    end_date = parse_plan_date(config["endDate"])
    days_diff = (end_date - start_date).days + 1

    for day in range(1, days_diff + 1):
        current_date = start_date + timedelta(days=day - 1)

        bets = [
            _build_bet(f"{day}-{i}", current_balance, config["stakePercentage"], config["odds"])
            for i in range(config["betsPerDay"])
        ]

        total_stake = sum(b["stake"] for b in bets)
        total_potential_win = sum(b["potentialWin"] for b in bets)
        balance_after_day = calculate_balance_after_day(
            current_balance,
            calculate_projected_profit(total_potential_win, total_stake),
            config["reinvestmentPercentage"],
        )

        plan.append({
            "day": day,
            "date": current_date.strftime(DATE_FORMAT),
            "bets": bets,
            "currentBalance": current_balance,
            "totalStake": total_stake,
            "totalPotentialWin": total_potential_win,
            "balanceAfterDay": balance_after_day,
            "result": None,
        })

        current_balance = balance_after_day

    return plan


def recalc_plan_from(plan: List[Dict], from_index: int, config: Dict) -> List[Dict]:
    """
    Recalculate a plan from a given day to the end.

    Days before from_index are copied as they are. From from_index onward each
    day takes the previous day's balanceAfterDay, re-derives the stake and
    potential win of every bet (keeping stake percentage, odds and result) and
    switches to the resolved-profit formula only once all of its bets have a
    result.

    Args:
        plan: Current plan
        from_index: 0-based index of the first day to recompute
        config: BettingConfig dict (only reinvestmentPercentage is read)

    Returns:
        A new plan; the input plan is left untouched
    """
    result = _clone_plan(plan)
    if not result:
        return result

    from_index = max(0, from_index)
    if from_index >= len(result):
        return result

    if from_index > 0:
        running_balance = result[from_index - 1]["balanceAfterDay"]
    else:
        running_balance = result[0]["currentBalance"]

    for day in result[from_index:]:
        day["currentBalance"] = running_balance

        for bet in day["bets"]:
            bet["stake"] = calculate_stake(running_balance, bet["stakePercentage"])
            bet["potentialWin"] = calculate_potential_win(bet["stake"], bet["odds"])

        day["totalStake"] = sum(b["stake"] for b in day["bets"])
        day["totalPotentialWin"] = sum(b["potentialWin"] for b in day["bets"])

        if _is_day_completed(day["bets"]):
            profit = calculate_resolved_profit(day["bets"])
            day["result"] = DAY_COMPLETED
        else:
            profit = calculate_projected_profit(day["totalPotentialWin"], day["totalStake"])
            day["result"] = None

        day["balanceAfterDay"] = calculate_balance_after_day(
            running_balance, profit, config["reinvestmentPercentage"]
        )
        running_balance = day["balanceAfterDay"]

    return result


def propose_stake_percentage(day: Dict, config: Dict) -> float:
    """
    Stake percentage for a bet added to a day.

    Uses the configured stake, capped to the headroom left out of 100% by the
    bets already on the day, and never below 1%.
    """
    used = sum(b.get("stakePercentage") or 0 for b in (day.get("bets") or []))
    headroom = max(MIN_PROPOSED_STAKE_PERCENTAGE, 100 - used)
    return min(config["stakePercentage"], headroom)


def add_bet_to_day(plan: List[Dict], day_index: int, config: Dict) -> List[Dict]:
    """Append a new pending bet to a day and recalculate from that day."""
    if not _has_day(plan, day_index):
        return plan

    result = _clone_plan(plan)
    day = result[day_index]
    bet = _build_bet(
        make_bet_id(),
        day["currentBalance"],
        propose_stake_percentage(day, config),
        config["odds"],
    )
    day["bets"] = day["bets"] + [bet]

    return recalc_plan_from(result, day_index, config)


def remove_bet_from_day(
    plan: List[Dict],
    day_index: int,
    bet_id: str,
    config: Dict,
) -> List[Dict]:
    """Remove a bet from a day and recalculate from that day."""
    if not _has_day(plan, day_index):
        return plan

    bets = plan[day_index].get("bets") or []
    if not any(b["id"] == bet_id for b in bets):
        return plan

    result = _clone_plan(plan)
    day = result[day_index]
    day["bets"] = [b for b in day["bets"] if b["id"] != bet_id]

    return recalc_plan_from(result, day_index, config)


def update_bet(
    plan: List[Dict],
    day_index: int,
    bet_id: str,
    updates: Dict,
    config: Dict,
) -> List[Dict]:
    """
    Update a bet's stake percentage, odds and/or result, then recalculate.

    Only keys present in updates are applied. A None stakePercentage or odds
    leaves the value unchanged, while a None result explicitly clears it.
    """
    if not _has_day(plan, day_index):
        return plan

    bets = plan[day_index].get("bets") or []
    if not any(b["id"] == bet_id for b in bets):
        return plan

    result = _clone_plan(plan)
    day = result[day_index]

    for bet in day["bets"]:
        if bet["id"] != bet_id:
            continue

        if updates.get("stakePercentage") is not None:
            bet["stakePercentage"] = updates["stakePercentage"]
        if updates.get("odds") is not None:
            bet["odds"] = updates["odds"]
        if "result" in updates:
            bet["result"] = updates["result"]

        bet["stake"] = calculate_stake(day["currentBalance"], bet["stakePercentage"])
        bet["potentialWin"] = calculate_potential_win(bet["stake"], bet["odds"])

    return recalc_plan_from(result, day_index, config)


def add_bankroll(
    config: Dict,
    plan: List[Dict],
    current_balance: float,
    amount: float,
) -> Tuple[Dict, List[Dict], float]:
    """
    Inject money into the bankroll.

    The new initial budget is current_balance + amount and the whole plan is
    regenerated from it, discarding every recorded result.

    Returns:
        (new_config, new_plan, new_balance); a non-positive amount returns
        the inputs unchanged
    """
    if amount <= 0:
        return config, plan, current_balance

    new_budget = current_balance + amount
    new_config = {**config, "initialBudget": new_budget}
    return new_config, generate_plan(new_config, new_budget), new_budget


def derive_current_balance(plan: List[Dict], config: Optional[Dict]) -> float:
    """Balance after the last completed day, or the initial budget."""
    for day in reversed(plan or []):
        if day.get("result") == DAY_COMPLETED:
            return day["balanceAfterDay"]
    if not config:
        return 0.0
    return config["initialBudget"]


def default_config(today: Optional[date] = None) -> Dict:
    """Default betting configuration starting today."""
    today = today or date.today()
    end_date = today + timedelta(days=DEFAULT_CONFIG["PLAN_DAYS"] - 1)
    return {
        "initialBudget": DEFAULT_CONFIG["INITIAL_BUDGET"],
        "odds": DEFAULT_CONFIG["ODDS"],
        "reinvestmentPercentage": DEFAULT_CONFIG["REINVESTMENT_PERCENTAGE"],
        "betsPerDay": DEFAULT_CONFIG["BETS_PER_DAY"],
        "stakePercentage": DEFAULT_CONFIG["STAKE_PERCENTAGE"],
        "startDate": today.strftime(DATE_FORMAT),
        "endDate": end_date.strftime(DATE_FORMAT),
    }
