"""Statistics computed from a plan - must match frontend calculations exactly."""

from typing import Dict, List, Optional

from app.core.constants import DAY_COMPLETED, RESULT_LOSE, RESULT_WIN
from app.core.calculations import calculate_bet_profit


def _completed_days(plan: List[Dict]) -> List[Dict]:
    return [d for d in plan if d.get("result") == DAY_COMPLETED]


def _is_win_day(day: Dict) -> bool:
    return day["balanceAfterDay"] - day["currentBalance"] > 0


def calculate_streaks(plan: List[Dict]) -> Dict:
    """
    Calculate current and longest streaks over completed days.

    A completed day counts as a win when it ended above its starting balance,
    otherwise as a loss.

    Returns:
        Dictionary with currentStreak, type, longestWinStreak,
        longestLoseStreak, totalWins and totalLosses
    """
    completed = sorted(_completed_days(plan), key=lambda d: d["day"])

    if not completed:
        return {
            "currentStreak": 0,
            "type": "none",
            "longestWinStreak": 0,
            "longestLoseStreak": 0,
            "totalWins": 0,
            "totalLosses": 0,
        }

    longest_win = 0
    longest_lose = 0
    win_run = 0
    lose_run = 0
    total_wins = 0
    total_losses = 0

    for day in completed:
        if _is_win_day(day):
            total_wins += 1
            win_run += 1
            lose_run = 0
            longest_win = max(longest_win, win_run)
        else:
            total_losses += 1
            lose_run += 1
            win_run = 0
            longest_lose = max(longest_lose, lose_run)

    # Walk back from the most recent completed day
    last_won = _is_win_day(completed[-1])
    current_streak = 0
    for day in reversed(completed):
        if _is_win_day(day) != last_won:
            break
        current_streak += 1

    return {
        "currentStreak": current_streak,
        "type": RESULT_WIN if last_won else RESULT_LOSE,
        "longestWinStreak": longest_win,
        "longestLoseStreak": longest_lose,
        "totalWins": total_wins,
        "totalLosses": total_losses,
    }


def calculate_plan_stats(plan: List[Dict], config: Dict) -> Dict:
    """
    Calculate summary statistics for a plan.

    Bet counts and average odds only consider completed days. Profit and ROI
    are measured from the initial budget to the balance after the last
    completed day.
    """
    completed = _completed_days(plan)
    pending = [d for d in plan if d.get("result") is None]

    total_bets = 0
    won_bets = 0
    lost_bets = 0
    odds_values = []

    for day in completed:
        for bet in day.get("bets") or []:
            total_bets += 1
            if bet.get("result") == RESULT_WIN:
                won_bets += 1
            elif bet.get("result") == RESULT_LOSE:
                lost_bets += 1
            if bet.get("odds"):
                odds_values.append(bet["odds"])

    initial_budget = config["initialBudget"]
    balance = completed[-1]["balanceAfterDay"] if completed else initial_budget
    total_profit = balance - initial_budget

    return {
        "totalDays": len(plan),
        "completedDays": len(completed),
        "pendingDays": len(pending),
        "winRate": (won_bets / total_bets * 100) if total_bets > 0 else 0.0,
        "roi": (total_profit / initial_budget * 100) if initial_budget > 0 else 0.0,
        "totalProfit": total_profit,
        "totalBets": total_bets,
        "wonBets": won_bets,
        "lostBets": lost_bets,
        "averageOdds": (sum(odds_values) / len(odds_values)) if odds_values else 0.0,
    }


def build_odds_history(plan: List[Dict]) -> List[Dict]:
    """List every resolved bet with its profit, most recent date first."""
    history = []

    for day in plan:
        for bet in day.get("bets") or []:
            if bet.get("result") is None:
                continue
            history.append({
                "id": bet["id"],
                "date": day["date"],
                "odds": bet.get("odds") or 0,
                "stake": bet.get("stake") or 0,
                "result": bet["result"],
                "profit": calculate_bet_profit(bet),
            })

    # ISO dates sort lexically; the sort is stable so same-day bets keep order
    return sorted(history, key=lambda h: h["date"], reverse=True)


def calculate_parlay_odds(odds: List[float]) -> float:
    """Combined decimal odds of a parlay (0 for an empty parlay)."""
    if not odds:
        return 0.0
    combined = 1.0
    for o in odds:
        combined *= o
    return combined


def calculate_parlay_potential_win(stake: float, odds: List[float]) -> Dict:
    combined_odds = calculate_parlay_odds(odds)
    potential_win = stake * combined_odds
    return {
        "combinedOdds": combined_odds,
        "potentialWin": potential_win,
        "profit": potential_win - stake,
    }


def check_bankroll_alert(
    current_balance: float,
    initial_budget: float,
    threshold_percentage: float = 20,
) -> Dict:
    """
    Check whether the balance has fallen to or below a share of the budget.

    Args:
        current_balance: Balance now
        initial_budget: Budget the plan started with
        threshold_percentage: Alert level as a percentage of the budget

    Returns:
        Dictionary with isAlert, percentageRemaining and amountRemaining
    """
    if initial_budget > 0:
        percentage_remaining = current_balance / initial_budget * 100
    else:
        percentage_remaining = 0.0

    return {
        "isAlert": percentage_remaining <= threshold_percentage,
        "percentageRemaining": percentage_remaining,
        "amountRemaining": current_balance,
    }


def calculate_goal_progress(
    current_balance: float,
    initial_budget: float,
    goal_amount: float,
) -> Dict:
    """Progress towards a profit goal, capped at 100%."""
    current_profit = current_balance - initial_budget
    progress = (current_profit / goal_amount * 100) if goal_amount > 0 else 0.0
    return {
        "progress": min(100.0, progress),
        "remaining": max(0.0, goal_amount - current_profit),
        "achieved": current_profit >= goal_amount,
    }


def _last_completed_balance(plan: List[Dict], config: Optional[Dict]) -> float:
    completed = _completed_days(plan)
    if completed:
        return completed[-1]["balanceAfterDay"]
    return config["initialBudget"] if config else 0.0


def compare_simulation(
    original_config: Optional[Dict],
    original_plan: List[Dict],
    simulated_config: Optional[Dict],
    simulated_plan: List[Dict],
) -> Optional[Dict]:
    """
    Compare a sandbox copy of a plan against the real one.

    Returns:
        Balances, profits and the difference between them, or None when
        either plan is empty
    """
    if not original_plan or not simulated_plan:
        return None

    original_balance = _last_completed_balance(original_plan, original_config)
    simulated_balance = _last_completed_balance(simulated_plan, simulated_config)

    original_profit = original_balance - (original_config["initialBudget"] if original_config else 0)
    simulated_profit = simulated_balance - (simulated_config["initialBudget"] if simulated_config else 0)
    difference = simulated_profit - original_profit

    if original_profit != 0:
        percentage_difference = difference / abs(original_profit) * 100
    elif simulated_profit > 0:
        percentage_difference = 100.0
    elif simulated_profit < 0:
        percentage_difference = -100.0
    else:
        percentage_difference = 0.0

    return {
        "originalBalance": original_balance,
        "simulatedBalance": simulated_balance,
        "originalProfit": original_profit,
        "simulatedProfit": simulated_profit,
        "difference": difference,
        "percentageDifference": percentage_difference,
    }
