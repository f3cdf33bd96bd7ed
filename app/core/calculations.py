"""Core bankroll calculations - must match frontend calculations exactly."""

from typing import Dict, List

from app.core.constants import RESULT_LOSE, RESULT_WIN


def calculate_stake(balance: float, stake_percentage: float) -> float:
    """
    Calculate the amount risked on a bet.

    Args:
        balance: Balance available at the start of the day
        stake_percentage: Percentage of the balance to risk (0 to 100)

    Returns:
        Stake in currency units
    """
    return (balance * stake_percentage) / 100


def calculate_potential_win(stake: float, odds: float) -> float:
    """
    Calculate the gross return of a bet if it wins.

    Args:
        stake: Amount wagered
        odds: Decimal odds (e.g., 1.6, 2.0)

    Returns:
        Stake multiplied by odds (stake included)
    """
    return stake * odds


def calculate_bet_profit(bet: Dict) -> float:
    """
    Calculate the resolved profit of a single bet.

    A winning bet returns its potential win minus the stake, a losing bet
    loses its stake and an unresolved bet contributes nothing.
    """
    result = bet.get("result")
    if result == RESULT_WIN:
        return bet["potentialWin"] - bet["stake"]
    if result == RESULT_LOSE:
        return -bet["stake"]
    return 0.0


def calculate_projected_profit(total_potential_win: float, total_stake: float) -> float:
    """Profit of a day assuming every bet wins."""
    return total_potential_win - total_stake


def calculate_resolved_profit(bets: List[Dict]) -> float:
    """Sum of the resolved profit of every bet of a day."""
    return sum(calculate_bet_profit(bet) for bet in bets)


def calculate_balance_after_day(
    current_balance: float,
    profit: float,
    reinvestment_percentage: float,
) -> float:
    """
    Calculate the balance carried into the next day.

    Only the reinvested share of the profit compounds; the rest is kept aside.

    Args:
        current_balance: Balance at the start of the day
        profit: Net profit of the day (negative for a losing day)
        reinvestment_percentage: Share of the profit folded back (0 to 100)

    Returns:
        Balance available at the start of the next day
    """
    return current_balance + (profit * reinvestment_percentage) / 100
