import pytest

from app.core.analytics import (
    build_odds_history,
    calculate_goal_progress,
    calculate_parlay_odds,
    calculate_parlay_potential_win,
    calculate_plan_stats,
    calculate_streaks,
    check_bankroll_alert,
    compare_simulation,
)
from app.core.plan_engine import generate_plan, update_bet


def play(config, outcomes):
    """Generate a plan and record one outcome per day on its first bet."""
    plan = generate_plan(config, config["initialBudget"])
    for index, result in enumerate(outcomes):
        if result is None:
            continue
        plan = update_bet(plan, index, plan[index]["bets"][0]["id"], {"result": result}, config)
    return plan


def test_streaks_without_completed_days(make_config):
    config = make_config(endDate="2024-01-03")
    streaks = calculate_streaks(generate_plan(config, 100.0))

    assert streaks == {
        "currentStreak": 0,
        "type": "none",
        "longestWinStreak": 0,
        "longestLoseStreak": 0,
        "totalWins": 0,
        "totalLosses": 0,
    }


def test_streaks_ignore_pending_days(make_config):
    config = make_config(endDate="2024-01-05")
    plan = play(config, ["win", "win", "lose", "lose", None])

    streaks = calculate_streaks(plan)

    assert streaks["currentStreak"] == 2
    assert streaks["type"] == "lose"
    assert streaks["longestWinStreak"] == 2
    assert streaks["longestLoseStreak"] == 2
    assert streaks["totalWins"] == 2
    assert streaks["totalLosses"] == 2


def test_current_win_streak(make_config):
    config = make_config(endDate="2024-01-04")
    streaks = calculate_streaks(play(config, ["lose", "win", "win", "win"]))

    assert streaks["type"] == "win"
    assert streaks["currentStreak"] == 3
    assert streaks["longestWinStreak"] == 3
    assert streaks["longestLoseStreak"] == 1


def test_plan_stats(make_config):
    config = make_config(endDate="2024-01-03")
    plan = play(config, ["win", "lose"])

    stats = calculate_plan_stats(plan, config)

    assert stats["totalDays"] == 3
    assert stats["completedDays"] == 2
    assert stats["pendingDays"] == 1
    assert stats["totalBets"] == 2
    assert stats["wonBets"] == 1
    assert stats["lostBets"] == 1
    assert stats["winRate"] == pytest.approx(50.0)
    assert stats["averageOdds"] == pytest.approx(2.0)
    # 100 -> 110 -> 99
    assert stats["totalProfit"] == pytest.approx(-1.0)
    assert stats["roi"] == pytest.approx(-1.0)


def test_plan_stats_for_fresh_plan(make_config):
    config = make_config(endDate="2024-01-03")
    stats = calculate_plan_stats(generate_plan(config, 100.0), config)

    assert stats["completedDays"] == 0
    assert stats["winRate"] == 0.0
    assert stats["averageOdds"] == 0.0
    assert stats["totalProfit"] == 0.0
    assert stats["roi"] == 0.0


def test_odds_history_lists_resolved_bets_newest_first(make_config):
    config = make_config(endDate="2024-01-03")
    plan = play(config, ["win", None, "lose"])

    history = build_odds_history(plan)

    assert [h["date"] for h in history] == ["2024-01-03", "2024-01-01"]
    assert history[0]["result"] == "lose"
    assert history[0]["profit"] == pytest.approx(-history[0]["stake"])
    assert history[1]["id"] == "1-0"
    assert history[1]["profit"] == pytest.approx(10.0)


def test_parlay_odds():
    assert calculate_parlay_odds([]) == 0.0
    assert calculate_parlay_odds([2.0, 1.5]) == pytest.approx(3.0)


def test_parlay_potential_win():
    result = calculate_parlay_potential_win(10.0, [2.0, 1.5])

    assert result["combinedOdds"] == pytest.approx(3.0)
    assert result["potentialWin"] == pytest.approx(30.0)
    assert result["profit"] == pytest.approx(20.0)


@pytest.mark.parametrize(
    "balance, expected_alert, expected_pct",
    [
        (100.0, False, 100.0),
        (21.0, False, 21.0),
        (20.0, True, 20.0),
        (5.0, True, 5.0),
    ],
)
def test_bankroll_alert(balance, expected_alert, expected_pct):
    alert = check_bankroll_alert(balance, 100.0, 20)

    assert alert["isAlert"] is expected_alert
    assert alert["percentageRemaining"] == pytest.approx(expected_pct)
    assert alert["amountRemaining"] == balance


def test_bankroll_alert_with_zero_budget():
    alert = check_bankroll_alert(10.0, 0.0)
    assert alert["percentageRemaining"] == 0.0
    assert alert["isAlert"] is True


def test_goal_progress():
    assert calculate_goal_progress(150.0, 100.0, 100.0) == {
        "progress": 50.0,
        "remaining": 50.0,
        "achieved": False,
    }

    reached = calculate_goal_progress(250.0, 100.0, 100.0)
    assert reached["progress"] == 100.0
    assert reached["remaining"] == 0.0
    assert reached["achieved"] is True


def test_compare_simulation(make_config):
    config = make_config(endDate="2024-01-02")
    original = play(config, ["win"])
    simulated = play(config, ["lose"])

    comparison = compare_simulation(config, original, config, simulated)

    assert comparison["originalBalance"] == pytest.approx(110.0)
    assert comparison["simulatedBalance"] == pytest.approx(90.0)
    assert comparison["originalProfit"] == pytest.approx(10.0)
    assert comparison["simulatedProfit"] == pytest.approx(-10.0)
    assert comparison["difference"] == pytest.approx(-20.0)
    assert comparison["percentageDifference"] == pytest.approx(-200.0)


def test_compare_simulation_with_flat_original(make_config):
    config = make_config(endDate="2024-01-02")
    original = generate_plan(config, 100.0)
    simulated = play(config, ["win"])

    comparison = compare_simulation(config, original, config, simulated)

    assert comparison["originalProfit"] == 0.0
    assert comparison["percentageDifference"] == 100.0


def test_compare_simulation_needs_both_plans(make_config):
    config = make_config()
    plan = generate_plan(config, 100.0)

    assert compare_simulation(config, plan, None, []) is None
    assert compare_simulation(None, [], config, plan) is None
