"""CLI commands for Stakeplan backend management."""

import asyncio
import argparse
import json
import logging
from datetime import date, timedelta
import sys

from app.core.logging import LOG_FORMAT

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
)
logger = logging.getLogger(__name__)

OUTCOME_CODES = {"W": "win", "L": "lose"}


def init_db():
    """Initialize database and run migrations."""
    from alembic.config import Config
    from alembic import command

    logger.info("Initializing database...")

    alembic_cfg = Config("alembic.ini")
    command.upgrade(alembic_cfg, "head")

    logger.info("Database initialized successfully")


def apply_outcomes(plan, config, outcomes: str):
    """
    Record outcomes on the first bet of successive days.

    Args:
        plan: Plan to update
        config: BettingConfig dict
        outcomes: One character per day, W (win), L (lose) or - (skip)

    Returns:
        The recalculated plan
    """
    from app.core.plan_engine import update_bet

    for day_index, code in enumerate(outcomes.upper()):
        if day_index >= len(plan):
            logger.warning(f"Ignoring outcomes past day {len(plan)}")
            break
        if code not in OUTCOME_CODES:
            continue
        bets = plan[day_index]["bets"]
        if not bets:
            continue
        plan = update_bet(plan, day_index, bets[0]["id"], {"result": OUTCOME_CODES[code]}, config)
    return plan


def format_plan_table(plan) -> str:
    lines = [
        f"{'Day':>4}  {'Date':<10}  {'Bets':>4}  {'Balance':>12}  {'Stake':>10}  "
        f"{'Pot. win':>10}  {'After day':>12}  Status"
    ]
    for day in plan:
        results = "".join(
            {"win": "W", "lose": "L"}.get(b.get("result"), ".") for b in day["bets"]
        )
        status = day.get("result") or "pending"
        lines.append(
            f"{day['day']:>4}  {day['date']:<10}  {len(day['bets']):>4}  "
            f"{day['currentBalance']:>12.2f}  {day['totalStake']:>10.2f}  "
            f"{day['totalPotentialWin']:>10.2f}  {day['balanceAfterDay']:>12.2f}  "
            f"{status} {results}"
        )
    return "\n".join(lines)


def project_plan(args):
    """Project a plan offline and print it."""
    from app.core.plan_engine import generate_plan
    from app.core.analytics import calculate_plan_stats

    start = args.start or date.today().isoformat()
    end = args.end or (date.fromisoformat(start) + timedelta(days=args.days - 1)).isoformat()

    config = {
        "initialBudget": args.budget,
        "odds": args.odds,
        "reinvestmentPercentage": args.reinvest,
        "betsPerDay": args.bets_per_day,
        "stakePercentage": args.stake,
        "startDate": start,
        "endDate": end,
    }

    plan = generate_plan(config, config["initialBudget"])
    if args.outcomes:
        plan = apply_outcomes(plan, config, args.outcomes)

    if args.json:
        print(json.dumps({"config": config, "plan": plan}, indent=2))
        return

    print(format_plan_table(plan))
    stats = calculate_plan_stats(plan, config)
    if plan:
        logger.info(
            f"{stats['totalDays']} days, {stats['completedDays']} completed. "
            f"Projected final balance: {plan[-1]['balanceAfterDay']:.2f}"
        )


async def show_plan(owner_id: str):
    """Print the stored plan of an owner."""
    from app.db.database import async_session_factory
    from app.services.plan_service import PlanService

    async with async_session_factory() as session:
        state = await PlanService(session).get_state(owner_id)

    if not state["config"]:
        logger.info(f"No active plan for {owner_id}")
        return

    print(format_plan_table(state["plan"]))
    logger.info(f"Current balance for {owner_id}: {state['currentBalance']:.2f}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Stakeplan Backend CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init-db command
    subparsers.add_parser("init-db", help="Initialize database and run migrations")

    # project command
    project_parser = subparsers.add_parser("project", help="Project a plan without storing it")
    project_parser.add_argument("--budget", type=float, default=25.0, help="Initial budget")
    project_parser.add_argument("--odds", type=float, default=1.6, help="Decimal odds per bet")
    project_parser.add_argument("--stake", type=float, default=10.0, help="Stake percentage per bet")
    project_parser.add_argument(
        "--reinvest", type=float, default=50.0, help="Percentage of daily profit reinvested"
    )
    project_parser.add_argument("--bets-per-day", type=int, default=1, help="Bets per day")
    project_parser.add_argument(
        "--start", type=str, default=None, help="Start date (YYYY-MM-DD, default: today)"
    )
    project_parser.add_argument(
        "--end", type=str, default=None, help="End date (YYYY-MM-DD, default: start + days - 1)"
    )
    project_parser.add_argument("--days", type=int, default=30, help="Plan length when --end is omitted")
    project_parser.add_argument(
        "--outcomes", type=str, default=None,
        help="Outcomes of the first bet per day, e.g. WWL-W (- leaves a day pending)"
    )
    project_parser.add_argument("--json", action="store_true", help="Print the plan as JSON")

    # show command
    show_parser = subparsers.add_parser("show", help="Show the stored plan of an owner")
    show_parser.add_argument("--owner", required=True, help="Owner id")

    args = parser.parse_args()

    if args.command == "init-db":
        init_db()
    elif args.command == "project":
        project_plan(args)
    elif args.command == "show":
        asyncio.run(show_plan(args.owner))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
