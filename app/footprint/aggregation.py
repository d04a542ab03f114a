"""Aggregation & ranking — monthly totals, category breakdowns, rank, dashboard.

Everything is recomputed from stored activities on each call; no caches.
Month boundaries come from the server's local calendar (`date.today()`),
not the user's time zone. Persistence errors propagate to the caller.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.footprint import connector, features
from app.footprint.models import (
    AchievementOut,
    CategoryBreakdown,
    ChartData,
    Dashboard,
    GoalOut,
    LeaderboardEntry,
    UserOut,
)
from app.footprint.tables import Goal
from app.footprint.tips import personalized_tips

logger = logging.getLogger(__name__)

# Goal type → how progress is measured against target_value
GOAL_TARGET_TYPES = {
    "monthly_target": "maximum",  # stay under target kg CO2e
    "weekly_reduction": "minimum",  # reach at least target % reduction
}


def _today(today: date | None) -> date:
    return today or date.today()


async def emissions_this_month(session: AsyncSession, user_id: str, today: date | None = None) -> float:
    start, end = features.month_bounds(_today(today))
    return await connector.sum_total_emissions(session, user_id, start, end)


async def emissions_last_month(session: AsyncSession, user_id: str, today: date | None = None) -> float:
    start, end = features.previous_month_bounds(_today(today))
    return await connector.sum_total_emissions(session, user_id, start, end)


async def emissions_by_category(
    session: AsyncSession,
    user_id: str,
    days: int | None = None,
    today: date | None = None,
) -> dict[str, float]:
    """Category sums over the trailing `days` window (default from settings)."""
    window = days if days is not None else settings.category_window_days
    since = features.trailing_window_start(_today(today), window)
    return await connector.sum_emissions_by_category(session, user_id, since)


async def user_rank(session: AsyncSession, user_id: str, today: date | None = None) -> int | None:
    """1-based rank by current-month total, lowest first.

    Returns None when the user has no activity this month.
    """
    start, end = features.month_bounds(_today(today))
    totals = dict(await connector.fetch_monthly_totals(session, start, end))
    if user_id not in totals:
        return None
    user_total = totals.pop(user_id)
    return features.rank_among(user_total, totals.values())


async def leaderboard(
    session: AsyncSession,
    limit: int | None = None,
    today: date | None = None,
) -> list[LeaderboardEntry]:
    """Current-month leaderboard, lowest emissions first, capped at `limit`."""
    cap = limit if limit is not None else settings.default_leaderboard_limit
    start, end = features.month_bounds(_today(today))
    totals = await connector.fetch_monthly_totals(session, start, end)
    ranked = features.rank_leaderboard(totals, cap)

    users = await connector.fetch_users(session, [user_id for user_id, _, _ in ranked])
    entries: list[LeaderboardEntry] = []
    for user_id, total, rank in ranked:
        user = users.get(user_id)
        user_out = UserOut.model_validate(user) if user is not None else UserOut(id=user_id)
        entries.append(LeaderboardEntry(user=user_out, total_emissions=features.round2(total), rank=rank))
    return entries


def goal_with_progress(goal: Goal) -> GoalOut:
    """Attach progress % and status to a stored goal (read-only)."""
    out = GoalOut.model_validate(goal)
    target_type = GOAL_TARGET_TYPES.get(goal.type)
    if target_type is not None:
        pct = features.goal_progress_pct(goal.current_value or 0.0, goal.target_value, target_type)
        out.progress_pct = round(pct, 1) if pct is not None else None
        out.status = features.goal_status(pct)
    return out


async def build_dashboard(session: AsyncSession, user_id: str, today: date | None = None) -> Dashboard:
    today = _today(today)
    window = settings.dashboard_window_days

    this_month = await emissions_this_month(session, user_id, today)
    last_month = await emissions_last_month(session, user_id, today)
    by_category = await emissions_by_category(session, user_id, window, today)
    rank = await user_rank(session, user_id, today)

    recent = await connector.fetch_activities_in_range(
        session, user_id, today - timedelta(days=window - 1), today
    )
    goals = await connector.fetch_goals(session, user_id)
    achievements = await connector.fetch_achievements(session, user_id)

    breakdown = CategoryBreakdown(**{cat: features.round2(v) for cat, v in by_category.items()})
    days_logged = len({a.date for a in recent}) or 1
    daily_average = sum(features.sum_categories(recent).values()) / days_logged

    logger.debug(
        "dashboard user=%s this_month=%.2f last_month=%.2f rank=%s",
        user_id, this_month, last_month, rank,
    )

    return Dashboard(
        total_emissions_this_month=features.round2(this_month),
        total_emissions_last_month=features.round2(last_month),
        reduction_percentage=features.reduction_percentage(this_month, last_month),
        rank=rank,
        emission_level=features.emission_level(daily_average),
        emissions_by_category=breakdown,
        goals=[goal_with_progress(g) for g in goals],
        achievements=[
            AchievementOut.model_validate(a) for a in achievements[: settings.dashboard_achievements]
        ],
        personalized_tips=personalized_tips(by_category, settings.max_tips),
        chart_data=ChartData(**features.daily_trend(recent, today, window)),
    )
