"""Footprint HTTP router — activities, dashboard, leaderboard, goals."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import current_user_id
from app.config import settings
from app.db import get_session
from app.footprint import aggregation, connector
from app.footprint.calculator import calculate_emissions
from app.footprint.factors import DEFAULT_FACTORS
from app.footprint.features import format_emissions
from app.footprint.models import (
    AchievementOut,
    ActivityCreate,
    ActivityOut,
    Dashboard,
    EmissionBreakdown,
    GoalCreate,
    GoalOut,
    GoalUpdate,
    LeaderboardEntry,
    LogActivityResponse,
    UserOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["footprint"])


def _failed(what: str, user_id: str | None = None) -> HTTPException:
    logger.exception("Failed to %s (user=%s)", what, user_id)
    return HTTPException(status_code=500, detail=f"Failed to {what}")


# ---------------------------------------------------------------------------
# /api/auth/user
# ---------------------------------------------------------------------------


@router.get("/auth/user", response_model=UserOut)
async def get_current_user(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
) -> UserOut:
    try:
        user = await connector.get_user(session, user_id)
    except SQLAlchemyError:
        raise _failed("fetch user", user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(user)


# ---------------------------------------------------------------------------
# /api/activities
# ---------------------------------------------------------------------------


@router.post("/activities", response_model=LogActivityResponse)
async def log_activity(
    body: ActivityCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
) -> LogActivityResponse:
    emissions = calculate_emissions(body, DEFAULT_FACTORS)
    try:
        await connector.upsert_user(session, user_id)
        activity = await connector.insert_activity(session, user_id, body, emissions)
    except SQLAlchemyError:
        raise _failed("log activity", user_id)

    logger.info(
        "Logged activity user=%s date=%s total=%s",
        user_id, body.date, format_emissions(emissions.total_emissions),
    )
    return LogActivityResponse(activity=ActivityOut.model_validate(activity), emissions=emissions)


@router.get("/activities", response_model=list[ActivityOut])
async def list_activities(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
    limit: int = Query(default=None, ge=1, le=365, description="Max records (default 30)"),
) -> list[ActivityOut]:
    try:
        rows = await connector.fetch_user_activities(
            session, user_id, limit or settings.default_activity_limit
        )
    except SQLAlchemyError:
        raise _failed("fetch activities", user_id)
    return [ActivityOut.model_validate(r) for r in rows]


@router.post("/calculate", response_model=EmissionBreakdown)
async def preview_emissions(
    body: ActivityCreate,
    _: str = Depends(current_user_id),
) -> EmissionBreakdown:
    """Emission breakdown for a body without storing it."""
    return calculate_emissions(body, DEFAULT_FACTORS)


@router.get("/factors")
async def emission_factors() -> dict:
    return DEFAULT_FACTORS.as_dict()


# ---------------------------------------------------------------------------
# /api/dashboard, /api/leaderboard
# ---------------------------------------------------------------------------


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
) -> Dashboard:
    try:
        return await aggregation.build_dashboard(session, user_id)
    except SQLAlchemyError:
        raise _failed("fetch dashboard data", user_id)


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    session: AsyncSession = Depends(get_session),
    _: str = Depends(current_user_id),
    limit: int = Query(default=None, ge=1, le=100, description="Max entries (default 10)"),
) -> list[LeaderboardEntry]:
    try:
        return await aggregation.leaderboard(session, limit)
    except SQLAlchemyError:
        raise _failed("fetch leaderboard")


# ---------------------------------------------------------------------------
# /api/goals, /api/achievements
# ---------------------------------------------------------------------------


@router.post("/goals", response_model=GoalOut)
async def create_goal(
    body: GoalCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
) -> GoalOut:
    try:
        await connector.upsert_user(session, user_id)
        goal = await connector.create_goal(session, user_id, body)
    except SQLAlchemyError:
        raise _failed("create goal", user_id)
    return aggregation.goal_with_progress(goal)


@router.get("/goals", response_model=list[GoalOut])
async def list_goals(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
) -> list[GoalOut]:
    try:
        goals = await connector.fetch_goals(session, user_id)
    except SQLAlchemyError:
        raise _failed("fetch goals", user_id)
    return [aggregation.goal_with_progress(g) for g in goals]


@router.patch("/goals/{goal_id}", response_model=GoalOut)
async def update_goal(
    goal_id: int,
    body: GoalUpdate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
) -> GoalOut:
    try:
        goal = await connector.update_goal(session, goal_id, user_id=user_id, **body.changes())
    except SQLAlchemyError:
        raise _failed("update goal", user_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return aggregation.goal_with_progress(goal)


@router.get("/achievements", response_model=list[AchievementOut])
async def list_achievements(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(current_user_id),
) -> list[AchievementOut]:
    try:
        rows = await connector.fetch_achievements(session, user_id)
    except SQLAlchemyError:
        raise _failed("fetch achievements", user_id)
    return [AchievementOut.model_validate(a) for a in rows]
