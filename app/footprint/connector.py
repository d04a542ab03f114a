"""Database connector — async access to users, activities, goals and achievements.

Every function takes the request's AsyncSession. Query helpers return empty
results (or 0) when nothing matches; database errors propagate unchanged.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.footprint.models import ActivityCreate, EmissionBreakdown, GoalCreate
from app.footprint.tables import Achievement, Activity, Goal, User


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


async def get_user(session: AsyncSession, user_id: str) -> User | None:
    return await session.get(User, user_id)


async def upsert_user(session: AsyncSession, user_id: str, **profile: Any) -> User:
    """Insert the user if unknown, otherwise refresh the given profile fields.

    Two first requests for the same id may both try the insert; the loser
    rolls back, reloads the winner's row and applies its profile on top.
    """
    user = await session.get(User, user_id)
    if user is None:
        user = User(id=user_id, **profile)
        session.add(user)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            user = await session.get(User, user_id)
            if user is None:
                raise
            _apply_profile(user, profile)
            await session.commit()
    elif profile:
        _apply_profile(user, profile)
        await session.commit()
    await session.refresh(user)
    return user


def _apply_profile(user: User, profile: dict[str, Any]) -> None:
    if not profile:
        return
    for key, value in profile.items():
        setattr(user, key, value)
    user.updated_at = datetime.now(timezone.utc)


async def fetch_users(session: AsyncSession, user_ids: Sequence[str]) -> dict[str, User]:
    if not user_ids:
        return {}
    result = await session.execute(select(User).where(User.id.in_(list(user_ids))))
    return {u.id: u for u in result.scalars().all()}


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------


async def insert_activity(
    session: AsyncSession,
    user_id: str,
    data: ActivityCreate,
    emissions: EmissionBreakdown,
) -> Activity:
    """Store one activity with its precomputed emissions and return the row."""
    activity = Activity(
        user_id=user_id,
        date=data.date,
        transport_type=data.transport_type.value if data.transport_type else None,
        transport_distance=data.transport_distance,
        electricity_usage=data.electricity_usage,
        natural_gas_usage=data.natural_gas_usage,
        beef_servings=data.beef_servings,
        chicken_servings=data.chicken_servings,
        vegetable_servings=data.vegetable_servings,
        transport_emissions=emissions.transport_emissions,
        energy_emissions=emissions.energy_emissions,
        food_emissions=emissions.food_emissions,
        total_emissions=emissions.total_emissions,
    )
    session.add(activity)
    await session.commit()
    await session.refresh(activity)
    return activity


async def fetch_user_activities(
    session: AsyncSession,
    user_id: str,
    limit: int = 30,
) -> Sequence[Activity]:
    """Most recent activities first (by date, then insertion)."""
    stmt = (
        select(Activity)
        .where(Activity.user_id == user_id)
        .order_by(Activity.date.desc(), Activity.id.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def fetch_activities_in_range(
    session: AsyncSession,
    user_id: str,
    start: date,
    end: date,
) -> Sequence[Activity]:
    """Activities with start <= date <= end, newest first."""
    stmt = (
        select(Activity)
        .where(Activity.user_id == user_id, Activity.date >= start, Activity.date <= end)
        .order_by(Activity.date.desc(), Activity.id.desc())
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def sum_total_emissions(
    session: AsyncSession,
    user_id: str,
    start: date | None = None,
    end: date | None = None,
) -> float:
    """Sum of total_emissions for a user, optionally within [start, end]."""
    stmt = select(func.sum(Activity.total_emissions)).where(Activity.user_id == user_id)
    if start is not None:
        stmt = stmt.where(Activity.date >= start)
    if end is not None:
        stmt = stmt.where(Activity.date <= end)
    total = (await session.execute(stmt)).scalar()
    return float(total or 0.0)


async def sum_emissions_by_category(
    session: AsyncSession,
    user_id: str,
    since: date,
) -> dict[str, float]:
    """Per-category sums for a user's activities dated on or after `since`."""
    stmt = select(
        func.sum(Activity.transport_emissions),
        func.sum(Activity.energy_emissions),
        func.sum(Activity.food_emissions),
    ).where(Activity.user_id == user_id, Activity.date >= since)
    transport, energy, food = (await session.execute(stmt)).one()
    return {
        "transport": float(transport or 0.0),
        "energy": float(energy or 0.0),
        "food": float(food or 0.0),
    }


async def fetch_monthly_totals(
    session: AsyncSession,
    start: date,
    end: date,
) -> list[tuple[str, float]]:
    """(user_id, total) for every user with at least one activity in [start, end]."""
    stmt = (
        select(Activity.user_id, func.sum(Activity.total_emissions))
        .where(Activity.date >= start, Activity.date <= end)
        .group_by(Activity.user_id)
    )
    result = await session.execute(stmt)
    return [(user_id, float(total or 0.0)) for user_id, total in result.all()]


# ---------------------------------------------------------------------------
# Goals & achievements
# ---------------------------------------------------------------------------


async def create_goal(session: AsyncSession, user_id: str, data: GoalCreate) -> Goal:
    goal = Goal(
        user_id=user_id,
        type=data.type.value,
        target_value=data.target_value,
        current_value=data.current_value,
        period=data.period.value,
        start_date=data.start_date,
        end_date=data.end_date,
        achieved=data.achieved,
    )
    session.add(goal)
    await session.commit()
    await session.refresh(goal)
    return goal


async def update_goal(
    session: AsyncSession,
    goal_id: int,
    *,
    user_id: str | None = None,
    **updates: Any,
) -> Goal | None:
    """Apply a partial update to a goal.

    Returns None when the goal does not exist or, if `user_id` is given,
    belongs to another user.
    """
    goal = await session.get(Goal, goal_id)
    if goal is None or (user_id is not None and goal.user_id != user_id):
        return None
    if updates:
        for key, value in updates.items():
            setattr(goal, key, value)
        await session.commit()
        await session.refresh(goal)
    return goal


async def fetch_goals(session: AsyncSession, user_id: str) -> Sequence[Goal]:
    stmt = (
        select(Goal)
        .where(Goal.user_id == user_id)
        .order_by(Goal.created_at.desc(), Goal.id.desc())
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def create_achievement(
    session: AsyncSession,
    user_id: str,
    type: str,
    title: str,
    description: str | None = None,
) -> Achievement:
    achievement = Achievement(user_id=user_id, type=type, title=title, description=description)
    session.add(achievement)
    await session.commit()
    await session.refresh(achievement)
    return achievement


async def fetch_achievements(session: AsyncSession, user_id: str) -> Sequence[Achievement]:
    stmt = (
        select(Achievement)
        .where(Achievement.user_id == user_id)
        .order_by(Achievement.unlocked_at.desc(), Achievement.id.desc())
    )
    result = await session.execute(stmt)
    return result.scalars().all()
