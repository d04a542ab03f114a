"""API contract — Pydantic v2 request and response models.

Request models are the input-validation layer: anything that reaches the
calculator has already passed them. They accept camelCase keys
(``transportType``) as well as snake_case; responses are snake_case.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.footprint.factors import TransportType


class _Request(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
        extra="ignore",
    )


class _Row(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------


class EmissionBreakdown(BaseModel):
    transport_emissions: float = 0.0
    energy_emissions: float = 0.0
    food_emissions: float = 0.0
    total_emissions: float = 0.0


class ActivityCreate(_Request):
    date: dt.date = Field(default_factory=dt.date.today)

    transport_type: TransportType | None = None
    transport_distance: float | None = Field(default=None, ge=0)  # miles

    electricity_usage: float | None = Field(default=None, ge=0)  # kWh
    natural_gas_usage: float | None = Field(default=None, ge=0)  # therms

    beef_servings: int = Field(default=0, ge=0)
    chicken_servings: int = Field(default=0, ge=0)
    vegetable_servings: int = Field(default=0, ge=0)


class ActivityOut(_Row):
    id: int
    user_id: str
    date: dt.date
    transport_type: str | None = None
    transport_distance: float | None = None
    transport_emissions: float | None = None
    electricity_usage: float | None = None
    natural_gas_usage: float | None = None
    energy_emissions: float | None = None
    beef_servings: int | None = 0
    chicken_servings: int | None = 0
    vegetable_servings: int | None = 0
    food_emissions: float | None = None
    total_emissions: float
    created_at: dt.datetime | None = None


class LogActivityResponse(BaseModel):
    activity: ActivityOut
    emissions: EmissionBreakdown
    message: str = "Activity logged successfully"


# ---------------------------------------------------------------------------
# Users, goals, achievements
# ---------------------------------------------------------------------------


class UserOut(_Row):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class GoalType(str, Enum):
    monthly_target = "monthly_target"
    weekly_reduction = "weekly_reduction"


class GoalPeriod(str, Enum):
    month = "month"
    week = "week"


class GoalCreate(_Request):
    type: GoalType
    target_value: float = Field(ge=0)
    current_value: float = Field(default=0.0, ge=0)
    period: GoalPeriod
    start_date: dt.date
    end_date: dt.date
    achieved: bool = False

    @model_validator(mode="after")
    def _check_dates(self) -> GoalCreate:
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class GoalUpdate(_Request):
    """Partial goal update; only fields present in the body are applied."""

    target_value: float | None = Field(default=None, ge=0)
    current_value: float | None = Field(default=None, ge=0)
    end_date: dt.date | None = None
    achieved: bool | None = None

    def changes(self) -> dict:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class GoalOut(_Row):
    id: int
    user_id: str
    type: str
    target_value: float
    current_value: float | None = 0.0
    period: str
    start_date: dt.date
    end_date: dt.date
    achieved: bool | None = False
    created_at: dt.datetime | None = None

    # Derived on read, never stored
    progress_pct: float | None = None
    status: str | None = None  # "red" | "yellow" | "green"


class AchievementOut(_Row):
    id: int
    user_id: str
    type: str
    title: str
    description: str | None = None
    unlocked_at: dt.datetime | None = None


# ---------------------------------------------------------------------------
# Aggregated views
# ---------------------------------------------------------------------------


class CategoryBreakdown(BaseModel):
    transport: float = 0.0
    energy: float = 0.0
    food: float = 0.0


class ChartData(BaseModel):
    labels: list[str] = Field(default_factory=list)
    transport: list[float] = Field(default_factory=list)
    energy: list[float] = Field(default_factory=list)
    food: list[float] = Field(default_factory=list)


class Tip(BaseModel):
    title: str
    description: str
    category: str  # "transport" | "energy" | "food" | "general"


class LeaderboardEntry(BaseModel):
    user: UserOut
    total_emissions: float
    rank: int


class Dashboard(BaseModel):
    """Dashboard payload — always constructible, even for a brand-new user."""

    total_emissions_this_month: float = 0.0
    total_emissions_last_month: float = 0.0
    reduction_percentage: int = 0
    rank: int | None = None  # None when the user has no activity this month
    emission_level: str = "low"
    emissions_by_category: CategoryBreakdown = Field(default_factory=CategoryBreakdown)
    goals: list[GoalOut] = Field(default_factory=list)
    achievements: list[AchievementOut] = Field(default_factory=list)
    personalized_tips: list[Tip] = Field(default_factory=list)
    chart_data: ChartData = Field(default_factory=ChartData)
