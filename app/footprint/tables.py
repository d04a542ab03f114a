"""ORM tables — users, activities, goals, achievements.

Activities are append-only: emissions are computed once when the row is
created and never updated. No uniqueness on (user_id, date); several rows on
the same day are summed by every aggregate.
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str | None] = mapped_column(String, unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str | None] = mapped_column(String, nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)

    transport_type: Mapped[str | None] = mapped_column(String, nullable=True)
    transport_distance: Mapped[float | None] = mapped_column(Float, nullable=True, comment="miles")
    transport_emissions: Mapped[float | None] = mapped_column(Float, nullable=True, comment="kg CO2e")

    electricity_usage: Mapped[float | None] = mapped_column(Float, nullable=True, comment="kWh")
    natural_gas_usage: Mapped[float | None] = mapped_column(Float, nullable=True, comment="therms")
    energy_emissions: Mapped[float | None] = mapped_column(Float, nullable=True, comment="kg CO2e")

    beef_servings: Mapped[int | None] = mapped_column(Integer, default=0)
    chicken_servings: Mapped[int | None] = mapped_column(Integer, default=0)
    vegetable_servings: Mapped[int | None] = mapped_column(Integer, default=0)
    food_emissions: Mapped[float | None] = mapped_column(Float, nullable=True, comment="kg CO2e")

    total_emissions: Mapped[float] = mapped_column(Float, nullable=False, comment="kg CO2e")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Goal(Base):
    __tablename__ = "goals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String, nullable=False, comment="monthly_target | weekly_reduction")
    target_value: Mapped[float] = mapped_column(Float, nullable=False)
    current_value: Mapped[float | None] = mapped_column(Float, default=0.0)
    period: Mapped[str] = mapped_column(String, nullable=False, comment="month | week")
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    achieved: Mapped[bool | None] = mapped_column(Boolean, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Achievement(Base):
    __tablename__ = "achievements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String, nullable=False, comment="streak | eco_warrior | reduction_master")
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    unlocked_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
