"""Tests for goal progress helpers and personalized tips."""

from __future__ import annotations

from app.footprint.aggregation import GOAL_TARGET_TYPES, goal_with_progress
from app.footprint.features import goal_progress_pct, goal_status
from app.footprint.tips import TIPS, personalized_tips

from tests.conftest import make_goal


# ---------------------------------------------------------------------------
# Goal progress computation
# ---------------------------------------------------------------------------

class TestGoalProgressPct:
    def test_minimum_exact_hit(self):
        assert goal_progress_pct(20.0, 20.0, "minimum") == 100.0

    def test_minimum_under(self):
        result = goal_progress_pct(10.0, 20.0, "minimum")
        assert result is not None
        assert abs(result - 50.0) < 0.01

    def test_minimum_negative_value_floors_at_zero(self):
        assert goal_progress_pct(-5.0, 20.0, "minimum") == 0.0

    def test_maximum_under(self):
        assert goal_progress_pct(150.0, 200.0, "maximum") == 100.0

    def test_maximum_over(self):
        result = goal_progress_pct(400.0, 200.0, "maximum")
        assert result is not None
        assert abs(result - 50.0) < 0.01

    def test_none_value(self):
        assert goal_progress_pct(None, 200.0, "maximum") is None

    def test_zero_target(self):
        assert goal_progress_pct(5.0, 0.0, "minimum") is None

    def test_unknown_type(self):
        assert goal_progress_pct(5.0, 10.0, "sideways") is None


class TestGoalStatus:
    def test_green(self):
        assert goal_status(100.0) == "green"

    def test_yellow(self):
        assert goal_status(50.0) == "yellow"

    def test_red(self):
        assert goal_status(49.9) == "red"

    def test_none_is_red(self):
        assert goal_status(None) == "red"


class TestGoalWithProgress:
    def test_goal_types_mapped(self):
        assert set(GOAL_TARGET_TYPES) == {"monthly_target", "weekly_reduction"}

    def test_monthly_target_under_budget(self):
        out = goal_with_progress(make_goal(type="monthly_target", target_value=200.0, current_value=120.0))
        assert out.progress_pct == 100.0
        assert out.status == "green"

    def test_monthly_target_over_budget(self):
        out = goal_with_progress(make_goal(type="monthly_target", target_value=200.0, current_value=500.0))
        assert out.progress_pct == 40.0
        assert out.status == "red"

    def test_weekly_reduction(self):
        out = goal_with_progress(
            make_goal(type="weekly_reduction", period="week", target_value=20.0, current_value=15.0)
        )
        assert out.progress_pct == 75.0
        assert out.status == "yellow"

    def test_unknown_type_left_blank(self):
        out = goal_with_progress(make_goal(type="custom"))
        assert out.progress_pct is None
        assert out.status is None

    def test_missing_current_value_counts_as_zero(self):
        out = goal_with_progress(make_goal(type="weekly_reduction", current_value=None))
        assert out.progress_pct == 0.0


# ---------------------------------------------------------------------------
# Personalized tips
# ---------------------------------------------------------------------------

class TestPersonalizedTips:
    def test_transport_dominant(self):
        tips = personalized_tips({"transport": 10.0, "energy": 0.5, "food": 0.2})
        assert [t.category for t in tips] == ["transport", "transport"]

    def test_capped_at_three(self):
        tips = personalized_tips({"transport": 10.0, "energy": 5.0, "food": 3.0})
        assert len(tips) == 3
        assert [t.category for t in tips] == ["transport", "transport", "energy"]

    def test_energy_and_food(self):
        tips = personalized_tips({"transport": 0.0, "energy": 2.0, "food": 3.0}, limit=10)
        assert [t.category for t in tips] == ["energy", "energy", "food", "food"]

    def test_low_emissions_get_general_tips(self):
        tips = personalized_tips({"transport": 0.0, "energy": 0.0, "food": 0.0})
        assert [t.title for t in tips] == [t.title for t in TIPS["general"]]

    def test_missing_keys(self):
        tips = personalized_tips({})
        assert all(t.category == "general" for t in tips)
