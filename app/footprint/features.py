"""Pure stateless feature functions — math only, never raises."""

from __future__ import annotations

import calendar
import math
from datetime import date, timedelta
from typing import Any, Iterable, Mapping

CATEGORIES: tuple[str, ...] = ("transport", "energy", "food")

# Indexed by date.weekday(); strftime("%a") would follow the process locale
WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def round2(value: float) -> float:
    """Round to cents, halves away from zero for non-negative values.

    Matches ``floor(x * 100 + 0.5) / 100``; Python's ``round`` would use
    banker's rounding on the binary value instead.
    """
    return math.floor(value * 100 + 0.5) / 100


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# ---------------------------------------------------------------------------
# Calendar windows (server-local calendar)
# ---------------------------------------------------------------------------

def month_bounds(today: date) -> tuple[date, date]:
    """Inclusive (first, last) day of the month containing `today`."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def previous_month_bounds(today: date) -> tuple[date, date]:
    """Inclusive (first, last) day of the month before `today`'s month."""
    last = today.replace(day=1) - timedelta(days=1)
    return last.replace(day=1), last


def trailing_window_start(today: date, days: int) -> date:
    """First day of a trailing window of `days` days ending today.

    The window is [today - days, today], both ends inclusive.
    """
    return today - timedelta(days=days)


# ---------------------------------------------------------------------------
# Month-over-month and ranking
# ---------------------------------------------------------------------------

def reduction_percentage(this_month: float, last_month: float) -> int:
    """Percent reduction from last month to this month.

    Positive means lower emissions this month. Returns 0 when there is no
    last-month total to compare against.
    """
    if not last_month or last_month <= 0:
        return 0
    return round_half_up((last_month - this_month) / last_month * 100)


def rank_among(user_total: float, other_totals: Iterable[float]) -> int:
    """1 + number of totals strictly lower than `user_total`."""
    return 1 + sum(1 for t in other_totals if t < user_total)


def rank_leaderboard(
    totals: Iterable[tuple[str, float]],
    limit: int | None = None,
) -> list[tuple[str, float, int]]:
    """Order (user_id, total) pairs ascending and attach 1-based ranks.

    Equal totals share a rank (1 + number of strictly lower totals), the same
    rule as `rank_among`; the user id only fixes their display order.
    `limit` caps the result (None = all).
    """
    ordered = sorted(totals, key=lambda pair: (pair[1], pair[0]))
    if limit is not None:
        ordered = ordered[: max(limit, 0)]

    ranked: list[tuple[str, float, int]] = []
    prev_total: float | None = None
    rank = 0
    for idx, (user_id, total) in enumerate(ordered):
        if total != prev_total:
            rank = idx + 1
            prev_total = total
        ranked.append((user_id, total, rank))
    return ranked


# ---------------------------------------------------------------------------
# Category sums and daily trend
# ---------------------------------------------------------------------------

def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def sum_categories(records: Iterable[Any]) -> dict[str, float]:
    """Sum per-category emissions independently. Missing values count as 0."""
    sums = {cat: 0.0 for cat in CATEGORIES}
    for rec in records:
        for cat in CATEGORIES:
            sums[cat] += _field(rec, f"{cat}_emissions") or 0.0
    return sums


def daily_trend(records: Iterable[Any], today: date, days: int = 7) -> dict[str, list]:
    """Per-day category series for the `days` days ending today (oldest first).

    Every record of a day is summed; days without records report 0.
    Labels are short English weekday names ("Mon") regardless of locale.
    """
    by_day: dict[date, dict[str, float]] = {}
    for rec in records:
        day = _field(rec, "date")
        if not isinstance(day, date):
            continue
        bucket = by_day.setdefault(day, {cat: 0.0 for cat in CATEGORIES})
        for cat in CATEGORIES:
            bucket[cat] += _field(rec, f"{cat}_emissions") or 0.0

    series: dict[str, list] = {"labels": [], **{cat: [] for cat in CATEGORIES}}
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        series["labels"].append(WEEKDAY_LABELS[day.weekday()])
        bucket = by_day.get(day, {})
        for cat in CATEGORIES:
            series[cat].append(round2(bucket.get(cat, 0.0)))
    return series


# ---------------------------------------------------------------------------
# Levels and formatting
# ---------------------------------------------------------------------------

def emission_level(total: float) -> str:
    """Daily emission level: "low" (<5 kg), "medium" (<15 kg) or "high"."""
    if total < 5:
        return "low"
    if total < 15:
        return "medium"
    return "high"


def format_emissions(value: float) -> str:
    if value >= 1000:
        return f"{value / 1000:.2f} tons"
    return f"{value:.2f} kg"


# ---------------------------------------------------------------------------
# Goal computation helpers
# ---------------------------------------------------------------------------

def goal_progress_pct(
    value: float | None,
    target_value: float,
    target_type: str,
) -> float | None:
    """Compute progress percentage (0–100) toward a goal.

    - minimum: progress = value / target * 100, capped at 100
    - maximum: progress = target / value * 100 (lower is better), capped at 100
    Returns None if value is None or the target is zero.
    """
    if value is None or target_value == 0.0:
        return None
    if target_type == "minimum":
        return max(0.0, min(100.0, (value / target_value) * 100.0))
    if target_type == "maximum":
        if value <= target_value:
            return 100.0
        return min(100.0, (target_value / value) * 100.0)
    return None


def goal_status(progress_pct: float | None) -> str:
    """Map progress percentage to a status label."""
    if progress_pct is None:
        return "red"
    if progress_pct >= 100.0:
        return "green"
    if progress_pct >= 50.0:
        return "yellow"
    return "red"
