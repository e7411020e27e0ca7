from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.metrics.aggregate import latest_date, monthly_trend, scope_records

# Growth applied to the last complete month for each projected month.
GROWTH_FACTORS: tuple[float, ...] = (1.05, 1.08, 1.12)
# Used when there is no history to project from.
DEFAULT_BASELINE = 25000.0


@dataclass(frozen=True)
class ForecastSummary:
    history: list[dict]
    projection: list[dict]

    def combined(self) -> list[dict]:
        """History then projection, each row carrying both series (None where absent)."""
        rows = [{"period": h["period"], "actual": h["actual"], "forecast": None} for h in self.history]
        rows.extend({"period": p["period"], "actual": None, "forecast": p["forecast"]} for p in self.projection)
        return rows


def next_month(period: str) -> str:
    """'2024-12' -> '2025-01'."""
    year, month = (int(x) for x in str(period).split("-")[:2])
    year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return f"{year:04d}-{month:02d}"


def month_bounds(period: str) -> tuple[date, date]:
    """First and last day of a 'YYYY-MM' period."""
    year, month = (int(x) for x in str(period).split("-")[:2])
    next_year, next_mon = (int(x) for x in next_month(period).split("-"))
    return date(year, month, 1), date(next_year, next_mon, 1) - timedelta(days=1)


def last_full_bucket(history: list[dict], *, covered_from: date, covered_to: date) -> dict | None:
    """Newest bucket whose whole month lies inside [covered_from, covered_to]."""
    for bucket in reversed(history):
        first, last = month_bounds(bucket["period"])
        if first >= covered_from and last <= covered_to:
            return bucket
    return None


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None, history_days: int = 90) -> ForecastSummary:
    rows = scope_records(dataset.production, factory_ids)
    history = monthly_trend(rows, {"actual": "actual"}, days=history_days)

    baseline = DEFAULT_BASELINE
    period = None
    if history:
        anchor = latest_date(rows)
        earliest = date.fromisoformat(min(r.date for r in rows))
        covered_from = max(earliest, anchor - timedelta(days=history_days - 1))
        # A month still in progress (or clipped by the window) would understate the baseline.
        full = last_full_bucket(history, covered_from=covered_from, covered_to=anchor) or history[-1]
        baseline = full["actual"]
        period = history[-1]["period"]

    projection: list[dict] = []
    for i, factor in enumerate(GROWTH_FACTORS, start=1):
        if period is not None:
            period = next_month(period)
        projection.append({"period": period or f"+{i}", "forecast": baseline * factor})

    return ForecastSummary(history=history, projection=projection)
