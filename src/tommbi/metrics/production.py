from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.metrics.aggregate import (
    daily_series,
    derived_ratio,
    percent,
    period_change,
    sum_by_factory,
    sum_of,
    scope_records,
)
from tommbi.metrics.kpi import Kpi

# Quality factor applied to every OEE figure (no per-unit defect data is tracked).
OEE_QUALITY_FACTOR = 0.95


def oee(*, actual: float, planned: float, downtime_hours: float, quality: float = OEE_QUALITY_FACTOR) -> float:
    """Overall Equipment Effectiveness for one production day.

    throughput (actual/planned) x availability ((24 - downtime)/24) x quality.
    """
    availability = max(0.0, (24.0 - float(downtime_hours or 0.0)) / 24.0)
    return derived_ratio(actual, planned) * availability * quality


def _attainment(rows: list, _value) -> float:
    return percent(sum_of(rows, "actual"), sum_of(rows, "planned"))


@dataclass(frozen=True)
class ProductionSummary:
    kpis: list[Kpi]
    daily: list[dict]
    by_factory: list[dict]


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None, last_n_days: int = 30) -> ProductionSummary:
    rows = scope_records(dataset.production, factory_ids)

    total_actual = sum_of(rows, "actual")
    total_planned = sum_of(rows, "planned")

    kpis = [
        Kpi("kpi.total_production", total_actual, "tons_k", period_change(rows, "actual"), "note.vs_last_month", "precision_manufacturing"),
        Kpi("kpi.plan_attainment", percent(total_actual, total_planned), "pct", period_change(rows, "actual", reducer=_attainment), "note.vs_last_month", "flag"),
        Kpi("kpi.downtime_hours", sum_of(rows, "downtime_hours"), "number", period_change(rows, "downtime_hours"), "note.vs_last_month", "timer_off"),
        Kpi("kpi.waste", sum_of(rows, "waste_ton"), "tons_k", period_change(rows, "waste_ton"), "note.vs_last_month", "delete_sweep"),
    ]

    planned = sum_by_factory(dataset.factories, rows, "planned", factory_ids=factory_ids)
    actual = sum_by_factory(dataset.factories, rows, "actual", factory_ids=factory_ids)
    by_factory = [{"name": name, "planned": planned[name], "actual": actual[name]} for name in planned]

    return ProductionSummary(
        kpis=kpis,
        daily=daily_series(rows, {"planned": "planned", "actual": "actual"}, last_n_days=last_n_days),
        by_factory=by_factory,
    )
