from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.metrics.aggregate import (
    derived_ratio,
    latest_per_factory,
    mean_of,
    period_change,
    rows_from_mapping,
    scope_records,
    sum_by_factory,
    sum_of,
)
from tommbi.metrics.kpi import Kpi


@dataclass(frozen=True)
class HrSummary:
    kpis: list[Kpi]
    employees_by_factory: list[dict]
    incidents_by_factory: list[dict]


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None) -> HrSummary:
    rows = scope_records(dataset.hr, factory_ids)
    # Headcount is a stock: use each factory's latest snapshot, never a sum over days.
    latest = latest_per_factory(dataset.factories, rows, factory_ids=factory_ids)
    snapshots = list(latest.values())

    employees = sum_of(snapshots, "employee_count")
    production = sum_of(scope_records(dataset.production, factory_ids), "actual")

    kpis = [
        Kpi("kpi.total_employees", employees, "number", period_change(rows, "employee_count", reducer=mean_of), "note.annual_growth", "groups"),
        Kpi("kpi.absenteeism", mean_of(snapshots, "absenteeism_rate"), "pct2", period_change(rows, "absenteeism_rate", reducer=mean_of), "note.vs_last_month", "trending_down"),
        Kpi("kpi.safety_incidents", sum_of(rows, "safety_incidents"), "number", period_change(rows, "safety_incidents"), "note.vs_last_month", "engineering"),
        Kpi("kpi.productivity", derived_ratio(production, employees), "decimal1", 0.0, "note.tons_per_employee", "insights"),
    ]

    names = {f.id: f.name for f in dataset.factories}
    return HrSummary(
        kpis=kpis,
        employees_by_factory=[{"name": names.get(fid, "Unknown"), "value": r.employee_count} for fid, r in latest.items()],
        incidents_by_factory=rows_from_mapping(
            sum_by_factory(dataset.factories, rows, "safety_incidents", factory_ids=factory_ids), "incidents"
        ),
    )
