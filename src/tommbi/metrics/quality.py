from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.metrics.aggregate import mean_by_factory, mean_of, period_change, scope_records
from tommbi.metrics.kpi import Kpi


@dataclass(frozen=True)
class QualitySummary:
    kpis: list[Kpi]
    rejection_by_factory: list[dict]
    cpk_by_factory: list[dict]


def rejection_stdev(rows: list, _value=None) -> float:
    """Population standard deviation of rejection rate (percentage points)."""
    values = [float(r.rejection_rate or 0.0) for r in rows]
    if len(values) < 2:
        return 0.0
    return statistics.pstdev(values)


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None) -> QualitySummary:
    rows = scope_records(dataset.quality, factory_ids)

    kpis = [
        Kpi("kpi.rejection_rate", mean_of(rows, "rejection_rate"), "pct2", period_change(rows, "rejection_rate", reducer=mean_of), "note.vs_last_month", "verified"),
        Kpi("kpi.cpk", mean_of(rows, "cpk_index"), "decimal2", period_change(rows, "cpk_index", reducer=mean_of), "note.process_stability", "track_changes"),
        Kpi("kpi.lab_turnaround", mean_of(rows, "lab_turnaround_time_hours"), "hours", period_change(rows, "lab_turnaround_time_hours", reducer=mean_of), "note.vs_last_month", "science"),
        Kpi("kpi.rejection_stdev", rejection_stdev(rows), "pct", period_change(rows, None, reducer=rejection_stdev), "note.vs_last_month", "stacked_line_chart"),
    ]

    rejection = mean_by_factory(dataset.factories, rows, "rejection_rate", factory_ids=factory_ids)
    cpk = mean_by_factory(dataset.factories, rows, "cpk_index", factory_ids=factory_ids)

    return QualitySummary(
        kpis=kpis,
        rejection_by_factory=[{"name": name, "rejection_rate": round(v, 2)} for name, v in rejection.items()],
        cpk_by_factory=[{"name": name, "cpk": round(v, 2)} for name, v in cpk.items()],
    )
