from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset, DowntimeType
from tommbi.metrics.aggregate import (
    count_where,
    derived_ratio,
    period_change,
    rows_from_mapping,
    scope_records,
    sum_by_factory,
    sum_of,
)
from tommbi.metrics.kpi import Kpi


@dataclass(frozen=True)
class MaintenanceSummary:
    kpis: list[Kpi]
    downtime_by_type: list[dict]
    downtime_by_factory: list[dict]


def _is_emergency(record) -> bool:
    return record.downtime_type == DowntimeType.EMERGENCY


def _emergency_count(rows: list, _value) -> float:
    return float(count_where(rows, _is_emergency))


def mtbf_hours(rows: list) -> float:
    """Mean operating hours between emergency stops.

    Operating time is 24h per observed factory-day minus recorded downtime.
    """
    factory_days = {(r.factory_id, r.date) for r in rows}
    operating = len(factory_days) * 24.0 - sum_of(rows, "duration_hours")
    return derived_ratio(max(operating, 0.0), count_where(rows, _is_emergency))


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None) -> MaintenanceSummary:
    rows = scope_records(dataset.maintenance, factory_ids)

    kpis = [
        Kpi("kpi.total_downtime", sum_of(rows, "duration_hours"), "number", period_change(rows, "duration_hours"), "note.vs_last_month", "build"),
        Kpi("kpi.emergency_stops", count_where(rows, _is_emergency), "number", period_change(rows, None, reducer=_emergency_count), "note.vs_last_month", "report"),
        Kpi("kpi.maintenance_cost", sum_of(rows, "cost"), "money_k", period_change(rows, "cost"), "note.vs_last_month", "account_balance_wallet"),
        Kpi("kpi.mtbf", mtbf_hours(rows), "number", period_change(rows, None, reducer=lambda rs, _v: mtbf_hours(rs)), "note.vs_last_month", "trending_up"),
    ]

    planned = sum_of([r for r in rows if not _is_emergency(r)], "duration_hours")
    emergency = sum_of([r for r in rows if _is_emergency(r)], "duration_hours")

    return MaintenanceSummary(
        kpis=kpis,
        downtime_by_type=[
            {"name": DowntimeType.PLANNED.value, "value": planned},
            {"name": DowntimeType.EMERGENCY.value, "value": emergency},
        ],
        downtime_by_factory=rows_from_mapping(
            sum_by_factory(dataset.factories, rows, "duration_hours", factory_ids=factory_ids), "downtime_hours"
        ),
    )
