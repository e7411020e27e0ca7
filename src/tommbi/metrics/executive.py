from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.metrics.aggregate import (
    mean_of,
    monthly_trend,
    period_change,
    rows_from_mapping,
    scope_records,
    sum_by_factory,
    sum_of,
)
from tommbi.metrics.kpi import Kpi


@dataclass(frozen=True)
class ExecutiveSummary:
    kpis: list[Kpi]
    production_by_factory: list[dict]
    finance_trend: list[dict]


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None, trend_days: int = 365) -> ExecutiveSummary:
    production = scope_records(dataset.production, factory_ids)
    finance = scope_records(dataset.finance, factory_ids)

    kpis = [
        Kpi("kpi.total_production", sum_of(production, "actual"), "tons_k", period_change(production, "actual"), "note.vs_last_month", "precision_manufacturing"),
        Kpi("kpi.total_revenue", sum_of(finance, "revenue"), "money_m", period_change(finance, "revenue"), "note.vs_last_month", "attach_money"),
        Kpi("kpi.net_profit", sum_of(finance, "net_profit"), "money_m", period_change(finance, "net_profit"), "note.vs_last_month", "account_balance_wallet"),
        # Stored OEE is a 0..1 ratio.
        Kpi("kpi.overall_oee", mean_of(production, "oee") * 100.0, "pct", period_change(production, "oee", reducer=mean_of), "note.vs_last_month", "speed"),
    ]

    return ExecutiveSummary(
        kpis=kpis,
        production_by_factory=rows_from_mapping(
            sum_by_factory(dataset.factories, production, "actual", factory_ids=factory_ids), "value"
        ),
        finance_trend=monthly_trend(finance, {"revenue": "revenue", "profit": "net_profit"}, days=trend_days),
    )
