from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset, Region
from tommbi.metrics.aggregate import (
    derived_ratio,
    percent,
    period_change,
    scope_records,
    sum_by_key,
    sum_of,
)
from tommbi.metrics.kpi import Kpi


@dataclass(frozen=True)
class SalesSummary:
    kpis: list[Kpi]
    by_region: list[dict]
    top_customers: list[dict]


def _export_share(rows: list, _value=None) -> float:
    export = sum_of([r for r in rows if r.region == Region.EXPORT], "revenue")
    return percent(export, sum_of(rows, "revenue"))


def revenue_by_customer(dataset: Dataset, rows: list) -> list[dict]:
    """Customers by revenue, highest first."""
    totals = sum_by_key(rows, lambda r: dataset.customer_name(r.customer_id), "revenue")
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [{"name": name, "revenue": v} for name, v in ranked]


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None, top_n: int = 5) -> SalesSummary:
    rows = scope_records(dataset.sales, factory_ids)
    finance = scope_records(dataset.finance, factory_ids)

    customers = {r.customer_id for r in rows}
    profit_per_customer = derived_ratio(sum_of(finance, "net_profit"), len(customers))

    kpis = [
        Kpi("kpi.total_sales", sum_of(rows, "revenue"), "money_m", period_change(rows, "revenue"), "note.vs_last_month", "shopping_cart"),
        Kpi("kpi.units_sold", sum_of(rows, "units_sold"), "tons_k", period_change(rows, "units_sold"), "note.vs_last_month", "inventory_2"),
        Kpi("kpi.profit_per_customer", profit_per_customer, "money_m", period_change(finance, "net_profit"), "note.vs_last_month", "attach_money"),
        Kpi("kpi.export_share", _export_share(rows), "pct", period_change(rows, None, reducer=_export_share), "note.new_markets", "public"),
    ]

    by_region = sum_by_key(rows, lambda r: r.region, "revenue")
    return SalesSummary(
        kpis=kpis,
        by_region=[{"name": region.value, "value": by_region.get(region, 0.0)} for region in Region],
        top_customers=revenue_by_customer(dataset, rows)[:top_n],
    )
