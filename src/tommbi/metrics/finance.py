from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.core.state import FactoryDetail, FinanceView, Overview
from tommbi.metrics.aggregate import percent, period_change, scope_records, sum_by_factory, sum_by_product, sum_of
from tommbi.metrics.kpi import Kpi

# Share of COGS attributed to each cost bucket.
COST_SHARES: dict[str, float] = {
    "raw_materials": 0.60,
    "energy": 0.20,
    "labor": 0.15,
    "overhead": 0.05,
}


@dataclass(frozen=True)
class FinanceSummary:
    kpis: list[Kpi]
    by_factory: list[dict]
    cost_structure: list[dict]


def gross_margin_pct(revenue: float, cost_of_goods: float) -> float:
    return percent(revenue - cost_of_goods, revenue)


def _margin(rows: list, _value) -> float:
    return gross_margin_pct(sum_of(rows, "revenue"), sum_of(rows, "cost_of_goods"))


def revenue_profit_by_factory(dataset: Dataset, *, factory_ids: Iterable[int] | None = None) -> list[dict]:
    revenue = sum_by_factory(dataset.factories, dataset.finance, "revenue", factory_ids=factory_ids)
    profit = sum_by_factory(dataset.factories, dataset.finance, "net_profit", factory_ids=factory_ids)
    ids = {f.name: f.id for f in dataset.factories}
    return [{"id": ids[name], "name": name, "revenue": revenue[name], "profit": profit[name]} for name in revenue]


def revenue_profit_by_product(dataset: Dataset, factory_id: int) -> list[dict]:
    factory = dataset.factory(factory_id)
    if factory is None:
        return []
    revenue = sum_by_product(dataset.products, dataset.finance, factory, "revenue")
    profit = sum_by_product(dataset.products, dataset.finance, factory, "net_profit")
    return [{"name": name, "revenue": revenue[name], "profit": profit[name]} for name in revenue]


def drilldown_rows(dataset: Dataset, view: FinanceView, *, factory_ids: Iterable[int] | None = None) -> list[dict]:
    """Chart rows for the current drill-down state."""
    if isinstance(view, FactoryDetail):
        return revenue_profit_by_product(dataset, view.factory_id)
    if isinstance(view, Overview):
        return revenue_profit_by_factory(dataset, factory_ids=factory_ids)
    raise TypeError(f"Unknown finance view: {view!r}")


def cost_structure(total_cogs: float) -> list[dict]:
    return [{"name": key, "value": total_cogs * share} for key, share in COST_SHARES.items()]


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None) -> FinanceSummary:
    rows = scope_records(dataset.finance, factory_ids)
    revenue = sum_of(rows, "revenue")
    cogs = sum_of(rows, "cost_of_goods")
    profit = sum_of(rows, "net_profit")

    kpis = [
        Kpi("kpi.total_revenue", revenue, "money_m", period_change(rows, "revenue"), "note.vs_last_month", "trending_up"),
        Kpi("kpi.cost_of_goods", cogs, "money_m", period_change(rows, "cost_of_goods"), "note.vs_last_month", "account_balance_wallet"),
        Kpi("kpi.net_profit", profit, "money_m", period_change(rows, "net_profit"), "note.vs_last_month", "attach_money"),
        Kpi("kpi.gross_margin", gross_margin_pct(revenue, cogs), "pct", period_change(rows, "revenue", reducer=_margin), "note.vs_last_month", "percent"),
    ]
    return FinanceSummary(
        kpis=kpis,
        by_factory=revenue_profit_by_factory(dataset, factory_ids=factory_ids),
        cost_structure=cost_structure(cogs),
    )
