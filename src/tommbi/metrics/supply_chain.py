from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.metrics.aggregate import (
    latest_per_factory,
    mean_by_factory,
    mean_of,
    period_change,
    scope_records,
    sum_of,
)
from tommbi.metrics.kpi import Kpi


@dataclass(frozen=True)
class SupplyChainSummary:
    kpis: list[Kpi]
    inventory_by_factory: list[dict]
    on_time_by_factory: list[dict]


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None) -> SupplyChainSummary:
    rows = scope_records(dataset.supply_chain, factory_ids)
    latest = latest_per_factory(dataset.factories, rows, factory_ids=factory_ids)
    snapshots = list(latest.values())

    kpis = [
        Kpi("kpi.raw_inventory", sum_of(snapshots, "raw_material_inventory_ton"), "tons_k", period_change(rows, "raw_material_inventory_ton", reducer=mean_of), "note.monthly_consumption", "warehouse"),
        Kpi("kpi.finished_inventory", sum_of(snapshots, "finished_goods_inventory_ton"), "tons_k", period_change(rows, "finished_goods_inventory_ton", reducer=mean_of), "note.vs_last_month", "inventory_2"),
        Kpi("kpi.on_time_delivery", mean_of(snapshots, "supplier_on_time_delivery_rate"), "pct", period_change(rows, "supplier_on_time_delivery_rate", reducer=mean_of), "note.supplier_performance", "local_shipping"),
        Kpi("kpi.transport_cost", sum_of(rows, "transport_cost"), "money_m", period_change(rows, "transport_cost"), "note.vs_last_month", "account_balance_wallet"),
    ]

    names = {f.id: f.name for f in dataset.factories}
    on_time = mean_by_factory(dataset.factories, rows, "supplier_on_time_delivery_rate", factory_ids=factory_ids)

    return SupplyChainSummary(
        kpis=kpis,
        inventory_by_factory=[
            {
                "name": names.get(fid, "Unknown"),
                "raw_material": r.raw_material_inventory_ton,
                "finished_goods": r.finished_goods_inventory_ton,
            }
            for fid, r in latest.items()
        ],
        on_time_by_factory=[{"name": name, "on_time": round(v, 1)} for name, v in on_time.items()],
    )
