from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable

from tommbi.core.models import Dataset
from tommbi.metrics.aggregate import (
    derived_ratio,
    latest_date,
    pct_change,
    period_change,
    scope_records,
    sum_by_factory,
    sum_by_key,
    sum_of,
    window_records,
)
from tommbi.metrics.kpi import Kpi

ENERGY_PRICE_PER_KWH = 0.12  # USD
CO2_KG_PER_KWH = 0.475


@dataclass(frozen=True)
class EnergySummary:
    kpis: list[Kpi]
    by_factory: list[dict]
    intensity_by_product: list[dict]


def energy_intensity(energy_kwh: float, production_ton: float) -> float:
    """kWh per ton produced (0 without production)."""
    return derived_ratio(energy_kwh, production_ton)


def intensity_change(energy: list, production: list, *, window: int = 30) -> float:
    """Percent change of kWh/ton over the last `window` days vs the window before."""
    anchor = latest_date(energy)
    if anchor is None:
        return 0.0
    previous_anchor = anchor - timedelta(days=window)
    current = energy_intensity(
        sum_of(window_records(energy, days=window, today=anchor), "energy_consumption_kwh"),
        sum_of(window_records(production, days=window, today=anchor), "actual"),
    )
    previous = energy_intensity(
        sum_of(window_records(energy, days=window, today=previous_anchor), "energy_consumption_kwh"),
        sum_of(window_records(production, days=window, today=previous_anchor), "actual"),
    )
    return pct_change(current, previous)


def summarize(dataset: Dataset, *, factory_ids: Iterable[int] | None = None) -> EnergySummary:
    energy = scope_records(dataset.energy, factory_ids)
    production = scope_records(dataset.production, factory_ids)

    total_kwh = sum_of(energy, "energy_consumption_kwh")
    total_ton = sum_of(production, "actual")

    kpis = [
        Kpi("kpi.total_energy", total_kwh / 1000.0, "number", period_change(energy, "energy_consumption_kwh"), "note.vs_last_month", "bolt"),
        Kpi("kpi.energy_intensity", energy_intensity(total_kwh, total_ton), "number", intensity_change(energy, production), "note.vs_last_month", "water_drop"),
        Kpi("kpi.energy_cost", total_kwh * ENERGY_PRICE_PER_KWH, "money_m", period_change(energy, "energy_consumption_kwh"), "note.vs_last_month", "attach_money"),
        Kpi("kpi.co2", total_kwh * CO2_KG_PER_KWH / 1000.0, "co2", period_change(energy, "energy_consumption_kwh"), "note.emissions", "co2"),
    ]

    mwh = sum_by_factory(dataset.factories, energy, "energy_consumption_kwh", factory_ids=factory_ids)
    by_factory = [{"name": name, "mwh": kwh / 1000.0} for name, kwh in mwh.items()]

    kwh_by_product = sum_by_key(energy, lambda r: r.product_id, "energy_consumption_kwh")
    ton_by_product = sum_by_key(production, lambda r: r.product_id, "actual")
    intensity_by_product = [
        {
            "name": p.name,
            "intensity": round(energy_intensity(kwh_by_product.get(p.id, 0.0), ton_by_product.get(p.id, 0.0))),
        }
        for p in dataset.products
    ]

    return EnergySummary(kpis=kpis, by_factory=by_factory, intensity_by_product=intensity_by_product)
