from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from tommbi.core.models import (
    Dataset,
    DowntimeType,
    EnergyRecord,
    FactoryType,
    FinanceRecord,
    HrRecord,
    MaintenanceRecord,
    ProductionRecord,
    QualityRecord,
    Region,
    SalesRecord,
    SupplyChainRecord,
)
from tommbi.data.catalog import CUSTOMERS, EQUIPMENT, FACTORIES, PRODUCTS, products_for
from tommbi.metrics.production import oee

logger = logging.getLogger(__name__)


def generate_dataset(*, days: int = 365, today: date | None = None, seed: int | None = None) -> Dataset:
    """Generate `days` days of synthetic daily records ending at `today`.

    Records are emitted newest day first. Pass `seed` for a reproducible dataset.
    """
    rng = random.Random(seed)
    today = today or date.today()

    production: list[ProductionRecord] = []
    finance: list[FinanceRecord] = []
    energy: list[EnergyRecord] = []
    maintenance: list[MaintenanceRecord] = []
    quality: list[QualityRecord] = []
    hr: list[HrRecord] = []
    supply_chain: list[SupplyChainRecord] = []
    sales: list[SalesRecord] = []

    for i in range(max(0, int(days))):
        day = (today - timedelta(days=i)).isoformat()

        for factory in FACTORIES:
            # HR is tracked per factory, not per product.
            hr.append(
                HrRecord(
                    date=day,
                    factory_id=factory.id,
                    employee_count=rng.randint(150, 250),
                    absenteeism_rate=rng.randint(1, 40) / 10,
                    turnover_rate=rng.randint(0, 5) / 10,
                    safety_incidents=rng.randint(0, 2),
                )
            )

            for product in products_for(factory, PRODUCTS):
                planned = rng.randint(800, 1200)
                actual = planned - rng.randint(0, 150)
                downtime_hours = rng.randint(0, 4)
                oee_value = round(oee(actual=actual, planned=planned, downtime_hours=downtime_hours), 2)
                production.append(
                    ProductionRecord(
                        date=day,
                        factory_id=factory.id,
                        product_id=product.id,
                        planned=planned,
                        actual=actual,
                        downtime_hours=downtime_hours,
                        waste_ton=rng.randint(5, 50),
                        oee=oee_value,
                    )
                )

                revenue = actual * rng.randint(180, 220)
                cost_of_goods = actual * rng.randint(120, 160)
                gross_margin = revenue - cost_of_goods
                finance.append(
                    FinanceRecord(
                        date=day,
                        factory_id=factory.id,
                        product_id=product.id,
                        revenue=revenue,
                        cost_of_goods=cost_of_goods,
                        gross_margin=gross_margin,
                        net_profit=gross_margin * rng.randint(60, 85) / 100,
                    )
                )

                if factory.type == FactoryType.FERROALLOYS:
                    intensity = rng.randint(5000, 8000)
                else:
                    intensity = rng.randint(100, 200)
                energy.append(
                    EnergyRecord(
                        date=day,
                        factory_id=factory.id,
                        product_id=product.id,
                        energy_consumption_kwh=actual * intensity,
                    )
                )

                maintenance.append(
                    MaintenanceRecord(
                        date=day,
                        factory_id=factory.id,
                        equipment_id=rng.choice(EQUIPMENT).id,
                        downtime_type=DowntimeType.EMERGENCY if rng.random() > 0.8 else DowntimeType.PLANNED,
                        duration_hours=rng.randint(1, 8),
                        cost=rng.randint(500, 5000),
                    )
                )

                quality.append(
                    QualityRecord(
                        date=day,
                        factory_id=factory.id,
                        product_id=product.id,
                        rejection_rate=rng.randint(1, 50) / 10,
                        cpk_index=round(1 + rng.random(), 2),
                        lab_turnaround_time_hours=rng.randint(2, 24),
                    )
                )

                supply_chain.append(
                    SupplyChainRecord(
                        date=day,
                        factory_id=factory.id,
                        raw_material_inventory_ton=rng.randint(5000, 20000),
                        finished_goods_inventory_ton=rng.randint(1000, 8000),
                        supplier_on_time_delivery_rate=rng.randint(85, 99),
                        transport_cost=actual * rng.randint(10, 25),
                    )
                )

                sales.append(
                    SalesRecord(
                        date=day,
                        factory_id=factory.id,
                        product_id=product.id,
                        customer_id=rng.choice(CUSTOMERS).id,
                        region=Region.DOMESTIC if rng.random() > 0.4 else Region.EXPORT,
                        revenue=revenue,
                        units_sold=actual,
                    )
                )

    dataset = Dataset(
        factories=list(FACTORIES),
        products=list(PRODUCTS),
        production=production,
        finance=finance,
        energy=energy,
        maintenance=maintenance,
        quality=quality,
        hr=hr,
        supply_chain=supply_chain,
        sales=sales,
        equipment=list(EQUIPMENT),
        customers=list(CUSTOMERS),
    )
    logger.info(
        "Generated dataset: %d days, %d production rows, %d hr rows",
        days,
        len(production),
        len(hr),
    )
    return dataset
