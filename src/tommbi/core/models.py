from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FactoryType(str, Enum):
    COAL_COKE = "Coal & Coke"
    FERROALLOYS = "Ferroalloys"


class DowntimeType(str, Enum):
    PLANNED = "planned"
    EMERGENCY = "emergency"


class Region(str, Enum):
    DOMESTIC = "Domestic"
    EXPORT = "Export"


@dataclass(frozen=True)
class Factory:
    id: int
    name: str
    type: FactoryType


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    factory_type: FactoryType


@dataclass(frozen=True)
class Equipment:
    id: str
    name: str


@dataclass(frozen=True)
class Customer:
    id: str
    name: str


# Daily metric records. `date` is an ISO day string (YYYY-MM-DD) so that
# lexical order equals chronological order.


@dataclass(frozen=True)
class ProductionRecord:
    date: str
    factory_id: int
    product_id: int
    planned: float
    actual: float
    downtime_hours: float
    waste_ton: float
    oee: float


@dataclass(frozen=True)
class FinanceRecord:
    date: str
    factory_id: int
    product_id: int
    revenue: float
    cost_of_goods: float
    gross_margin: float
    net_profit: float


@dataclass(frozen=True)
class EnergyRecord:
    date: str
    factory_id: int
    product_id: int
    energy_consumption_kwh: float


@dataclass(frozen=True)
class MaintenanceRecord:
    date: str
    factory_id: int
    equipment_id: str
    downtime_type: DowntimeType
    duration_hours: float
    cost: float


@dataclass(frozen=True)
class QualityRecord:
    date: str
    factory_id: int
    product_id: int
    rejection_rate: float  # percent
    cpk_index: float
    lab_turnaround_time_hours: float


@dataclass(frozen=True)
class HrRecord:
    date: str
    factory_id: int
    employee_count: int
    absenteeism_rate: float  # percent
    turnover_rate: float  # percent
    safety_incidents: int


@dataclass(frozen=True)
class SupplyChainRecord:
    date: str
    factory_id: int
    raw_material_inventory_ton: float
    finished_goods_inventory_ton: float
    supplier_on_time_delivery_rate: float  # percent
    transport_cost: float


@dataclass(frozen=True)
class SalesRecord:
    date: str
    factory_id: int
    product_id: int
    customer_id: str
    region: Region
    revenue: float
    units_sold: float


@dataclass(frozen=True)
class Dataset:
    """In-memory bundle of reference data and daily metric streams."""

    factories: list[Factory]
    products: list[Product]
    production: list[ProductionRecord] = field(default_factory=list)
    finance: list[FinanceRecord] = field(default_factory=list)
    energy: list[EnergyRecord] = field(default_factory=list)
    maintenance: list[MaintenanceRecord] = field(default_factory=list)
    quality: list[QualityRecord] = field(default_factory=list)
    hr: list[HrRecord] = field(default_factory=list)
    supply_chain: list[SupplyChainRecord] = field(default_factory=list)
    sales: list[SalesRecord] = field(default_factory=list)
    equipment: list[Equipment] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)

    def factory(self, factory_id: int) -> Factory | None:
        return next((f for f in self.factories if f.id == factory_id), None)

    def customer_name(self, customer_id: str) -> str:
        c = next((c for c in self.customers if c.id == customer_id), None)
        return c.name if c else "Unknown"

    def streams(self) -> dict[str, list]:
        """Metric streams keyed by a stable name (used for the chat context)."""
        return {
            "production": self.production,
            "finance": self.finance,
            "energy": self.energy,
            "maintenance": self.maintenance,
            "quality": self.quality,
            "hr": self.hr,
            "supply_chain": self.supply_chain,
            "sales": self.sales,
        }

    def date_range(self) -> tuple[str, str] | None:
        dates = [r.date for records in self.streams().values() for r in records]
        if not dates:
            return None
        return min(dates), max(dates)
