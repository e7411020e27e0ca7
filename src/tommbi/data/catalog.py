"""Fixed reference lists of the industrial group."""

from __future__ import annotations

from tommbi.core.models import Customer, Equipment, Factory, FactoryType, Product


FACTORIES: list[Factory] = [
    Factory(id=1, name="کارخانه زغال‌سنگ ۱", type=FactoryType.COAL_COKE),
    Factory(id=2, name="کارخانه کک متالورژی ۲", type=FactoryType.COAL_COKE),
    Factory(id=3, name="کارخانه فروسیلیس ۳", type=FactoryType.FERROALLOYS),
    Factory(id=4, name="کارخانه فروسیلیکومنگنز ۴", type=FactoryType.FERROALLOYS),
]

PRODUCTS: list[Product] = [
    Product(id=1, name="زغال‌سنگ", factory_type=FactoryType.COAL_COKE),
    Product(id=2, name="کک متالورژی", factory_type=FactoryType.COAL_COKE),
    Product(id=3, name="فروسیلیس", factory_type=FactoryType.FERROALLOYS),
    Product(id=4, name="فروسیلیکومنگنز", factory_type=FactoryType.FERROALLOYS),
]

EQUIPMENT: list[Equipment] = [
    Equipment(id="furnace-01", name="کوره بلند ۱"),
    Equipment(id="conveyor-01", name="نوار نقاله اصلی"),
    Equipment(id="crusher-01", name="سنگ شکن"),
    Equipment(id="coke-oven-01", name="کوره کک‌سازی"),
]

CUSTOMERS: list[Customer] = [
    Customer(id="cust-01", name="مشتری داخلی الف"),
    Customer(id="cust-02", name="مشتری داخلی ب"),
    Customer(id="cust-03", name="مشتری صادراتی ج"),
]


def products_for(factory: Factory, products: list[Product] | None = None) -> list[Product]:
    """Products a factory can make (matching factory type)."""
    return [p for p in (products if products is not None else PRODUCTS) if p.factory_type == factory.type]
