from __future__ import annotations

from datetime import date

from tommbi.data.catalog import FACTORIES, PRODUCTS, products_for
from tommbi.data.generator import generate_dataset


TODAY = date(2024, 12, 31)


def test_records_only_pair_factories_with_matching_products():
    ds = generate_dataset(days=5, today=TODAY, seed=11)
    product_types = {p.id: p.factory_type for p in ds.products}
    factory_types = {f.id: f.type for f in ds.factories}
    for stream in (ds.production, ds.finance, ds.energy, ds.quality, ds.sales):
        for r in stream:
            assert product_types[r.product_id] == factory_types[r.factory_id]


def test_record_counts_per_day():
    ds = generate_dataset(days=7, today=TODAY, seed=1)
    pairs = sum(len(products_for(f)) for f in FACTORIES)
    assert len(ds.production) == 7 * pairs
    assert len(ds.finance) == 7 * pairs
    assert len(ds.hr) == 7 * len(FACTORIES)
    assert ds.date_range() == ("2024-12-25", "2024-12-31")


def test_newest_day_first():
    ds = generate_dataset(days=3, today=TODAY, seed=1)
    assert ds.production[0].date == "2024-12-31"
    assert ds.production[-1].date == "2024-12-29"


def test_seed_is_reproducible():
    a = generate_dataset(days=20, today=TODAY, seed=99)
    b = generate_dataset(days=20, today=TODAY, seed=99)
    assert a == b


def test_value_ranges():
    ds = generate_dataset(days=30, today=TODAY, seed=5)
    for r in ds.production:
        assert 800 <= r.planned <= 1200
        assert r.planned - 150 <= r.actual <= r.planned
        assert 0 <= r.downtime_hours <= 4
        assert 0 < r.oee <= 1
    for r in ds.finance:
        assert r.gross_margin == r.revenue - r.cost_of_goods
    for r in ds.hr:
        assert 150 <= r.employee_count <= 250


def test_zero_days_gives_empty_streams():
    ds = generate_dataset(days=0, today=TODAY, seed=1)
    assert all(records == [] for records in ds.streams().values())
    assert ds.date_range() is None
    assert ds.factories == FACTORIES
    assert ds.products == PRODUCTS
