from __future__ import annotations

import random
from datetime import date

import pytest

from tommbi.core.models import (
    Factory,
    FactoryType,
    FinanceRecord,
    HrRecord,
    Product,
    ProductionRecord,
)
from tommbi.metrics.aggregate import (
    daily_series,
    derived_ratio,
    latest_per_factory,
    mean_of,
    monthly_trend,
    pct_change,
    period_change,
    sum_by_factory,
    sum_by_key,
    sum_by_product,
    window_records,
)


FACTORY_A = Factory(id=1, name="A", type=FactoryType.COAL_COKE)
FACTORY_B = Factory(id=2, name="B", type=FactoryType.FERROALLOYS)

PRODUCTS = [
    Product(id=1, name="Coal", factory_type=FactoryType.COAL_COKE),
    Product(id=2, name="Coke", factory_type=FactoryType.COAL_COKE),
    Product(id=3, name="FeSi", factory_type=FactoryType.FERROALLOYS),
]


def prod(day: str, factory_id: int, planned: float, actual: float, product_id: int = 1) -> ProductionRecord:
    return ProductionRecord(
        date=day,
        factory_id=factory_id,
        product_id=product_id,
        planned=planned,
        actual=actual,
        downtime_hours=0,
        waste_ton=0,
        oee=0.9,
    )


def fin(day: str, factory_id: int, product_id: int, revenue: float, profit: float) -> FinanceRecord:
    return FinanceRecord(
        date=day,
        factory_id=factory_id,
        product_id=product_id,
        revenue=revenue,
        cost_of_goods=revenue - profit,
        gross_margin=profit,
        net_profit=profit,
    )


def hr(day: str, factory_id: int, employees: int) -> HrRecord:
    return HrRecord(
        date=day,
        factory_id=factory_id,
        employee_count=employees,
        absenteeism_rate=1.0,
        turnover_rate=0.1,
        safety_incidents=0,
    )


def test_sum_by_factory_reports_zero_for_factory_without_records():
    records = [
        prod("2024-11-01", 1, planned=100, actual=90),
        prod("2024-11-02", 1, planned=200, actual=150),
    ]
    assert sum_by_factory([FACTORY_A, FACTORY_B], records, "actual") == {"A": 240, "B": 0}


def test_sum_by_factory_follows_factory_order_not_record_order():
    records = [prod("2024-11-01", 2, 10, 5), prod("2024-11-01", 1, 10, 7)]
    out = sum_by_factory([FACTORY_A, FACTORY_B], records, "actual")
    assert list(out) == ["A", "B"]

    out_rev = sum_by_factory([FACTORY_B, FACTORY_A], records, "actual")
    assert list(out_rev) == ["B", "A"]


def test_sum_by_factory_empty_inputs():
    assert sum_by_factory([FACTORY_A], [], "actual") == {"A": 0}
    assert sum_by_factory([], [prod("2024-11-01", 1, 1, 1)], "actual") == {}


def test_sum_by_factory_respects_factory_scope():
    records = [prod("2024-11-01", 1, 10, 5), prod("2024-11-01", 2, 10, 7)]
    assert sum_by_factory([FACTORY_A, FACTORY_B], records, "actual", factory_ids=[2]) == {"B": 7}


def test_sum_by_factory_accepts_callable_selector():
    records = [prod("2024-11-01", 1, 100, 90)]
    out = sum_by_factory([FACTORY_A], records, lambda r: r.planned - r.actual)
    assert out == {"A": 10}


def test_sum_by_product_is_restricted_to_factory_type_and_factory():
    records = [
        fin("2024-11-01", 1, 1, revenue=100, profit=10),
        fin("2024-11-01", 1, 2, revenue=50, profit=5),
        # same product, other factory: excluded
        fin("2024-11-01", 2, 1, revenue=999, profit=99),
    ]
    out = sum_by_product(PRODUCTS, records, FACTORY_A, "revenue")
    assert out == {"Coal": 100, "Coke": 50}
    assert "FeSi" not in out


def test_sum_by_product_zero_for_products_without_records():
    out = sum_by_product(PRODUCTS, [], FACTORY_B, "revenue")
    assert out == {"FeSi": 0}


def test_mean_of_empty_is_zero():
    assert mean_of([], "actual") == 0


def test_mean_of_is_order_independent():
    records = [prod(f"2024-11-{d:02d}", 1, 0, v) for d, v in zip(range(1, 8), [3, 9, 1, 4, 7, 2, 8])]
    expected = sum(r.actual for r in records) / len(records)
    shuffled = list(records)
    random.Random(7).shuffle(shuffled)
    assert mean_of(records, "actual") == pytest.approx(expected)
    assert mean_of(shuffled, "actual") == pytest.approx(expected)


@pytest.mark.parametrize("numerator", [0, 1, -5, 1e9])
def test_derived_ratio_zero_denominator_is_zero(numerator):
    assert derived_ratio(numerator, 0) == 0


def test_derived_ratio_regular_division():
    assert derived_ratio(10, 4) == 2.5


def test_latest_per_factory_picks_max_date():
    records = [
        hr("2024-11-01", 1, 100),
        hr("2024-11-03", 1, 130),
        hr("2024-11-02", 1, 120),
        hr("2024-10-30", 2, 50),
    ]
    latest = latest_per_factory([FACTORY_A, FACTORY_B], records)
    assert latest[1].employee_count == 130
    assert latest[2].employee_count == 50
    for fid, rec in latest.items():
        assert all(rec.date >= r.date for r in records if r.factory_id == fid)


def test_latest_per_factory_omits_factories_without_records():
    latest = latest_per_factory([FACTORY_A, FACTORY_B], [hr("2024-11-01", 1, 100)])
    assert list(latest) == [1]


def test_latest_per_factory_tie_keeps_first_encountered():
    records = [hr("2024-11-03", 1, 111), hr("2024-11-03", 1, 222)]
    assert latest_per_factory([FACTORY_A], records)[1].employee_count == 111


def test_monthly_trend_orders_across_year_boundary():
    # newest first, the way the generator emits them
    records = [
        fin("2025-01-10", 1, 1, revenue=30, profit=3),
        fin("2024-12-15", 1, 1, revenue=20, profit=2),
        fin("2024-12-01", 1, 1, revenue=5, profit=1),
        fin("2024-11-20", 1, 1, revenue=10, profit=1),
    ]
    trend = monthly_trend(records, {"revenue": "revenue", "profit": "net_profit"}, days=365)
    assert [b["period"] for b in trend] == ["2024-11", "2024-12", "2025-01"]
    assert trend[1]["revenue"] == 25
    assert trend[1]["profit"] == 3


def test_monthly_trend_window_is_trailing_days_from_newest_record():
    records = [
        fin("2024-12-31", 1, 1, revenue=1, profit=0),
        fin("2024-01-01", 1, 1, revenue=100, profit=0),
    ]
    trend = monthly_trend(records, {"revenue": "revenue"}, days=30)
    assert trend == [{"period": "2024-12", "revenue": 1}]


def test_monthly_trend_explicit_today_and_empty():
    assert monthly_trend([], {"revenue": "revenue"}) == []
    records = [fin("2024-12-31", 1, 1, revenue=1, profit=0)]
    assert monthly_trend(records, {"revenue": "revenue"}, days=10, today=date(2025, 3, 1)) == []


def test_window_records_is_half_open():
    records = [prod("2024-11-01", 1, 0, 1), prod("2024-11-10", 1, 0, 1), prod("2024-11-11", 1, 0, 1)]
    rows = window_records(records, days=9, today=date(2024, 11, 10))
    assert [r.date for r in rows] == ["2024-11-10"]


def test_daily_series_last_n_distinct_days_oldest_first():
    records = [
        prod("2024-11-03", 1, 10, 9),
        prod("2024-11-03", 2, 10, 8),
        prod("2024-11-02", 1, 10, 7),
        prod("2024-11-01", 1, 10, 6),
    ]
    series = daily_series(records, {"actual": "actual"}, last_n_days=2)
    assert series == [{"date": "2024-11-02", "actual": 7}, {"date": "2024-11-03", "actual": 17}]


def test_period_change_compares_trailing_windows():
    records = [prod("2024-11-30", 1, 0, 150), prod("2024-10-25", 1, 0, 100)]
    assert period_change(records, "actual", window=30) == 50.0


def test_pct_change_without_baseline_is_zero():
    assert pct_change(10, 0) == 0
    assert pct_change(90, 100) == -10.0


@pytest.mark.parametrize("denominator", [float("nan"), None, "n/a"])
def test_derived_ratio_missing_denominator_is_zero(denominator):
    assert derived_ratio(5, denominator) == 0
    assert derived_ratio(float("nan"), 4) == 0


def test_grouping_helpers_accept_factory_scope():
    rows = [
        prod("2024-11-30", 1, 10, 8),
        prod("2024-12-01", 2, 20, 15, product_id=3),
        prod("2024-12-01", 1, 10, 9),
    ]
    trend = monthly_trend(rows, {"actual": "actual"}, factory_ids=[1])
    assert trend == [{"period": "2024-11", "actual": 8.0}, {"period": "2024-12", "actual": 9.0}]

    daily = daily_series(rows, {"actual": "actual"}, factory_ids=[2])
    assert daily == [{"date": "2024-12-01", "actual": 15.0}]

    by_product = sum_by_key(rows, lambda r: r.product_id, "actual", factory_ids={1})
    assert by_product == {1: 17.0}
    assert sum_by_key(rows, lambda r: r.product_id, "actual", factory_ids=[]) == {}
    # no scope means every factory
    assert sum_by_key(rows, lambda r: r.product_id, "actual") == {1: 17.0, 3: 15.0}
