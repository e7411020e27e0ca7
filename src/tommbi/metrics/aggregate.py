"""Generic folds over daily metric records.

Every function here is total: empty or missing input degrades to zero/empty
output instead of raising. `value` arguments accept either an attribute name
or a callable taking a record.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from datetime import date, timedelta
from operator import attrgetter
from typing import Any, TypeVar, Union

from tommbi.core.models import Factory, Product

R = TypeVar("R")
Value = Union[str, Callable[[Any], float]]


def _getter(value: Value) -> Callable[[Any], float]:
    return attrgetter(value) if isinstance(value, str) else value


def scope_records(records: Iterable[R], factory_ids: Iterable[int] | None = None) -> list[R]:
    """Records of the given factories (all records when `factory_ids` is None)."""
    if factory_ids is None:
        return list(records or [])
    allowed = set(factory_ids)
    return [r for r in records or [] if r.factory_id in allowed]


def _as_number(x) -> float:
    try:
        n = float(x or 0.0)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(n) else n


def sum_of(records: Iterable[Any], value: Value, *, factory_ids: Iterable[int] | None = None) -> float:
    get = _getter(value)
    return sum(_as_number(get(r)) for r in scope_records(records, factory_ids))


def mean_of(records: Iterable[Any], value: Value, *, factory_ids: Iterable[int] | None = None) -> float:
    """Arithmetic mean of `value`; 0 for an empty collection."""
    rows = scope_records(records, factory_ids)
    if not rows:
        return 0.0
    return sum_of(rows, value) / len(rows)


def count_where(records: Iterable[Any], predicate: Callable[[Any], bool], *, factory_ids: Iterable[int] | None = None) -> int:
    return sum(1 for r in scope_records(records, factory_ids) if predicate(r))


def derived_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is 0 or missing (None, NaN)."""
    num = _as_number(numerator)
    den = _as_number(denominator)
    if not den:
        return 0.0
    return num / den


def percent(numerator: float, denominator: float) -> float:
    return derived_ratio(numerator, denominator) * 100.0


def _scoped_factories(factories: list[Factory], factory_ids: Iterable[int] | None) -> list[Factory]:
    if factory_ids is None:
        return list(factories or [])
    allowed = set(factory_ids)
    return [f for f in factories or [] if f.id in allowed]


def sum_by_factory(
    factories: list[Factory],
    records: Iterable[Any],
    value: Value,
    *,
    factory_ids: Iterable[int] | None = None,
) -> dict[str, float]:
    """Factory name -> summed value, in factory-list order.

    Factories without records are reported with 0.
    """
    get = _getter(value)
    totals: dict[int, float] = {}
    for r in records or []:
        totals[r.factory_id] = totals.get(r.factory_id, 0.0) + _as_number(get(r))
    return {f.name: totals.get(f.id, 0.0) for f in _scoped_factories(factories, factory_ids)}


def mean_by_factory(
    factories: list[Factory],
    records: Iterable[Any],
    value: Value,
    *,
    factory_ids: Iterable[int] | None = None,
) -> dict[str, float]:
    """Factory name -> mean value (0 for factories without records)."""
    get = _getter(value)
    sums: dict[int, float] = {}
    counts: dict[int, int] = {}
    for r in records or []:
        sums[r.factory_id] = sums.get(r.factory_id, 0.0) + _as_number(get(r))
        counts[r.factory_id] = counts.get(r.factory_id, 0) + 1
    return {
        f.name: derived_ratio(sums.get(f.id, 0.0), counts.get(f.id, 0))
        for f in _scoped_factories(factories, factory_ids)
    }


def sum_by_product(
    products: list[Product],
    records: Iterable[Any],
    factory: Factory,
    value: Value,
) -> dict[str, float]:
    """Product name -> summed value within one factory.

    Only products whose factory type matches `factory` are reported, in
    product-list order.
    """
    get = _getter(value)
    totals: dict[int, float] = {}
    for r in records or []:
        if r.factory_id != factory.id:
            continue
        totals[r.product_id] = totals.get(r.product_id, 0.0) + _as_number(get(r))
    return {p.name: totals.get(p.id, 0.0) for p in products or [] if p.factory_type == factory.type}


def sum_by_key(
    records: Iterable[Any],
    key: Callable[[Any], Any],
    value: Value,
    *,
    factory_ids: Iterable[int] | None = None,
) -> dict[Any, float]:
    """Group by an arbitrary key, preserving first-seen key order."""
    get = _getter(value)
    out: dict[Any, float] = {}
    for r in scope_records(records, factory_ids):
        k = key(r)
        out[k] = out.get(k, 0.0) + _as_number(get(r))
    return out


def latest_per_factory(
    factories: list[Factory],
    records: Iterable[R],
    *,
    factory_ids: Iterable[int] | None = None,
) -> dict[int, R]:
    """Factory id -> most recent record, in factory-list order.

    On equal dates the first record encountered wins. Factories without any
    record are omitted.
    """
    latest: dict[int, R] = {}
    for r in records or []:
        cur = latest.get(r.factory_id)
        if cur is None or r.date > cur.date:
            latest[r.factory_id] = r
    return {f.id: latest[f.id] for f in _scoped_factories(factories, factory_ids) if f.id in latest}


def latest_date(records: Iterable[Any]) -> date | None:
    dates = [r.date for r in records or []]
    if not dates:
        return None
    return date.fromisoformat(max(dates))


def month_key(day: str) -> str:
    """'2024-11-05' -> '2024-11' (sortable year-month key)."""
    return str(day)[:7]


def window_records(records: Iterable[Any], *, days: int, today: date) -> list[Any]:
    """Records dated in (today - days, today]."""
    cutoff = (today - timedelta(days=days)).isoformat()
    end = today.isoformat()
    return [r for r in records or [] if cutoff < r.date <= end]


def monthly_trend(
    records: Iterable[Any],
    values: dict[str, Value],
    *,
    days: int = 365,
    today: date | None = None,
    factory_ids: Iterable[int] | None = None,
) -> list[dict[str, Any]]:
    """Sum `values` per calendar month over the trailing `days` window.

    Buckets are keyed by year-month ("period") and returned in chronological
    order. `today` defaults to the newest record date.
    """
    rows = scope_records(records, factory_ids)
    anchor = today or latest_date(rows)
    if anchor is None:
        return []
    getters = {name: _getter(v) for name, v in values.items()}
    buckets: dict[str, dict[str, Any]] = {}
    for r in window_records(rows, days=days, today=anchor):
        key = month_key(r.date)
        bucket = buckets.setdefault(key, {"period": key, **{name: 0.0 for name in getters}})
        for name, get in getters.items():
            bucket[name] += _as_number(get(r))
    return [buckets[k] for k in sorted(buckets)]


def daily_series(
    records: Iterable[Any],
    values: dict[str, Value],
    *,
    last_n_days: int = 30,
    factory_ids: Iterable[int] | None = None,
) -> list[dict[str, Any]]:
    """Per-day sums for the most recent `last_n_days` distinct dates, oldest first."""
    getters = {name: _getter(v) for name, v in values.items()}
    by_day: dict[str, dict[str, Any]] = {}
    for r in scope_records(records, factory_ids):
        bucket = by_day.setdefault(r.date, {"date": r.date, **{name: 0.0 for name in getters}})
        for name, get in getters.items():
            bucket[name] += _as_number(get(r))
    days = sorted(by_day)[-last_n_days:] if last_n_days > 0 else []
    return [by_day[d] for d in days]


def period_change(
    records: Iterable[Any],
    value: Value,
    *,
    window: int = 30,
    today: date | None = None,
    reducer: Callable[[list[Any], Value], float] = sum_of,
) -> float:
    """Percent change of the last `window` days against the preceding window.

    Returns 0 when the preceding window has no value.
    """
    rows = list(records or [])
    anchor = today or latest_date(rows)
    if anchor is None:
        return 0.0
    current = reducer(window_records(rows, days=window, today=anchor), value)
    previous = reducer(window_records(rows, days=window, today=anchor - timedelta(days=window)), value)
    return pct_change(current, previous)


def pct_change(current: float, previous: float) -> float:
    """(current - previous) / |previous| in percent, rounded to 0.1; 0 without a baseline."""
    if not previous:
        return 0.0
    return round((current - previous) / abs(previous) * 100.0, 1)


def rows_from_mapping(mapping: dict[str, float], field: str) -> list[dict[str, Any]]:
    """{'A': 1.0} -> [{'name': 'A', field: 1.0}] for chart series."""
    return [{"name": name, field: v} for name, v in mapping.items()]
