"""Aggregation layer.

`aggregate` holds the generic folds; each domain module exposes a
`summarize(dataset, ...)` producing the KPIs and chart rows of one page.
"""

from tommbi.metrics.aggregate import (
    daily_series,
    derived_ratio,
    latest_per_factory,
    mean_of,
    monthly_trend,
    period_change,
    sum_by_factory,
    sum_by_product,
)
from tommbi.metrics.kpi import Kpi

__all__ = [
    "Kpi",
    "daily_series",
    "derived_ratio",
    "latest_per_factory",
    "mean_of",
    "monthly_trend",
    "period_change",
    "sum_by_factory",
    "sum_by_product",
]
