from __future__ import annotations

import pytest

from tommbi.ui.format import format_change, format_kpi


@pytest.mark.parametrize(
    "value, fmt, expected",
    [
        (123456, "tons_k", "123.46K"),
        (2_500_000, "money_m", "$2.50M"),
        (12_345, "money_k", "$12.3K"),
        (87.456, "pct", "87.5%"),
        (2.346, "pct2", "2.35%"),
        (1.333, "decimal2", "1.33"),
        (12.5, "hours", "12.5h"),
        (1234.5, "co2", "1,234.5 tCO₂e"),
        (1234567, "number", "1,234,567"),
        (None, "number", "0"),
    ],
)
def test_format_kpi(value, fmt, expected):
    assert format_kpi(value, fmt) == expected


def test_format_change_is_absolute():
    assert format_change(-3.26) == "3.3%"
    assert format_change(0) == "0.0%"
