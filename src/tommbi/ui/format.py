from __future__ import annotations


def format_kpi(value: float, fmt: str) -> str:
    """Render a KPI value for a card.

    fmt: tons_k | money_m | money_k | pct | pct2 | decimal1 | decimal2 | hours | co2 | number
    """
    v = float(value or 0.0)
    if fmt == "tons_k":
        return f"{v / 1000:,.2f}K"
    if fmt == "money_m":
        return f"${v / 1_000_000:,.2f}M"
    if fmt == "money_k":
        return f"${v / 1000:,.1f}K"
    if fmt == "pct":
        return f"{v:.1f}%"
    if fmt == "pct2":
        return f"{v:.2f}%"
    if fmt == "decimal1":
        return f"{v:,.1f}"
    if fmt == "decimal2":
        return f"{v:.2f}"
    if fmt == "hours":
        return f"{v:.1f}h"
    if fmt == "co2":
        return f"{v:,.1f} tCO₂e"
    return f"{v:,.0f}"


def format_change(change: float) -> str:
    return f"{abs(float(change or 0.0)):.1f}%"
