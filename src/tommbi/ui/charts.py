"""ECharts option builders.

Pure functions returning option dicts for `ui.echart`; they never touch
NiceGUI so they can be unit tested.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

PALETTE = ["#3b82f6", "#10b981", "#8b5cf6", "#ec4899", "#f97316"]

_AXIS_LABEL = {"color": "rgba(255,255,255,0.6)"}
_SPLIT_LINE = {"lineStyle": {"type": "dashed", "color": "rgba(59,130,246,0.2)"}}


@dataclass(frozen=True)
class Series:
    key: str
    label: str
    color: str


def _round(v: Any) -> Any:
    if isinstance(v, float):
        return round(v, 2)
    return v


def _axes(categories: list[str], *, rtl: bool, unit: str) -> dict:
    return {
        "xAxis": {
            "type": "category",
            "data": categories,
            "inverse": rtl,
            "axisLabel": _AXIS_LABEL,
        },
        "yAxis": {
            "type": "value",
            "name": unit or None,
            "position": "right" if rtl else "left",
            "axisLabel": _AXIS_LABEL,
            "splitLine": _SPLIT_LINE,
        },
    }


def _base(series_labels: list[str]) -> dict:
    return {
        "tooltip": {"trigger": "axis"},
        "legend": {"data": series_labels, "textStyle": {"color": "#cbd5e1"}},
        "grid": {"left": 55, "right": 55, "top": 40, "bottom": 45},
    }


def bar_options(
    rows: list[dict],
    *,
    x_key: str,
    series: list[Series],
    rtl: bool = False,
    unit: str = "",
    x_label: Callable[[Any], str] | None = None,
) -> dict:
    categories = [x_label(r.get(x_key)) if x_label else str(r.get(x_key, "")) for r in rows]
    options = _base([s.label for s in series])
    options.update(_axes(categories, rtl=rtl, unit=unit))
    options["series"] = [
        {
            "name": s.label,
            "type": "bar",
            "itemStyle": {"color": s.color},
            "data": [_round(r.get(s.key)) for r in rows],
        }
        for s in series
    ]
    return options


def line_options(
    rows: list[dict],
    *,
    x_key: str,
    series: list[Series],
    rtl: bool = False,
    unit: str = "",
    x_label: Callable[[Any], str] | None = None,
    dashed: set[str] | None = None,
) -> dict:
    categories = [x_label(r.get(x_key)) if x_label else str(r.get(x_key, "")) for r in rows]
    dashed = dashed or set()
    options = _base([s.label for s in series])
    options.update(_axes(categories, rtl=rtl, unit=unit))
    options["series"] = [
        {
            "name": s.label,
            "type": "line",
            "smooth": True,
            "symbolSize": 4,
            "connectNulls": False,
            "itemStyle": {"color": s.color},
            "lineStyle": {"width": 2, "type": "dashed" if s.key in dashed else "solid"},
            "data": [_round(r.get(s.key)) for r in rows],
        }
        for s in series
    ]
    return options


def pie_options(
    rows: list[dict],
    *,
    value_key: str = "value",
    name_key: str = "name",
    name_label: Callable[[Any], str] | None = None,
) -> dict:
    data = [
        {
            "name": name_label(r.get(name_key)) if name_label else str(r.get(name_key, "")),
            "value": _round(r.get(value_key)),
        }
        for r in rows
    ]
    return {
        "tooltip": {"trigger": "item"},
        "legend": {"bottom": 0, "textStyle": {"color": "#cbd5e1"}},
        "color": PALETTE,
        "series": [
            {
                "type": "pie",
                "radius": "65%",
                "label": {"formatter": "{d}%", "color": "#fff"},
                "data": data,
            }
        ],
    }
