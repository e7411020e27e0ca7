from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Kpi:
    """A KPI card, language independent.

    `title` and `note` are translation keys; `fmt` names the number format used
    by the UI (see tommbi.ui.format).
    """

    title: str
    value: float
    fmt: str
    change: float
    note: str
    icon: str
