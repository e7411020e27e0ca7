"""Per-client UI state.

One `AppState` is created for each browser client and handed to the views.
Each field has a single update method; views never assign fields directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Language(str, Enum):
    EN = "en"
    FA = "fa"

    @property
    def direction(self) -> str:
        return "rtl" if self is Language.FA else "ltr"

    @property
    def is_rtl(self) -> bool:
        return self.direction == "rtl"

    def toggled(self) -> "Language":
        return Language.EN if self is Language.FA else Language.FA

    @classmethod
    def parse(cls, value: str | None, default: "Language | None" = None) -> "Language":
        default = default or cls.FA
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return default


class Page(str, Enum):
    EXECUTIVE = "executive"
    PRODUCTION = "production"
    FINANCE = "finance"
    MAINTENANCE = "maintenance"
    ENERGY = "energy"
    QUALITY = "quality"
    HR = "hr"
    SUPPLY_CHAIN = "supply_chain"
    SALES = "sales"
    AI_PREDICTIVE = "ai_predictive"
    PRIVACY = "privacy"

    @property
    def path(self) -> str:
        return "/" if self is Page.EXECUTIVE else f"/{self.value}"

    @classmethod
    def parse(cls, value: str | None) -> "Page":
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.EXECUTIVE


# Sidebar order; PRIVACY is reachable from the sidebar footer only.
MENU_PAGES: tuple[Page, ...] = (
    Page.EXECUTIVE,
    Page.PRODUCTION,
    Page.FINANCE,
    Page.MAINTENANCE,
    Page.ENERGY,
    Page.QUALITY,
    Page.HR,
    Page.SUPPLY_CHAIN,
    Page.SALES,
    Page.AI_PREDICTIVE,
)


@dataclass(frozen=True)
class Overview:
    """Finance chart shows revenue/profit for every factory."""


@dataclass(frozen=True)
class FactoryDetail:
    """Finance chart shows the per-product breakdown of one factory."""

    factory_id: int


FinanceView = Union[Overview, FactoryDetail]


@dataclass
class AppState:
    page: Page = Page.EXECUTIVE
    language: Language = Language.FA
    sidebar_open: bool = True
    finance_view: FinanceView = field(default_factory=Overview)
    # Collected by the filter bar; not passed to any aggregation (see DESIGN.md).
    factory_filter: frozenset[int] = frozenset()

    @property
    def direction(self) -> str:
        return self.language.direction

    def set_page(self, page: Page) -> None:
        self.page = page

    def set_language(self, language: Language) -> None:
        self.language = language

    def toggle_language(self) -> Language:
        self.language = self.language.toggled()
        return self.language

    def toggle_sidebar(self) -> bool:
        self.sidebar_open = not self.sidebar_open
        return self.sidebar_open

    def select_factory(self, factory_id: int) -> None:
        """Overview -> FactoryDetail(factory_id)."""
        self.finance_view = FactoryDetail(factory_id=int(factory_id))

    def back_to_overview(self) -> None:
        """FactoryDetail -> Overview."""
        self.finance_view = Overview()

    def toggle_factory_filter(self, factory_id: int) -> frozenset[int]:
        current = set(self.factory_filter)
        if factory_id in current:
            current.remove(factory_id)
        else:
            current.add(factory_id)
        self.factory_filter = frozenset(current)
        return self.factory_filter
