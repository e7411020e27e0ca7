from __future__ import annotations

from contextlib import contextmanager
from typing import Callable

from nicegui import ui

from tommbi.core.models import Factory
from tommbi.core.state import MENU_PAGES, AppState, Page
from tommbi.i18n import menu_label, page_title, t
from tommbi.metrics.kpi import Kpi
from tommbi.ui.format import format_change, format_kpi

_MENU_ICONS: dict[Page, str] = {
    Page.EXECUTIVE: "dashboard",
    Page.PRODUCTION: "precision_manufacturing",
    Page.FINANCE: "payments",
    Page.MAINTENANCE: "build",
    Page.ENERGY: "bolt",
    Page.QUALITY: "verified",
    Page.HR: "groups",
    Page.SUPPLY_CHAIN: "local_shipping",
    Page.SALES: "shopping_cart",
    Page.AI_PREDICTIVE: "psychology",
}


def apply_theme() -> None:
    """Dark glass theme shared by every dashboard page."""
    ui.colors(
        primary="#3b82f6",  # blue-500
        secondary="#8b5cf6",  # violet-500
        positive="#10b981",  # emerald-500
        negative="#ef4444",  # red-500
        warning="#f59e0b",  # amber-500
    )

    ui.add_css(
        """
        body { background: linear-gradient(135deg, #0f172a 0%, #1e1b4b 100%); color: #e2e8f0; min-height: 100vh; }
        .tm-container { width: 100%; padding: 16px 24px; }
        .tm-glass { background: rgba(15, 23, 42, 0.55); border: 1px solid rgba(59, 130, 246, 0.2);
                    backdrop-filter: blur(8px); border-radius: 12px; color: #e2e8f0; }
        .tm-header { background: rgba(15, 23, 42, 0.85); border-bottom: 1px solid rgba(59, 130, 246, 0.25); }
        .tm-sidebar { width: 250px; min-height: calc(100vh - 64px); }
        .tm-sidebar.tm-collapsed { width: 72px; }
        .tm-subtitle { color: #94a3b8; }
        .tm-up { color: #10b981; }
        .tm-down { color: #ef4444; }
        .tm-chat { width: 360px; max-height: 520px; }
        .tm-bubble-user { background: #2563eb; color: white; border-radius: 12px; padding: 6px 10px; }
        .tm-bubble-assistant { background: rgba(51, 65, 85, 0.9); border-radius: 12px; padding: 6px 10px; }
        [dir="rtl"] body, [dir="rtl"] .q-field__native { font-family: Vazirmatn, Tahoma, sans-serif; }
        """
    )


def apply_direction(state: AppState) -> None:
    """Set <html lang/dir> for the current client."""
    ui.run_javascript(
        f"document.documentElement.setAttribute('dir', '{state.direction}');"
        f"document.documentElement.setAttribute('lang', '{state.language.value}');"
    )


@contextmanager
def page_container():
    with ui.element("div").classes("tm-container"):
        yield


def render_header(
    state: AppState,
    *,
    on_menu: Callable[[], None],
    on_language: Callable[[], None],
) -> None:
    lang = state.language
    with ui.row().classes("tm-header w-full items-center justify-between gap-4 px-4 py-2"):
        with ui.row().classes("items-center gap-3"):
            ui.button(icon="menu", on_click=on_menu).props("flat round dense color=white")
            ui.label(t("app.brand", lang)).classes("text-2xl font-bold text-blue-400")
            ui.label(page_title(state.page, lang)).classes("text-lg font-semibold")
        with ui.row().classes("items-center gap-2"):
            ui.button(t("app.switch_language", lang), icon="translate", on_click=on_language).props(
                "outline dense no-caps color=primary"
            )
            with ui.row().classes("items-center gap-1"):
                ui.icon("account_circle").classes("text-2xl")
                ui.label(t("app.user", lang)).classes("text-sm")


def render_sidebar(state: AppState) -> None:
    lang = state.language
    collapsed = not state.sidebar_open
    with ui.column().classes("tm-sidebar tm-glass gap-1 p-2" + (" tm-collapsed" if collapsed else "")):
        for page in MENU_PAGES:
            is_active = page is state.page
            props = "align=left no-caps" + (" unelevated color=primary" if is_active else " flat color=white")
            label = "" if collapsed else menu_label(page, lang)
            ui.button(label, icon=_MENU_ICONS[page], on_click=lambda p=page: ui.navigate.to(p.path)).props(
                props
            ).classes("w-full")
        ui.space()
        if not collapsed:
            ui.link(menu_label(Page.PRIVACY, lang), Page.PRIVACY.path).classes("text-xs text-slate-400 px-2")
            ui.label(t("app.copyright", lang)).classes("text-xs text-slate-500 px-2")


def render_title(state: AppState) -> None:
    lang = state.language
    ui.label(page_title(state.page, lang)).classes("text-3xl font-bold")
    ui.label(t(f"subtitle.{state.page.value}", lang)).classes("tm-subtitle mb-4")


def render_filter_bar(state: AppState, factories: list[Factory], on_toggle: Callable[[int], None]) -> None:
    with ui.row().classes("tm-glass items-center gap-3 px-4 py-2 mb-4"):
        ui.label(t("filter.label", state.language)).classes("font-semibold")
        for f in factories:
            ui.checkbox(
                f.name,
                value=f.id in state.factory_filter,
                on_change=lambda _e, fid=f.id: on_toggle(fid),
            ).props("dense color=primary")


def kpi_card(kpi: Kpi, state: AppState) -> None:
    lang = state.language
    with ui.card().classes("tm-glass p-4 w-full"):
        with ui.row().classes("w-full items-center justify-between no-wrap"):
            ui.label(t(kpi.title, lang)).classes("text-sm tm-subtitle")
            ui.icon(kpi.icon).classes("text-2xl text-blue-400")
        ui.label(format_kpi(kpi.value, kpi.fmt)).classes("text-2xl font-bold")
        up = kpi.change >= 0
        with ui.row().classes("items-center gap-1 text-xs"):
            ui.icon("arrow_upward" if up else "arrow_downward").classes("tm-up" if up else "tm-down")
            ui.label(format_change(kpi.change)).classes("tm-up" if up else "tm-down")
            ui.label(t(kpi.note, lang)).classes("tm-subtitle")


def kpi_grid(kpis: list[Kpi], state: AppState) -> None:
    with ui.element("div").classes("w-full grid gap-4 grid-cols-1 md:grid-cols-2 xl:grid-cols-4 mb-4"):
        for kpi in kpis:
            kpi_card(kpi, state)


@contextmanager
def chart_card(title: str):
    with ui.card().classes("tm-glass p-4 w-full h-full"):
        ui.label(title).classes("text-lg font-semibold")
        yield


@contextmanager
def chart_grid(cols: int = 2):
    cls = "lg:grid-cols-2" if cols == 2 else "lg:grid-cols-3"
    with ui.element("div").classes(f"w-full grid gap-4 grid-cols-1 {cls} items-stretch mb-4"):
        yield


def echart(options: dict, **kwargs):
    return ui.echart(options, **kwargs).classes("w-full h-80")
