from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from nicegui import app, ui

from tommbi.assistant.chat import ChatSession, GenerativeClient, messages_from_records
from tommbi.core.models import Dataset
from tommbi.core.state import AppState, FactoryDetail, Language, Overview, Page
from tommbi.i18n import FORECAST_STEPS, PRIVACY_POLICY, month_label, t
from tommbi.metrics import (
    energy,
    executive,
    finance,
    forecast,
    hr,
    maintenance,
    production,
    quality,
    sales,
    supply_chain,
)
from tommbi.settings import Settings
from tommbi.ui.charts import PALETTE, Series, bar_options, line_options, pie_options
from tommbi.ui.widgets import (
    apply_direction,
    chart_card,
    chart_grid,
    echart,
    apply_theme,
    kpi_grid,
    page_container,
    render_filter_bar,
    render_header,
    render_sidebar,
    render_title,
)

logger = logging.getLogger(__name__)

_BLUE, _GREEN, _VIOLET, _PINK, _ORANGE = PALETTE


@dataclass
class PageContext:
    dataset: Dataset
    state: AppState
    refresh: Callable[[], None]

    @property
    def lang(self) -> Language:
        return self.state.language

    @property
    def rtl(self) -> bool:
        return self.state.language.is_rtl

    def tr(self, key: str) -> str:
        return t(key, self.state.language)


def _executive(ctx: PageContext) -> None:
    s = executive.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.production_by_factory")):
            echart(pie_options(s.production_by_factory))
        with chart_card(ctx.tr("chart.revenue_profit_trend")):
            echart(
                line_options(
                    s.finance_trend,
                    x_key="period",
                    series=[
                        Series("revenue", ctx.tr("series.revenue"), _BLUE),
                        Series("profit", ctx.tr("series.profit"), _GREEN),
                    ],
                    rtl=ctx.rtl,
                    x_label=lambda p: month_label(p, ctx.lang),
                )
            )


def _production(ctx: PageContext) -> None:
    s = production.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.daily_production")):
            echart(
                line_options(
                    s.daily,
                    x_key="date",
                    series=[
                        Series("planned", ctx.tr("series.planned"), _VIOLET),
                        Series("actual", ctx.tr("series.actual"), _BLUE),
                    ],
                    rtl=ctx.rtl,
                )
            )
        with chart_card(ctx.tr("chart.production_comparison")):
            echart(
                bar_options(
                    s.by_factory,
                    x_key="name",
                    series=[
                        Series("planned", ctx.tr("series.planned"), _VIOLET),
                        Series("actual", ctx.tr("series.actual"), _BLUE),
                    ],
                    rtl=ctx.rtl,
                )
            )


def _finance_chart(ctx: PageContext) -> None:
    view = ctx.state.finance_view
    rows = finance.drilldown_rows(ctx.dataset, view)
    series = [
        Series("revenue", ctx.tr("series.revenue"), _BLUE),
        Series("profit", ctx.tr("series.profit"), _GREEN),
    ]

    if isinstance(view, FactoryDetail):
        factory = ctx.dataset.factory(view.factory_id)
        title = f"{ctx.tr('chart.revenue_by_product')} {factory.name if factory else ''}".strip()
    else:
        title = ctx.tr("chart.revenue_by_factory")

    def _on_click(e) -> None:
        idx = getattr(e, "data_index", None)
        if not isinstance(ctx.state.finance_view, Overview) or idx is None or not (0 <= idx < len(rows)):
            return
        ctx.state.select_factory(rows[idx]["id"])
        ctx.refresh()

    def _on_back() -> None:
        ctx.state.back_to_overview()
        ctx.refresh()

    with chart_card(title):
        if isinstance(view, FactoryDetail):
            ui.button(ctx.tr("app.back"), icon="arrow_back", on_click=_on_back).props("flat dense no-caps color=primary")
        options = bar_options(rows, x_key="name", series=series, rtl=ctx.rtl)
        if isinstance(view, Overview):
            echart(options, on_point_click=_on_click)
        else:
            echart(options)


def _finance(ctx: PageContext) -> None:
    s = finance.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        _finance_chart(ctx)
        with chart_card(ctx.tr("chart.cost_structure")):
            echart(pie_options(s.cost_structure, name_label=lambda k: ctx.tr(f"cost.{k}")))


def _maintenance(ctx: PageContext) -> None:
    s = maintenance.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.downtime_by_type")):
            echart(pie_options(s.downtime_by_type, name_label=lambda k: ctx.tr(f"downtime.{k}")))
        with chart_card(ctx.tr("chart.downtime_by_factory")):
            echart(
                bar_options(
                    s.downtime_by_factory,
                    x_key="name",
                    series=[Series("downtime_hours", ctx.tr("series.downtime_hours"), _ORANGE)],
                    rtl=ctx.rtl,
                )
            )


def _energy(ctx: PageContext) -> None:
    s = energy.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.energy_by_factory")):
            echart(
                bar_options(
                    s.by_factory,
                    x_key="name",
                    series=[Series("mwh", ctx.tr("series.mwh"), _ORANGE)],
                    rtl=ctx.rtl,
                )
            )
        with chart_card(ctx.tr("chart.intensity_by_product")):
            echart(
                bar_options(
                    s.intensity_by_product,
                    x_key="name",
                    series=[Series("intensity", ctx.tr("series.intensity"), _VIOLET)],
                    rtl=ctx.rtl,
                )
            )


def _quality(ctx: PageContext) -> None:
    s = quality.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.rejection_by_factory")):
            echart(
                bar_options(
                    s.rejection_by_factory,
                    x_key="name",
                    series=[Series("rejection_rate", ctx.tr("series.rejection_rate"), _PINK)],
                    rtl=ctx.rtl,
                )
            )
        with chart_card(ctx.tr("chart.cpk_by_factory")):
            echart(
                bar_options(
                    s.cpk_by_factory,
                    x_key="name",
                    series=[Series("cpk", ctx.tr("series.cpk"), _GREEN)],
                    rtl=ctx.rtl,
                )
            )


def _hr(ctx: PageContext) -> None:
    s = hr.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.employees_by_factory")):
            echart(pie_options(s.employees_by_factory))
        with chart_card(ctx.tr("chart.incidents_by_factory")):
            echart(
                bar_options(
                    s.incidents_by_factory,
                    x_key="name",
                    series=[Series("incidents", ctx.tr("series.incidents"), _PINK)],
                    rtl=ctx.rtl,
                )
            )


def _supply_chain(ctx: PageContext) -> None:
    s = supply_chain.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.inventory_by_factory")):
            echart(
                bar_options(
                    s.inventory_by_factory,
                    x_key="name",
                    series=[
                        Series("raw_material", ctx.tr("series.raw_material"), _BLUE),
                        Series("finished_goods", ctx.tr("series.finished_goods"), _GREEN),
                    ],
                    rtl=ctx.rtl,
                )
            )
        with chart_card(ctx.tr("chart.on_time_by_factory")):
            echart(
                line_options(
                    s.on_time_by_factory,
                    x_key="name",
                    series=[Series("on_time", ctx.tr("series.on_time"), _ORANGE)],
                    rtl=ctx.rtl,
                )
            )


def _sales(ctx: PageContext) -> None:
    s = sales.summarize(ctx.dataset)
    kpi_grid(s.kpis, ctx.state)
    with chart_grid():
        with chart_card(ctx.tr("chart.sales_by_region")):
            echart(pie_options(s.by_region, name_label=lambda k: ctx.tr(f"region.{k}")))
        with chart_card(ctx.tr("chart.sales_by_customer")):
            echart(
                bar_options(
                    s.top_customers,
                    x_key="name",
                    series=[Series("revenue", ctx.tr("series.revenue"), _BLUE)],
                    rtl=ctx.rtl,
                )
            )


def forecast_rows(summary: forecast.ForecastSummary, language: Language) -> list[dict]:
    """Combined history/projection rows with a display label per row."""
    steps = FORECAST_STEPS[language.value]
    rows = summary.combined()
    n_hist = len(summary.history)
    for i, row in enumerate(rows):
        if i < n_hist:
            row["label"] = month_label(row["period"], language)
        else:
            k = i - n_hist
            row["label"] = steps[k] if k < len(steps) else month_label(row["period"], language)
    return rows


def _ai_predictive(ctx: PageContext) -> None:
    s = forecast.summarize(ctx.dataset)
    with chart_card(ctx.tr("chart.production_forecast")):
        echart(
            line_options(
                forecast_rows(s, ctx.lang),
                x_key="label",
                series=[
                    Series("actual", ctx.tr("series.actual_production"), _BLUE),
                    Series("forecast", ctx.tr("series.forecast_production"), _PINK),
                ],
                rtl=ctx.rtl,
                unit=ctx.tr("unit.tons"),
                dashed={"forecast"},
            )
        )


def _privacy(ctx: PageContext) -> None:
    with ui.card().classes("tm-glass p-6 w-full"):
        for paragraph in PRIVACY_POLICY[ctx.lang.value]:
            ui.label(paragraph).classes("mb-3 leading-relaxed")


PAGE_RENDERERS: dict[Page, Callable[[PageContext], None]] = {
    Page.EXECUTIVE: _executive,
    Page.PRODUCTION: _production,
    Page.FINANCE: _finance,
    Page.MAINTENANCE: _maintenance,
    Page.ENERGY: _energy,
    Page.QUALITY: _quality,
    Page.HR: _hr,
    Page.SUPPLY_CHAIN: _supply_chain,
    Page.SALES: _sales,
    Page.AI_PREDICTIVE: _ai_predictive,
    Page.PRIVACY: _privacy,
}

# Pages that show the factory filter bar.
FILTER_PAGES = frozenset({Page.PRODUCTION, Page.FINANCE, Page.MAINTENANCE, Page.ENERGY, Page.QUALITY})


def missing_renderers() -> list[Page]:
    return [p for p in Page if p not in PAGE_RENDERERS]


def _render_chat(chat: ChatSession, state: AppState) -> None:
    lang = state.language
    with ui.card().classes("tm-glass tm-chat p-3 gap-2"):
        with ui.row().classes("items-center gap-2"):
            ui.icon("smart_toy").classes("text-xl text-blue-400")
            ui.label(t("chat.title", lang)).classes("font-semibold")
        with ui.scroll_area().classes("w-full h-72"):
            ui.label(t("chat.greeting", lang)).classes("tm-bubble-assistant text-sm")
            for msg in chat.messages:
                align = "self-end" if msg.role == "user" else "self-start"
                ui.label(msg.text).classes(f"tm-bubble-{msg.role} text-sm {align} whitespace-pre-wrap")
            if chat.pending:
                with ui.row().classes("items-center gap-2"):
                    ui.spinner(size="sm")
                    ui.label(t("chat.thinking", lang)).classes("text-xs tm-subtitle")

        with ui.row().classes("w-full items-center no-wrap gap-2"):
            question = ui.input(placeholder=t("chat.placeholder", lang)).props("dense outlined dark").classes("grow")
            send = ui.button(icon="send").props("round dense color=primary").tooltip(t("chat.send", lang))
            if chat.pending:
                question.disable()
                send.disable()

            async def _send() -> None:
                text = question.value
                await chat.ask(text, state.language)

            send.on_click(_send)
            question.on("keydown.enter", _send)


def register_pages(dataset: Dataset, settings: Settings) -> None:
    """Register the dashboard routes for `dataset`."""
    missing = missing_renderers()
    if missing:
        raise RuntimeError(f"No renderer for pages: {', '.join(p.value for p in missing)}")

    default_language = Language.parse(settings.language)

    def _render(page: Page) -> None:
        apply_theme()
        storage = app.storage.user
        state = AppState(
            page=page,
            language=Language.parse(storage.get("language"), default_language),
            sidebar_open=bool(storage.get("sidebar_open", True)),
            factory_filter=frozenset(storage.get("factory_filter") or [f.id for f in dataset.factories]),
        )

        # The transcript lives in per-client storage so it survives navigation between pages.
        chat = ChatSession(
            client=GenerativeClient.from_settings(settings),
            dataset=dataset,
            messages=messages_from_records(storage.get("chat")),
        )

        @ui.refreshable
        def chat_view() -> None:
            _render_chat(chat, state)

        def _on_chat_update() -> None:
            storage["chat"] = chat.records()
            chat_view.refresh()

        chat.on_update = _on_chat_update

        def _toggle_language() -> None:
            storage["language"] = state.toggle_language().value
            logger.info("Language switched to %s", state.language.value)
            shell.refresh()
            chat_view.refresh()

        def _toggle_sidebar() -> None:
            storage["sidebar_open"] = state.toggle_sidebar()
            shell.refresh()

        def _toggle_filter(factory_id: int) -> None:
            storage["factory_filter"] = sorted(state.toggle_factory_filter(factory_id))

        @ui.refreshable
        def shell() -> None:
            apply_direction(state)
            with ui.column().classes("w-full gap-0").props(f"dir={state.direction}"):
                render_header(state, on_menu=_toggle_sidebar, on_language=_toggle_language)
                with ui.row().classes("w-full no-wrap gap-0 items-stretch"):
                    render_sidebar(state)
                    with ui.column().classes("grow gap-0"):
                        with page_container():
                            render_title(state)
                            if state.page in FILTER_PAGES:
                                render_filter_bar(state, dataset.factories, _toggle_filter)
                            content()

        @ui.refreshable
        def content() -> None:
            PAGE_RENDERERS[state.page](PageContext(dataset=dataset, state=state, refresh=content.refresh))

        shell()
        with ui.page_sticky(position="bottom-right", x_offset=20, y_offset=20):
            chat_view()

    def _handler(page: Page) -> Callable[[], None]:
        def handler() -> None:
            _render(page)

        return handler

    for page in Page:
        ui.page(page.path, title=f"{settings.title} | {t(f'menu.{page.value}', 'en')}")(_handler(page))
