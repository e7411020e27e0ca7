from __future__ import annotations

from datetime import date

from tommbi.core.state import MENU_PAGES, AppState, FactoryDetail, Language, Overview, Page
from tommbi.data.generator import generate_dataset
from tommbi.i18n import TEXT, menu_label, page_title, t
from tommbi.metrics import executive


def test_finance_view_starts_at_overview_and_drills_down():
    state = AppState()
    assert state.finance_view == Overview()

    state.select_factory(3)
    assert state.finance_view == FactoryDetail(factory_id=3)

    # selecting another factory while in detail replaces the payload
    state.select_factory(2)
    assert state.finance_view == FactoryDetail(factory_id=2)

    state.back_to_overview()
    assert isinstance(state.finance_view, Overview)


def test_language_toggle_flips_direction():
    state = AppState(language=Language.EN)
    assert state.direction == "ltr"
    assert state.toggle_language() is Language.FA
    assert state.direction == "rtl"
    assert state.language.is_rtl
    state.toggle_language()
    assert state.direction == "ltr"


def test_language_toggle_changes_labels_but_not_aggregates():
    dataset = generate_dataset(days=60, today=date(2024, 12, 31), seed=1)
    state = AppState(language=Language.EN)

    before_values = [k.value for k in executive.summarize(dataset).kpis]
    en_labels = [menu_label(p, state.language) for p in MENU_PAGES] + [page_title(state.page, state.language)]

    state.toggle_language()

    after_values = [k.value for k in executive.summarize(dataset).kpis]
    fa_labels = [menu_label(p, state.language) for p in MENU_PAGES] + [page_title(state.page, state.language)]

    assert before_values == after_values
    assert all(en != fa for en, fa in zip(en_labels, fa_labels))


def test_language_parse_falls_back_to_default():
    assert Language.parse("EN") is Language.EN
    assert Language.parse("de") is Language.FA
    assert Language.parse(None, Language.EN) is Language.EN


def test_page_paths_and_parse():
    assert Page.EXECUTIVE.path == "/"
    assert Page.SUPPLY_CHAIN.path == "/supply_chain"
    assert Page.parse("finance") is Page.FINANCE
    assert Page.parse("nope") is Page.EXECUTIVE
    assert Page.PRIVACY not in MENU_PAGES


def test_sidebar_and_page_updates():
    state = AppState()
    assert state.toggle_sidebar() is False
    assert state.toggle_sidebar() is True
    state.set_page(Page.HR)
    assert state.page is Page.HR


def test_factory_filter_toggle():
    state = AppState(factory_filter=frozenset({1, 2}))
    assert state.toggle_factory_filter(2) == frozenset({1})
    assert state.toggle_factory_filter(4) == frozenset({1, 4})


def test_every_page_has_translated_title_and_subtitle():
    for page in Page:
        for lang in Language:
            assert f"title.{page.value}" in TEXT
            assert f"subtitle.{page.value}" in TEXT
            assert t(f"title.{page.value}", lang)
