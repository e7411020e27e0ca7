from __future__ import annotations

from tommbi.core.state import Language
from tommbi.i18n import FORECAST_STEPS, MONTHS, PRIVACY_POLICY, TEXT, month_label, t


def test_every_entry_has_both_languages():
    for key, entry in TEXT.items():
        assert entry.get("en"), key
        assert entry.get("fa"), key


def test_unknown_key_is_returned_as_is():
    assert t("no.such.key", Language.EN) == "no.such.key"


def test_translation_accepts_enum_or_code():
    assert t("menu.finance", Language.EN) == "Finance"
    assert t("menu.finance", "fa") == "مالی"


def test_month_label():
    assert month_label("2024-11", Language.EN) == "Nov 2024"
    assert month_label("2025-01", "fa") == f"{MONTHS['fa'][0]} 2025"
    assert month_label("+1", Language.EN) == "+1"


def test_static_tables_cover_both_languages():
    for table in (MONTHS, FORECAST_STEPS, PRIVACY_POLICY):
        assert set(table) == {"en", "fa"}
        assert len(table["en"]) == len(table["fa"])
