"""Testy lokalizacji interfejsu użytkownika."""

from __future__ import annotations

import pytest

from space_analyzer.ui.localization import LocalizationManager, _TRANSLATIONS


def test_localization_switches_language() -> None:
    manager = LocalizationManager()
    assert manager.text("app.title") == "Space Analyzer"
    assert manager.text("button.up") == "Przejdź wyżej"

    manager.set_locale("en")
    assert manager.text("button.up") == "Go up"
    assert manager.text("status.items").format(count=3) == "3 items"


def test_localization_rejects_unknown_locale() -> None:
    manager = LocalizationManager()
    with pytest.raises(ValueError):
        manager.set_locale("de")
    assert manager.locale == "pl"


def test_missing_key_raises_error() -> None:
    manager = LocalizationManager()
    with pytest.raises(KeyError):
        manager.text("nonexistent.key")


def test_all_locales_define_the_same_keys() -> None:
    assert set(_TRANSLATIONS["pl"]) == set(_TRANSLATIONS["en"])


def test_available_locales() -> None:
    assert LocalizationManager().available_locales() == {"pl": "Polski", "en": "English"}


def test_text_fills_placeholders() -> None:
    manager = LocalizationManager(locale="en")
    assert manager.text("status.total", size="1.0 KB") == "Total: 1.0 KB"
    assert manager.text("status.total") == "Total: {size}"


def test_constructor_rejects_unknown_locale() -> None:
    with pytest.raises(ValueError):
        LocalizationManager(locale="fr")
