"""Teksty interfejsu w dwóch językach: polskim i angielskim."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping


_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "pl": {
        "app.title": "Space Analyzer",
        "button.up": "Przejdź wyżej",
        "drive.used": "{size} zajęte",
        "drive.total": "{size} łącznie",
        "column.icon": "",
        "column.name": "Nazwa",
        "column.type": "Typ",
        "column.size": "Rozmiar",
        "column.usage": "Zajętość",
        "column.share": "%",
        "column.items": "Elementy",
        "type.folder": "Folder",
        "type.file": "Plik",
        "welcome.select_drive": "Wybierz dysk powyżej, aby rozpocząć analizę zajętości miejsca.",
        "welcome.empty": "Ten katalog jest pusty lub niedostępny.",
        "loading.reading": "Odczyt {location}",
        "error.listing": "Nie udało się odczytać katalogu:\n{message}",
        "size.pending": "…",
        "size.failed": "?",
        "tooltip.size_failed": "Nie udało się policzyć rozmiaru tego katalogu.",
        "status.ready": "Gotowy",
        "status.reading": "Odczyt katalogu…",
        "status.items": "{count} elementów",
        "status.total": "Razem: {size}",
        "status.calculating.one": "Liczenie {count} folderu…",
        "status.calculating.many": "Liczenie {count} folderów…",
        "language.label": "Język:",
        "language.native": "Polski",
    },
    "en": {
        "app.title": "Space Analyzer",
        "button.up": "Go up",
        "drive.used": "{size} used",
        "drive.total": "{size} total",
        "column.icon": "",
        "column.name": "Name",
        "column.type": "Type",
        "column.size": "Size",
        "column.usage": "Usage",
        "column.share": "%",
        "column.items": "Items",
        "type.folder": "Folder",
        "type.file": "File",
        "welcome.select_drive": "Select a drive above to start analyzing disk usage.",
        "welcome.empty": "This directory appears to be empty or inaccessible.",
        "loading.reading": "Reading {location}",
        "error.listing": "Could not read the directory:\n{message}",
        "size.pending": "…",
        "size.failed": "?",
        "tooltip.size_failed": "The size of this folder could not be calculated.",
        "status.ready": "Ready",
        "status.reading": "Reading directory…",
        "status.items": "{count} items",
        "status.total": "Total: {size}",
        "status.calculating.one": "Calculating {count} folder…",
        "status.calculating.many": "Calculating {count} folders…",
        "language.label": "Language:",
        "language.native": "English",
    },
}


def _checked_locale(locale: str) -> str:
    if locale not in _TRANSLATIONS:
        raise ValueError(f"Unsupported locale: {locale}")
    return locale


@dataclass(slots=True)
class LocalizationManager:
    """Zwraca teksty dla bieżącego języka.

    Szablony z polami (``{count}``, ``{size}``) są wypełniane argumentami
    nazwanymi przekazanymi do :meth:`text`.
    """

    locale: str = "pl"

    def __post_init__(self) -> None:
        _checked_locale(self.locale)

    def set_locale(self, locale: str) -> None:
        self.locale = _checked_locale(locale)

    def text(self, key: str, **values: object) -> str:
        template = _TRANSLATIONS[self.locale].get(key)
        if template is None:
            raise KeyError(f"Missing translation for key '{key}' in locale '{self.locale}'")
        return template.format(**values) if values else template

    def available_locales(self) -> Mapping[str, str]:
        """Języki wraz z nazwą każdego z nich w tym samym języku."""

        return {locale: table["language.native"] for locale, table in _TRANSLATIONS.items()}


__all__ = ["LocalizationManager"]
