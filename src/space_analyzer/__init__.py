"""Inicjalizacja pakietu Space Analyzer."""

__all__ = [
    "core",
    "fs",
    "ui",
    "shared",
]
