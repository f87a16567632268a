"""Warstwa prezentacji i modele widoku GUI.

Moduły zależne od Qt (``main_window``, ``view_models``) są importowane
bezpośrednio, aby CLI działało bez inicjalizacji PySide6.
"""

from .localization import LocalizationManager
from .services import NavigatorService

__all__ = ["LocalizationManager", "NavigatorService"]
