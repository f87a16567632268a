"""Punkt wejściowy dla aplikacji GUI."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from space_analyzer.shared import AppConfig, configure_logging, install_crash_reporting
from space_analyzer.ui.localization import LocalizationManager
from space_analyzer.ui.main_window import MainWindow
from space_analyzer.ui.services import NavigatorService
from space_analyzer.ui.view_models import NavigationViewModel


def main() -> int:
    """Uruchamia aplikację GUI."""
    install_crash_reporting()
    config = AppConfig.from_env()
    configure_logging(level=config.log_level)
    app = QApplication(sys.argv)
    app.setApplicationName("Space Analyzer")
    app.setOrganizationName("Space Analyzer Team")

    view_model = NavigationViewModel(NavigatorService(config))
    window = MainWindow(view_model=view_model, localization=LocalizationManager(locale=config.locale))
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
