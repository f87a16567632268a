"""Konfiguracja, logowanie strukturalne i raporty awarii wspólne dla GUI i CLI."""

from .config import SUPPORTED_LOCALES, AppConfig
from .error_reporting import ErrorReport, get_error_reports_dir, install_crash_reporting, write_error_report
from .logging import configure_logging, parse_log_level

__all__ = [
	"AppConfig",
	"SUPPORTED_LOCALES",
	"configure_logging",
	"parse_log_level",
	"ErrorReport",
	"get_error_reports_dir",
	"install_crash_reporting",
	"write_error_report",
]
