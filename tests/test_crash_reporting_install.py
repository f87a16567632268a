from __future__ import annotations

import sys
import threading


def test_install_crash_reporting_does_not_raise(monkeypatch, tmp_path):
    # nie zapisuje niczego poza katalogiem tymczasowym
    monkeypatch.setenv("SPACEANALYZER_ERROR_DIR", str(tmp_path))
    monkeypatch.setenv("SPACEANALYZER_DISABLE_CRASH_HOOKS", "1")

    from space_analyzer.shared.error_reporting import install_crash_reporting

    install_crash_reporting()


def test_hooks_are_not_installed_under_pytest(monkeypatch, tmp_path):
    monkeypatch.setenv("SPACEANALYZER_ERROR_DIR", str(tmp_path))
    monkeypatch.delenv("SPACEANALYZER_DISABLE_CRASH_HOOKS", raising=False)
    monkeypatch.delenv("SPACEANALYZER_ENABLE_CRASH_HOOKS", raising=False)

    from space_analyzer.shared.error_reporting import install_crash_reporting

    before = (sys.excepthook, threading.excepthook)
    install_crash_reporting()

    assert (sys.excepthook, threading.excepthook) == before
    assert list(tmp_path.iterdir()) == []
