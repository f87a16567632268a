"""Testy interfejsu CLI."""

from __future__ import annotations

from io import StringIO

from space_analyzer.cli import _build_parser, _run
from space_analyzer.core.models import Drive
from space_analyzer.shared import AppConfig
from space_analyzer.ui.services import NavigatorService
from fakes import FakeFilesystem


def _service(fake_fs: FakeFilesystem, **config) -> NavigatorService:
    return NavigatorService(AppConfig(max_size_workers=2, **config), filesystem=fake_fs)


def test_parser_accepts_path() -> None:
    parser = _build_parser()
    args = parser.parse_args(["C:\\Users"])
    assert args.path == "C:\\Users"
    assert args.sort == "size"
    assert args.ascending is None
    assert args.list_drives is False


def test_parser_custom_sort_and_workers() -> None:
    parser = _build_parser()
    args = parser.parse_args(["/data", "--sort", "name", "--ascending", "--workers", "3", "--timeout", "1.5"])
    assert args.sort == "name"
    assert args.ascending is True
    assert args.workers == 3
    assert args.timeout == 1.5


def test_parser_allows_explicit_descending_order() -> None:
    parser = _build_parser()
    args = parser.parse_args(["/data", "--sort", "name", "--no-ascending"])
    assert args.ascending is False


def test_run_prints_names_in_descending_order(tmp_path) -> None:
    for name in ("alpha.txt", "beta.txt", "gamma.txt"):
        (tmp_path / name).write_bytes(b"x")

    parser = _build_parser()
    args = parser.parse_args([str(tmp_path), "--sort", "name", "--no-ascending", "--timeout", "10"])
    out = StringIO()

    assert _run(args, out=out) == 0

    names = [line.rsplit(" ", 1)[-1] for line in out.getvalue().splitlines()[:3]]
    assert names == ["gamma.txt", "beta.txt", "alpha.txt"]


def test_parser_supports_listing_drives() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--list-drives"])
    assert args.path is None
    assert args.list_drives is True


def test_run_requires_path() -> None:
    parser = _build_parser()
    args = parser.parse_args([])
    assert _run(args, service=_service(FakeFilesystem())) == 1


def test_run_nonexistent_directory(tmp_path) -> None:
    parser = _build_parser()
    args = parser.parse_args([str(tmp_path / "missing")])
    assert _run(args, out=StringIO()) == 1


def test_run_prints_listing_sorted_by_size(tmp_path) -> None:
    (tmp_path / "big").mkdir()
    (tmp_path / "big" / "blob.bin").write_bytes(b"x" * 4096)
    (tmp_path / "small.txt").write_bytes(b"y" * 10)

    parser = _build_parser()
    args = parser.parse_args([str(tmp_path), "--locale", "en", "--timeout", "10"])
    out = StringIO()

    assert _run(args, out=out) == 0

    lines = out.getvalue().splitlines()
    assert lines[0].endswith(" big")
    assert "4.0 KB" in lines[0]
    assert "Folder" in lines[0]
    assert lines[1].endswith(" small.txt")
    assert "TXT" in lines[1]
    assert lines[2].startswith("2 items · Total: 4.0 KB")


def test_run_lists_drives() -> None:
    fake_fs = FakeFilesystem(
        drives=[
            Drive(name="C:\\", mount_point="C:\\", total_space=1024**3, available_space=512 * 1024**2, used_space=512 * 1024**2, file_system="NTFS"),
        ]
    )
    parser = _build_parser()
    args = parser.parse_args(["--list-drives"])
    out = StringIO()

    assert _run(args, service=_service(fake_fs), out=out) == 0

    text = out.getvalue()
    assert "C:\\" in text
    assert "NTFS" in text
    assert "(50.0%)" in text


def test_run_lists_drives_when_enumeration_fails() -> None:
    fake_fs = FakeFilesystem(drives=OSError("access denied"))
    parser = _build_parser()
    args = parser.parse_args(["--list-drives"])
    out = StringIO()

    assert _run(args, service=_service(fake_fs), out=out) == 0
    assert out.getvalue() == ""
