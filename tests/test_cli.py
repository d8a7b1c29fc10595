import logging

import pytest

from conftest import BOM, FakeDetector
from unbom import __version__
from unbom.main import build_settings, main, parse_args, run
from unbom.models import DetectionResult, ScanSettings


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parse_defaults():
    settings = build_settings(parse_args(["some/dir"]))
    assert settings.target == "some/dir"
    assert settings.recurse is False
    assert settings.nobackup is True
    assert settings.set_bom is False


def test_parse_flags():
    settings = build_settings(parse_args(["-r", "--backup", "--setbom", "-v", "x/*.txt"]))
    assert settings.recurse is True
    assert settings.nobackup is False
    assert settings.set_bom is True
    assert settings.log_level == "DEBUG"


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_run_reports_per_file_and_count(sample_dir, capsys):
    detector = FakeDetector(
        a_txt=DetectionResult(encoding="utf-8"),
        b_txt=DetectionResult(encoding="utf-8", has_bom=True),
        c_txt=DetectionResult(encoding="latin-1"),
    )

    summary = run(ScanSettings(target=str(sample_dir)), detector=detector)

    out = capsys.readouterr().out.splitlines()
    assert summary.rewritten == 2
    assert out[-1] == "2 file(s) processed"
    assert f"utf-8 BOM found - converting: {sample_dir / 'b.txt'} done" in out
    assert f"latin-1 found - converting: {sample_dir / 'c.txt'} done" in out
    assert not any("a.txt" in line for line in out)


def test_run_reports_unknown_encoding_and_failures(write_file, tmp_path, capsys):
    write_file("bad.bin", b"\xff\xfe\x00\x80")

    summary = run(ScanSettings(target=str(tmp_path)), detector=FakeDetector(DetectionResult()))

    captured = capsys.readouterr()
    assert summary.failed == 1
    assert captured.out.splitlines() == ["0 file(s) processed"]
    assert captured.err.startswith(f"{tmp_path / 'bad.bin'}: ")


def test_run_missing_directory(tmp_path, capsys):
    detector = FakeDetector()

    summary = run(ScanSettings(target=str(tmp_path / "nope" / "*.txt")), detector=detector)

    captured = capsys.readouterr()
    assert summary is None
    assert detector.calls == []
    assert captured.out == ""
    assert captured.err.strip() == f"Directory not found: {tmp_path / 'nope'}"


def test_main_end_to_end(sample_dir, capsys):
    assert main([str(sample_dir / "*.txt"), "--setbom"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "2 file(s) processed"
    for p in sample_dir.iterdir():
        assert p.read_bytes().startswith(BOM)

    assert main([str(sample_dir)]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "3 file(s) processed"
    for p in sample_dir.iterdir():
        assert not p.read_bytes().startswith(BOM)

    assert main([str(sample_dir)]) == 0
    assert capsys.readouterr().out.splitlines() == ["0 file(s) processed"]
