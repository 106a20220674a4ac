from datetime import date

import pytest

from trailcam_timefix import cli, ocr
from trailcam_timefix.pipeline import Outcome, Status


@pytest.fixture
def captured_settings(monkeypatch):
    seen = []

    def fake_run(settings):
        seen.append(settings)
        return [Outcome(settings.directory / "a.mp4", Status.CORRECTED)]

    monkeypatch.setattr(cli, "run", fake_run)
    return seen


def test_builds_settings(tmp_path, captured_settings):
    code = cli.main(
        [
            str(tmp_path),
            "--placed", "2024-10-01",
            "--checked", "2024-11-10",
            "--ffmpeg", "/opt/ffmpeg",
            "--tesseract", "/opt/tesseract",
            "--psm", "6",
            "--binarize",
            "--dry-run",
        ]
    )

    assert code == 0
    settings = captured_settings[0]
    assert settings.directory == tmp_path
    assert settings.placed == date(2024, 10, 1)
    assert settings.checked == date(2024, 11, 10)
    assert settings.ffmpeg == "/opt/ffmpeg"
    assert settings.tesseract == "/opt/tesseract"
    assert settings.psm == 6
    assert settings.binarize and settings.dry_run
    assert not settings.debug_crops


def test_tool_defaults(tmp_path, captured_settings, monkeypatch):
    monkeypatch.setattr(cli.shutil, "which", lambda name: None)

    cli.main([str(tmp_path), "--placed", "2024-10-01", "--checked", "2024-11-10"])

    settings = captured_settings[0]
    assert settings.ffmpeg is None
    assert settings.tesseract == ocr.DEFAULT_TESSERACT
    assert settings.psm == ocr.DEFAULT_PSM


def test_missing_directory(tmp_path, captured_settings, capsys):
    code = cli.main([str(tmp_path / "nope"), "--placed", "2024-10-01", "--checked", "2024-11-10"])

    assert code == 1
    assert captured_settings == []
    assert "Directory not found" in capsys.readouterr().out


def test_checked_before_placed(tmp_path, captured_settings):
    assert cli.main([str(tmp_path), "--placed", "2024-11-10", "--checked", "2024-10-01"]) == 1
    assert captured_settings == []


def test_bad_date_format(tmp_path):
    with pytest.raises(SystemExit):
        cli.main([str(tmp_path), "--placed", "10/01/2024", "--checked", "2024-11-10"])


def test_failed_file_sets_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr(
        cli, "run", lambda settings: [Outcome(tmp_path / "a.mp4", Status.FAILED, reason="denied")]
    )
    assert cli.main([str(tmp_path), "--placed", "2024-10-01", "--checked", "2024-11-10"]) == 1


def test_checked_help_explains_midnight(capsys):
    with pytest.raises(SystemExit):
        cli.parse_args(["--help"])
    help_text = " ".join(capsys.readouterr().out.split())
    assert "Compared as midnight" in help_text
    assert "following day" in help_text
