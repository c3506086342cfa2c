import logging
from pathlib import Path

import pytest
from PIL import Image

from sizefit.cli import main


@pytest.fixture
def noise_file(tmp_path: Path, noise_image) -> Path:
    p = tmp_path / "noise.png"
    noise_image.save(p)
    return p


def test_compress_within_budget(tmp_path: Path, noise_file: Path, capsys):
    out = tmp_path / "out.jpg"

    assert main([str(noise_file), str(out), "--ms", "1MB"]) == 0

    assert out.exists()
    assert out.stat().st_size <= 1_000_000
    assert Image.open(out).format == "JPEG"
    printed = capsys.readouterr().out
    assert "Целевой размер: 1000000 байт" in printed
    assert "Формат: JPEG" in printed
    assert "Готово" in printed


def test_budget_not_met_is_a_warning_not_a_failure(tmp_path: Path, noise_file: Path, capsys):
    out = tmp_path / "tiny.jpg"

    assert main([str(noise_file), str(out), "--ms", "100B"]) == 0

    assert out.exists()
    assert Image.open(out).size == (6, 6)
    printed = capsys.readouterr().out
    assert "Предупреждение" in printed
    assert "quality=10, scale=0.1" in printed


def test_format_override_beats_extension(tmp_path: Path, noise_file: Path):
    out = tmp_path / "out.bin"
    assert main([str(noise_file), str(out), "--max-size", "500KB", "--format", "png"]) == 0
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_unknown_extension_writes_jpeg(tmp_path: Path, noise_file: Path):
    out = tmp_path / "out.data"
    assert main([str(noise_file), str(out), "--ms", "500KB"]) == 0
    assert out.read_bytes()[:2] == b"\xff\xd8"


def test_webp_from_extension(tmp_path: Path, noise_file: Path, capsys):
    out = tmp_path / "out.webp"
    assert main([str(noise_file), str(out), "--ms", "2MiB", "-v"]) == 0
    assert Image.open(out).format == "WEBP"
    assert "Формат: WebP" in capsys.readouterr().out


def test_invalid_size_fails_before_writing(tmp_path: Path, noise_file: Path):
    out = tmp_path / "out.jpg"
    assert main([str(noise_file), str(out), "--ms", "lots"]) == 1
    assert not out.exists()


def test_missing_input(tmp_path: Path):
    assert main([str(tmp_path / "missing.png"), str(tmp_path / "out.jpg"), "--ms", "1MB"]) == 1


def test_unwritable_output(tmp_path: Path, noise_file: Path):
    assert main([str(noise_file), str(tmp_path / "no" / "dir" / "out.jpg"), "--ms", "1MB"]) == 1


def test_bad_format_choice_is_a_usage_error(tmp_path: Path, noise_file: Path):
    with pytest.raises(SystemExit) as exc_info:
        main([str(noise_file), str(tmp_path / "out.jpg"), "--ms", "1MB", "--format", "gif"])
    assert exc_info.value.code == 2


def test_size_is_required(tmp_path: Path, noise_file: Path):
    with pytest.raises(SystemExit) as exc_info:
        main([str(noise_file), str(tmp_path / "out.jpg")])
    assert exc_info.value.code == 2


def test_missed_budget_is_logged(tmp_path: Path, noise_file: Path, caplog):
    with caplog.at_level(logging.WARNING, logger="sizefit.cli"):
        assert main([str(noise_file), str(tmp_path / "tiny.jpg"), "--ms", "100B"]) == 0
    assert any(r.levelno == logging.WARNING and "not met" in r.getMessage() for r in caplog.records)
