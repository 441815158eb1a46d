"""Tests for the picture-transform command line."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cli.transform import main, resolve_log_level
from models.color import Color
from services.image_service import ImageService


@pytest.fixture()
def picture(random_grid, tmp_path: Path) -> Path:
    return ImageService().save(random_grid(4, 3), tmp_path / "in.png")


class TestMain:
    @pytest.mark.parametrize(
        "argv,dimensions",
        [
            (["invert"], (4, 3)),
            (["grayscale"], (4, 3)),
            (["blur"], (4, 3)),
            (["rotate", "90"], (3, 4)),
            (["rotate", "270"], (3, 4)),
            (["flip", "V"], (4, 3)),
        ],
    )
    def test_single_source_operations(self, picture: Path, tmp_path: Path, argv, dimensions) -> None:
        out = tmp_path / "out.png"
        assert main(argv + [str(picture), str(out)]) == 0
        assert ImageService().load(out).dimensions == dimensions

    def test_blend(self, solid_grid, tmp_path: Path) -> None:
        service = ImageService()
        a = service.save(solid_grid(Color(100, 0, 0), 5, 5), tmp_path / "a.png")
        b = service.save(solid_grid(Color(0, 100, 0), 3, 7), tmp_path / "b.png")
        out = tmp_path / "out.png"

        assert main(["blend", str(a), str(b), str(out)]) == 0
        result = service.load(out)
        assert result.dimensions == (3, 5)
        assert result.get(0, 0) == Color(50, 50, 0)

    def test_mosaic(self, picture: Path, tmp_path: Path) -> None:
        out = tmp_path / "out.png"
        assert main(["mosaic", "2", str(picture), str(picture), str(out)]) == 0
        assert ImageService().load(out).dimensions == (4, 2)

    def test_invalid_location(self, tmp_path: Path, capsys) -> None:
        code = main(["invert", str(tmp_path / "missing.png"), str(tmp_path / "out.png")])
        assert code == 1
        assert "invalid location" in capsys.readouterr().err

    def test_invalid_destination(self, picture: Path, tmp_path: Path, capsys) -> None:
        code = main(["invert", str(picture), str(tmp_path / "no_dir" / "out.png")])
        assert code == 1
        assert "invalid destination" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "argv",
        [
            ["rotate", "45", "in.png", "out.png"],
            ["flip", "X", "in.png", "out.png"],
            ["mosaic", "0", "in.png", "out.png"],
            ["blend", "out.png"],
            ["invert", "in.png"],
            ["sharpen", "in.png", "out.png"],
        ],
    )
    def test_usage_errors(self, argv) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 2


class TestLogLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (" error ", logging.ERROR)],
    )
    def test_known_names(self, monkeypatch, value: str, expected: int) -> None:
        monkeypatch.setenv("LOG_LEVEL", value)
        assert resolve_log_level() == expected

    def test_unknown_name_falls_back_to_info(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("LOG_LEVEL", "loud")
        assert resolve_log_level() == logging.INFO
        assert "LOG_LEVEL" in capsys.readouterr().err

    def test_verbose_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "loud")
        assert resolve_log_level(verbose=True) == logging.DEBUG

    def test_unknown_name_does_not_abort_a_run(self, picture: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "loud")
        out = tmp_path / "out.png"
        assert main(["invert", str(picture), str(out)]) == 0
        assert out.is_file()
