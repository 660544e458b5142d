"""Tests for the command line entry point."""

import pytest
from PIL import Image

from chix8.cli import build_parser, main


@pytest.fixture
def smoke_rom(tmp_path):
    path = tmp_path / "smoke.ch8"
    path.write_bytes(bytes([0xA2, 0x02, 0x60, 0x0C, 0xD0, 0x01, 0x12, 0x00]))
    return path


def test_missing_rom_argument_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_defaults():
    args = build_parser().parse_args(["game.ch8"])
    assert args.rom == "game.ch8"
    assert args.frequency == 600
    assert args.fps == 60
    assert args.headless is None


def test_unreadable_rom_fails(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ch8"), "--headless", "10"]) == 1
    assert "Cannot read ROM" in capsys.readouterr().out


def test_oversized_rom_fails(tmp_path, capsys):
    path = tmp_path / "big.ch8"
    path.write_bytes(b"\x00" * 4000)
    assert main([str(path), "--headless", "10"]) == 1
    assert "maximum is 3584 bytes" in capsys.readouterr().out


@pytest.mark.parametrize("option,value", [("--fps", "0"), ("--scale", "-2"), ("--frequency", "0"), ("--fps", "fast")])
def test_non_positive_option_is_usage_error(smoke_rom, option, value):
    with pytest.raises(SystemExit) as excinfo:
        main([str(smoke_rom), option, value])
    assert excinfo.value.code == 2


def test_screenshot_to_missing_directory_fails(smoke_rom, tmp_path, capsys):
    shot = tmp_path / "missing" / "shot.png"
    assert main([str(smoke_rom), "--headless", "1", "--screenshot", str(shot)]) == 1
    assert "Cannot save frame" in capsys.readouterr().out
    assert not shot.exists()


def test_screenshot_with_unknown_extension_fails(smoke_rom, tmp_path, capsys):
    assert main([str(smoke_rom), "--headless", "1", "--screenshot", str(tmp_path / "shot.nope")]) == 1
    assert "Cannot save frame" in capsys.readouterr().out


def test_unknown_color_scheme(smoke_rom):
    assert main([str(smoke_rom), "--headless", "10", "--color-scheme", "plaid"]) == 2


def test_headless_run(smoke_rom, capsys):
    assert main([str(smoke_rom), "--headless", "2500"]) == 0
    out = capsys.readouterr().out
    assert "Ran 2500 cycles" in out
    assert "V0=0C" in out


def test_headless_screenshot(smoke_rom, tmp_path):
    shot = tmp_path / "shot.png"
    # 3 cycles: I = 0x202, V0 = 12, draw 0x60 at (12, 12)
    assert main([str(smoke_rom), "--headless", "3", "--screenshot", str(shot), "--scale", "1"]) == 0

    image = Image.open(shot)
    assert image.size == (64, 32)
    assert image.getpixel((13, 12)) == (0, 255, 0)
    assert image.getpixel((12, 12)) == (0, 0, 0)
