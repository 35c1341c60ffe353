from __future__ import annotations

import logging
import sys

import pytest
from PIL import Image

from framer.cli import build_parser, main

from conftest import RED


def test_parser_defaults():
    args = build_parser().parse_args(["in.png"])
    assert args.input == "in.png"
    assert args.output == "output.png"
    assert args.scale == 110.0
    assert args.background == "colr:black"
    assert args.shadow_offset is None


def test_frames_image(red_png, tmp_path, capsys):
    output = tmp_path / "framed.png"
    code = main([str(red_png), "-o", str(output), "-s", "200", "-b", "colr:white", "--roundness", "10"])

    assert code == 0
    assert capsys.readouterr().out.strip() == str(output)
    with Image.open(output) as img:
        assert img.size == (200, 200)
        assert img.getpixel((100, 100)) == RED
        assert img.getpixel((0, 0)) == (255, 255, 255, 255)


def test_shadow_and_ratio(red_png, tmp_path):
    output = tmp_path / "wide.png"
    code = main(
        [
            str(red_png),
            "-o",
            str(output),
            "-s",
            "100",
            "-r",
            "2:1",
            "-b",
            "grad:white-black",
            "--shadow-offset",
            "5,5",
            "--shadow-radius",
            "3",
        ]
    )
    assert code == 0
    with Image.open(output) as img:
        assert img.size == (200, 100)


def test_invalid_argument_value(red_png, tmp_path, capsys):
    code = main([str(red_png), "-o", str(tmp_path / "x.png"), "--roundness", "150"])
    assert code == 1
    assert capsys.readouterr().out == ""
    assert not (tmp_path / "x.png").exists()


def test_missing_input(tmp_path, caplog):
    code = main([str(tmp_path / "missing.png"), "-o", str(tmp_path / "x.png")])
    assert code == 1
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors and "failed to process image" in errors[0].getMessage()
    assert errors[0].name == "framer.cli"


def test_logs_go_to_stderr(red_png, tmp_path, capsys):
    main([str(red_png), "-o", str(tmp_path / "framed.png"), "-v"])
    handlers = logging.getLogger("framer").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert handlers[0].stream is sys.stderr
    assert logging.getLogger("framer").level == logging.DEBUG
    assert capsys.readouterr().out.strip() == str(tmp_path / "framed.png")


@pytest.mark.parametrize("offset", ["inf,0", "1e400,0", "0,nan"])
def test_non_finite_offset(red_png, tmp_path, offset):
    output = tmp_path / "x.png"
    assert main([str(red_png), "-o", str(output), "--offset", offset]) == 1
    assert main([str(red_png), "-o", str(output), "--shadow-offset", offset]) == 1
    assert not output.exists()


def test_unwritable_output(red_png, tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    assert main([str(red_png), "-o", str(blocker / "out.png")]) == 1
    assert any("failed to process image" in r.getMessage() for r in caplog.records)


def test_missing_background_image(red_png, tmp_path):
    code = main([str(red_png), "-o", str(tmp_path / "x.png"), "-b", f"imag:{tmp_path / 'nope.png'}"])
    assert code == 1
