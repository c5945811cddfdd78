#!/usr/bin/env python3
"""
Test script for image I/O and the headless command line.

Verifies:
1. PNG save/load keeps pixel values
2. --snap writes a fully grown image
3. Argument errors return non-zero exit codes
4. JPEG output drops the alpha channel
"""

import os
import sys
import tempfile
from pathlib import Path
import numpy as np
from PIL import Image
from texture_synthesis import __main__ as cli
from texture_synthesis.image_io import load_sample, save_image


def _write_sample(path, size=12):
    rng = np.random.default_rng(21)
    Image.fromarray(rng.integers(0, 256, (size, size, 3), dtype=np.uint8)).save(path)
    return path


def test_save_and_load(tmp_path):
    print("Testing image I/O...")
    rgba = np.zeros((4, 5, 4), dtype=np.uint8)
    rgba[1:3, 1:4] = (10, 20, 30, 255)
    path = save_image(rgba, str(tmp_path / "nested" / "out.png"))
    assert os.path.exists(path)

    with Image.open(path) as img:
        assert img.mode == "RGBA"
        assert np.array_equal(np.asarray(img), rgba)

    rgb = load_sample(path)
    assert rgb.shape == (4, 5, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[2, 2]) == (10, 20, 30)
    print("  ✓ PNG round trip")


def test_snap_writes_image(tmp_path, monkeypatch):
    print("Testing headless snap...")
    sample = _write_sample(str(tmp_path / "sample.png"))
    out = str(tmp_path / "out" / "result.png")
    monkeypatch.setattr(sys, "argv", [
        "texture_synthesis", sample, "quick",
        "--size", "10x8", "--kernel", "3", "--seed", "1", "--snap", out,
    ])
    assert cli.main() == 0

    with Image.open(out) as img:
        result = np.asarray(img)
    assert result.shape == (8, 10, 4)
    assert (result[:, :, 3] == 255).all()

    palette = {tuple(p) for p in load_sample(sample).reshape(-1, 3)}
    assert all(tuple(p) in palette for p in result[:, :, :3].reshape(-1, 3))
    print("  ✓ snap saved a complete canvas")


def test_argument_errors(tmp_path, monkeypatch, capsys):
    sample = _write_sample(str(tmp_path / "sample.png"))

    monkeypatch.setattr(sys, "argv", ["texture_synthesis", "--list"])
    assert cli.main() == 0
    assert "classic" in capsys.readouterr().out

    monkeypatch.setattr(sys, "argv", ["texture_synthesis", sample, "--bogus"])
    assert cli.main() == 2

    monkeypatch.setattr(sys, "argv", ["texture_synthesis", sample, "no_such_preset"])
    assert cli.main() == 2

    monkeypatch.setattr(sys, "argv", ["texture_synthesis"])
    assert cli.main() == 2

    monkeypatch.setattr(sys, "argv", [
        "texture_synthesis", sample, "--kernel", "4", "--snap", str(tmp_path / "x.png"),
    ])
    assert cli.main() == 2
    assert "Invalid configuration" in capsys.readouterr().out

    monkeypatch.setattr(sys, "argv", [
        "texture_synthesis", sample, "--size", "5x5", "--kernel", "0", "--snap", str(tmp_path / "k0.png"),
    ])
    assert cli.main() == 2, "an explicit bad kernel must not fall back to the preset"
    assert not os.path.exists(str(tmp_path / "k0.png"))

    for flag, value in [("--size", "10"), ("--size", "10xten"), ("--kernel", "abc"), ("--seed", "1.5")]:
        monkeypatch.setattr(sys, "argv", ["texture_synthesis", sample, flag, value])
        assert cli.main() == 2, f"{flag} {value}"
        assert f"Invalid value for {flag}" in capsys.readouterr().out

    monkeypatch.setattr(sys, "argv", [
        "texture_synthesis", str(tmp_path / "missing.png"), "--snap", str(tmp_path / "x.png"),
    ])
    assert cli.main() == 1


def test_save_jpeg_flattens_alpha(tmp_path):
    """RGBA canvases save to formats without alpha as RGB."""
    print("Testing JPEG save...")
    rgba = np.zeros((6, 6, 4), dtype=np.uint8)
    rgba[:] = (200, 200, 200, 255)
    path = save_image(rgba, str(tmp_path / "out.jpg"))

    with Image.open(path) as img:
        assert img.mode == "RGB"
        assert img.size == (6, 6)
    print("  ✓ JPEG written without alpha")


def test_snap_to_jpeg(tmp_path, monkeypatch):
    sample = _write_sample(str(tmp_path / "sample.png"))
    out = str(tmp_path / "result.jpg")
    monkeypatch.setattr(sys, "argv", [
        "texture_synthesis", sample, "--size", "6x6", "--kernel", "3", "--seed", "2", "--snap", out,
    ])
    assert cli.main() == 0
    assert load_sample(out).shape == (6, 6, 3)


if __name__ == "__main__":
    print("\n=== Testing Image I/O ===\n")

    with tempfile.TemporaryDirectory() as tmp:
        test_save_and_load(Path(tmp))
        test_save_jpeg_flattens_alpha(Path(tmp))

    print("\n✓ All tests passed!\n")
