"""Shared test fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from framer.config import settings

RED = (255, 0, 0, 255)
WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def solid_rgba(width: int, height: int, color: tuple[int, int, int, int]) -> np.ndarray:
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :] = color
    return image


@pytest.fixture(autouse=True)
def _fresh_framer_logger():
    # configure_logging binds sys.stderr, which pytest swaps per test.
    yield
    logging.getLogger("framer").handlers.clear()


@pytest.fixture
def red_source() -> np.ndarray:
    return solid_rgba(100, 100, RED)


@pytest.fixture
def storage_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(settings, "storage_root", str(tmp_path))
    return tmp_path


@pytest.fixture
def red_png(tmp_path: Path) -> Path:
    path = tmp_path / "red.png"
    Image.new("RGBA", (100, 100), RED).save(path)
    return path
