"""
Test configuration and shared fixtures for image_merger.

This module defines reusable pytest fixtures for building small test
images on disk and for capturing log output. These fixtures support
all test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from image_merger.logging_utils import logger


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """Factory that writes a solid-color image and returns its path."""

    def _make(
        name: str,
        size: tuple[int, int],
        color: str | tuple[int, ...] = "red",
        mode: str = "RGB",
    ) -> Path:
        path = tmp_path / name
        Image.new(mode, size, color=color).save(path)
        return path

    return _make


@pytest.fixture
def two_images(make_image: Callable[..., Path]) -> list[Path]:
    """A 100x50 red PNG followed by an 80x120 blue PNG."""
    return [
        make_image("first.png", (100, 50), "red"),
        make_image("second.png", (80, 120), "blue"),
    ]


@pytest.fixture
def gradient_image(tmp_path: Path) -> Path:
    """A 200x200 PNG whose every pixel differs from its neighbours."""
    img = Image.new("RGB", (200, 200))
    img.putdata([
        (x % 256, y % 256, (x * y) % 256)
        for y in range(200)
        for x in range(200)
    ])
    path = tmp_path / "gradient.png"
    img.save(path)
    return path


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    """Destination inside an isolated output directory."""
    return tmp_path / "out" / "merged.png"


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the merger logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
