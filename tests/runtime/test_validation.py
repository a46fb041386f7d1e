"""Tests for runtime.validation helpers."""

from __future__ import annotations

import pytest

from image_merger.errors import InvalidBorder, InvalidInput
from image_merger.runtime import validation as runtime_validation


@pytest.mark.parametrize("border", [0, 1, 10, 500])
def test_validate_border_size_accepts(border: int) -> None:
    assert runtime_validation.validate_border_size(border) == border


@pytest.mark.parametrize("border", [-1, -100, 2.0, "3", None, True])
def test_validate_border_size_rejects(border: object) -> None:
    with pytest.raises(InvalidBorder):
        runtime_validation.validate_border_size(border)


@pytest.mark.parametrize("sources", [["a.png"], ("a.png", b"bytes")])
def test_validate_sources_accepts(sources: object) -> None:
    runtime_validation.validate_sources(sources)


@pytest.mark.parametrize("sources", [[], (), None, "a.png", b"raw", 3])
def test_validate_sources_rejects(sources: object) -> None:
    with pytest.raises(InvalidInput):
        runtime_validation.validate_sources(sources)
