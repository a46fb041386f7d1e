"""Input validation run before any file I/O."""

from __future__ import annotations

from collections.abc import Sequence

from image_merger.errors import InvalidBorder, InvalidInput


def validate_border_size(border_size: object) -> int:
    """Ensure the border is a non-negative integer and return it."""
    if isinstance(border_size, bool) or not isinstance(border_size, int):
        msg = f"Border size must be an integer, got {border_size!r}"
        raise InvalidBorder(msg)
    if border_size < 0:
        msg = f"Border size must be non-negative, got {border_size}"
        raise InvalidBorder(msg)
    return border_size


def validate_sources(sources: object) -> None:
    """Ensure at least one source was supplied."""
    if sources is None:
        msg = "No image paths provided"
        raise InvalidInput(msg)
    if isinstance(sources, (str, bytes, bytearray)) or not isinstance(
        sources, Sequence,
    ):
        msg = "Sources must be an ordered sequence of images"
        raise InvalidInput(msg)
    if len(sources) == 0:
        msg = "No image paths provided"
        raise InvalidInput(msg)
