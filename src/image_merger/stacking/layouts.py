"""Vertical stack layout and canvas composition."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING

from PIL import Image

from image_merger.constants import COLOR_MODE_RGBA
from image_merger.errors import CompositionFailure, InvalidInput
from image_merger.logging_utils import logger
from image_merger.runtime.validation import validate_border_size
from image_merger.stacking.core import Placement, paste_at

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence

    from image_merger.colors import RGBA


@dataclass(frozen=True, slots=True)
class Layout:
    """Canvas size plus one placement per source, in source order."""

    canvas_width: int
    canvas_height: int
    border: int
    placements: tuple[Placement, ...]

    @property
    def canvas_size(self) -> tuple[int, int]:
        """Return ``(canvas_width, canvas_height)``."""
        return self.canvas_width, self.canvas_height

    def __len__(self) -> int:
        return len(self.placements)


def compute_layout(
    dimensions: Sequence[tuple[int, int]],
    border: int,
) -> Layout:
    """
    Stack bordered images top to bottom, centered horizontally.

    ``dimensions`` holds the intrinsic ``(width, height)`` of each source
    in order. The canvas is as wide as the widest bordered image and as
    tall as all bordered heights together; each image sits at the
    running height of those above it and is centered with
    ``(canvas_width - bordered_width) // 2``, which leans left on odd
    differences.
    """
    validate_border_size(border)
    if not dimensions:
        msg = "Cannot lay out an empty list of images"
        raise InvalidInput(msg)

    bordered = [(w + 2 * border, h + 2 * border) for w, h in dimensions]

    def fold(
        acc: tuple[int, tuple[int, ...]],
        size: tuple[int, int],
    ) -> tuple[int, tuple[int, ...]]:
        total_h, offsets = acc
        return total_h + size[1], (*offsets, total_h)

    canvas_h, y_offsets = reduce(fold, bordered, (0, ()))
    canvas_w = max(w for w, _ in bordered)

    placements = tuple(
        Placement(x=(canvas_w - bw) // 2, y=y, width=bw, height=bh)
        for (bw, bh), y in zip(bordered, y_offsets, strict=True)
    )
    return Layout(
        canvas_width=canvas_w,
        canvas_height=canvas_h,
        border=border,
        placements=placements,
    )


def compose(
    buffers: Iterable[Image.Image],
    placements: Sequence[Placement],
    canvas_size: tuple[int, int],
    background: RGBA,
) -> Image.Image:
    """
    Paste bordered buffers onto a fresh background canvas, in order.

    ``buffers`` may be a generator; each buffer is pasted before the
    next one is pulled, so only one decoded image is alive at a time.

    Raises:
        CompositionFailure: If the number of buffers differs from the
            number of placements or a buffer cannot be placed.

    """
    canvas = Image.new(COLOR_MODE_RGBA, canvas_size, background)
    pasted = 0
    for buffer in buffers:
        if pasted >= len(placements):
            msg = f"More buffers than placements ({len(placements)})"
            raise CompositionFailure(msg)
        paste_at(canvas, buffer, placements[pasted])
        pasted += 1

    if pasted != len(placements):
        msg = f"Expected {len(placements)} buffers, got {pasted}"
        raise CompositionFailure(msg)

    logger.debug("Composed %d buffers onto %dx%d canvas",
                 pasted, canvas_size[0], canvas_size[1])
    return canvas
