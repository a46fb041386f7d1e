"""Core primitives for probing, bordering, and placing source images."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, TYPE_CHECKING

from PIL import Image, ImageOps, UnidentifiedImageError

from image_merger.constants import COLOR_MODE_RGBA
from image_merger.errors import (
    CompositionFailure,
    RenderFailure,
    SourceCorrupt,
    SourceUnreadable,
)
from image_merger.logging_utils import logger
from image_merger.runtime.validation import validate_border_size

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from image_merger.colors import RGBA

ImageSource = str | os.PathLike[str] | bytes | bytearray | IO[bytes]


def describe_source(source: ImageSource, index: int | None = None) -> str:
    """Return a short human-readable label for error and log messages."""
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    kind = "bytes" if isinstance(source, (bytes, bytearray)) else "stream"
    return f"<{kind} #{index}>" if index is not None else f"<{kind}>"


def _open_image(source: ImageSource) -> Image.Image:
    """Open ``source`` lazily; Pillow only reads the header here."""
    if isinstance(source, (bytes, bytearray)):
        return Image.open(io.BytesIO(source))
    if isinstance(source, (str, os.PathLike)):
        return Image.open(Path(source))
    if source.seekable():
        source.seek(0)
    return Image.open(source)


@dataclass(slots=True)
class ResolvedSource:
    """
    A source whose intrinsic dimensions are known.

    Produced by the metadata probe and handed to the render step,
    which consumes it exactly once.
    """

    source: ImageSource
    index: int
    width: int
    height: int
    consumed: bool = field(default=False, compare=False, repr=False)

    @property
    def label(self) -> str:
        """Printable name of the underlying source."""
        return describe_source(self.source, self.index)

    def bordered_size(self, border: int) -> tuple[int, int]:
        """Return ``(w + 2b, h + 2b)``."""
        return self.width + 2 * border, self.height + 2 * border


def resolve_source(source: ImageSource, index: int = 0) -> ResolvedSource:
    """
    Probe one source for its width and height without decoding pixels.

    Raises:
        SourceUnreadable: If the source cannot be opened.
        SourceCorrupt: If the format or dimensions cannot be determined.

    """
    label = describe_source(source, index)
    try:
        with _open_image(source) as img:
            width, height = img.size
    except UnidentifiedImageError as exc:
        msg = f"Cannot identify image format: '{label}'"
        raise SourceCorrupt(msg, source=label) from exc
    except FileNotFoundError as exc:
        msg = f"Image file not found: '{label}'"
        raise SourceUnreadable(msg, source=label) from exc
    except Image.DecompressionBombError as exc:
        msg = f"Image '{label}' exceeds the decoder pixel limit: {exc!s}"
        raise SourceCorrupt(msg, source=label) from exc
    except OSError as exc:
        msg = f"Error opening image '{label}': {exc!s}"
        raise SourceUnreadable(msg, source=label) from exc

    if width <= 0 or height <= 0:
        msg = f"Image '{label}' has invalid dimensions {width}x{height}"
        raise SourceCorrupt(msg, source=label)

    logger.debug("Resolved %s: %dx%d", label, width, height)
    return ResolvedSource(source=source, index=index,
                          width=width, height=height)


def resolve_dimensions(sources: Sequence[ImageSource]) -> list[ResolvedSource]:
    """Probe every source in order, failing on the first bad one."""
    return [resolve_source(src, idx) for idx, src in enumerate(sources)]


def render_bordered_copy(
    resolved: ResolvedSource,
    border: int,
    background: RGBA,
) -> Image.Image:
    """
    Decode a source and pad it with ``border`` pixels of ``background``.

    The returned RGBA image is exactly ``resolved.bordered_size(border)``
    and its interior pixels are the decoded source pixels unchanged.

    Raises:
        InvalidBorder: If ``border`` is negative.
        RenderFailure: If decoding fails, the decoded size disagrees
            with the probe, or the source was already rendered.

    """
    validate_border_size(border)
    label = resolved.label
    if resolved.consumed:
        msg = f"Source '{label}' was already rendered"
        raise RenderFailure(msg, source=label)
    resolved.consumed = True

    try:
        with _open_image(resolved.source) as img:
            img.load()
            if img.size != (resolved.width, resolved.height):
                msg = (
                    f"Decoded size {img.size[0]}x{img.size[1]} of '{label}' "
                    f"differs from probed size "
                    f"{resolved.width}x{resolved.height}"
                )
                raise RenderFailure(msg, source=label)
            rgba = img.convert(COLOR_MODE_RGBA)
    except (OSError, ValueError) as exc:
        msg = f"Error decoding image '{label}': {exc!s}"
        raise RenderFailure(msg, source=label) from exc

    if border == 0:
        return rgba
    return ImageOps.expand(rgba, border=border, fill=background)


@dataclass(frozen=True, slots=True)
class Placement:
    """Top-left offset and size of one bordered image on the canvas."""

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Return ``(x0, y0, x1, y1)``."""
        return self.x, self.y, self.x + self.width, self.y + self.height

    def fits(self, canvas_size: tuple[int, int]) -> bool:
        """Return True when the placement lies fully inside the canvas."""
        x0, y0, x1, y1 = self.box
        return x0 >= 0 and y0 >= 0 and x1 <= canvas_size[0] \
            and y1 <= canvas_size[1]


def paste_at(
    canvas: Image.Image,
    buffer: Image.Image,
    placement: Placement,
) -> None:
    """
    Alpha-composite ``buffer`` onto ``canvas`` at ``placement``.

    Raises:
        CompositionFailure: If the buffer does not match its placement
            or the placement falls outside the canvas.

    """
    if buffer.size != (placement.width, placement.height):
        msg = (
            f"Buffer size {buffer.size[0]}x{buffer.size[1]} does not match "
            f"placement {placement.width}x{placement.height}"
        )
        raise CompositionFailure(msg)
    if not placement.fits(canvas.size):
        msg = (
            f"Placement {placement.box} outside canvas "
            f"{canvas.size[0]}x{canvas.size[1]}"
        )
        raise CompositionFailure(msg)
    if buffer.mode != COLOR_MODE_RGBA:
        buffer = buffer.convert(COLOR_MODE_RGBA)
    canvas.alpha_composite(buffer, dest=(placement.x, placement.y))
