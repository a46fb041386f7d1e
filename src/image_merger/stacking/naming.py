"""Output path and persistence helpers for merged canvases."""

from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path

from PIL import Image

from image_merger.config_defaults import DEFAULT_OUTPUT_PATH
from image_merger.constants import (
    ALPHA_LESS_FORMATS,
    ALPHA_OPAQUE,
    CANONICAL_OUTPUT_SUFFIX,
    COLOR_MODE_RGB,
    COLOR_MODE_RGBA,
)
from image_merger.errors import WriteFailure
from image_merger.logging_utils import logger


def default_output_path() -> Path:
    """Return the output path used when the caller gives none."""
    return Path(DEFAULT_OUTPUT_PATH)


def ensure_suffix(path: str | os.PathLike[str]) -> Path:
    """Append ``.png`` to paths that carry no suffix at all."""
    out = Path(path)
    return out if out.suffix else out.with_suffix(CANONICAL_OUTPUT_SUFFIX)


def output_format(path: Path) -> str:
    """
    Return the Pillow encoder name for the suffix of ``path``.

    Raises:
        WriteFailure: If no installed encoder handles the suffix.

    """
    suffix = path.suffix.lower()
    fmt = Image.registered_extensions().get(suffix)
    if fmt is None or fmt not in Image.SAVE:
        msg = f"No image encoder for output suffix '{suffix or path.name}'"
        raise WriteFailure(msg, source=str(path))
    return fmt


def _prepare_for_format(canvas: Image.Image, fmt: str) -> Image.Image:
    """Drop the alpha channel for encoders that cannot store it."""
    if fmt not in ALPHA_LESS_FORMATS or canvas.mode != COLOR_MODE_RGBA:
        return canvas
    alpha_min, _ = canvas.getchannel("A").getextrema()
    if alpha_min < ALPHA_OPAQUE:
        logger.warning(
            "%s output cannot store transparency; alpha will be discarded.",
            fmt,
        )
    return canvas.convert(COLOR_MODE_RGB)


def encode_canvas(canvas: Image.Image, fmt: str) -> bytes:
    """Encode ``canvas`` in memory so a failed encode leaves no file."""
    buffer = io.BytesIO()
    try:
        _prepare_for_format(canvas, fmt).save(buffer, format=fmt)
    except (OSError, ValueError, KeyError) as exc:
        msg = f"Error encoding {fmt} output: {exc!s}"
        raise WriteFailure(msg) from exc
    return buffer.getvalue()


def write_canvas(
    canvas: Image.Image,
    out_path: str | os.PathLike[str],
) -> Path:
    """
    Encode ``canvas`` and write it to ``out_path``.

    Parent directories are created as needed. The bytes go to a
    temporary file beside the destination, which replaces ``out_path``
    only once fully written; an existing file survives a failed write.

    Raises:
        WriteFailure: If encoding or writing fails.

    """
    path = ensure_suffix(out_path)
    data = encode_canvas(canvas, output_format(path))

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_path = Path(handle.name)
            handle.write(data)
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        msg = f"Error writing '{path}': {exc!s}"
        raise WriteFailure(msg, source=str(path)) from exc
    return path
