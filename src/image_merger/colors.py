"""
Background color parsing.

Accepts the color forms a caller is likely to have at hand and
normalizes them to an ``(r, g, b, a)`` tuple of ints in ``0..255``:

- any string Pillow's ``ImageColor`` understands (``#fff``,
  ``#ffffff``, ``#ffffff80``, ``white``, ``rgba(0, 0, 0, 0)``)
- an RGB triple of ints
- an RGBA quadruple whose alpha is either a ``float`` in ``[0, 1]``
  or an ``int`` in ``[0, 255]``
- a comma separated string of three or four numbers (CLI form)
"""

from __future__ import annotations

from collections.abc import Sequence

from PIL import ImageColor

from image_merger.constants import ALPHA_MAX_FLOAT, ALPHA_OPAQUE
from image_merger.errors import InvalidColor

RGBA = tuple[int, int, int, int]
ColorValue = str | Sequence[int | float]

_RGB_LEN = 3
_RGBA_LEN = 4
_CHANNEL_MAX = 255


def _channel(value: object, what: str) -> int:
    """Validate a single 0..255 integer channel."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{what} channel must be an integer, got {value!r}"
        raise InvalidColor(msg)
    if not 0 <= value <= _CHANNEL_MAX:
        msg = f"{what} channel must be within 0..255, got {value}"
        raise InvalidColor(msg)
    return value


def _alpha(value: object) -> int:
    """Normalize an alpha value; floats are fractions, ints are bytes."""
    if isinstance(value, float):
        if not 0.0 <= value <= ALPHA_MAX_FLOAT:
            msg = f"fractional alpha must be within 0..1, got {value}"
            raise InvalidColor(msg)
        return round(value * ALPHA_OPAQUE)
    return _channel(value, "alpha")


def _from_sequence(values: Sequence[int | float]) -> RGBA:
    if len(values) not in (_RGB_LEN, _RGBA_LEN):
        msg = (f"color needs 3 (RGB) or 4 (RGBA) components, "
               f"got {len(values)}")
        raise InvalidColor(msg)
    red, green, blue = (
        _channel(v, name)
        for v, name in zip(values[:_RGB_LEN], ("red", "green", "blue"),
                           strict=True)
    )
    alpha = _alpha(values[3]) if len(values) == _RGBA_LEN else ALPHA_OPAQUE
    return red, green, blue, alpha


def _number(text: str) -> int | float:
    """Parse ``"0.5"`` as float and ``"128"`` as int."""
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError as exc:
        msg = f"not a number: {text!r}"
        raise InvalidColor(msg) from exc


def parse_background(value: ColorValue) -> RGBA:
    """
    Return ``value`` as an RGBA tuple of ints.

    Raises:
        InvalidColor: If the value is not a recognizable color.

    """
    if isinstance(value, str):
        text = value.strip()
        if "," in text and "(" not in text:
            return _from_sequence([_number(p) for p in text.split(",")])
        try:
            color = ImageColor.getcolor(text, "RGBA")
        except ValueError as exc:
            msg = f"unrecognized color: {value!r}"
            raise InvalidColor(msg) from exc
        return color  # type: ignore[return-value]
    if isinstance(value, Sequence):
        return _from_sequence(list(value))
    msg = f"unsupported color value: {value!r}"
    raise InvalidColor(msg)


def is_transparent(color: RGBA) -> bool:
    """Return True when the color is not fully opaque."""
    return color[3] < ALPHA_OPAQUE


__all__ = ["RGBA", "ColorValue", "is_transparent", "parse_background"]
