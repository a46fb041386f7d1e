"""
Error taxonomy for the image merger.

Every failure surfaced by the layout engine derives from
:class:`MergeError`, so library callers can catch a single type and
still inspect :attr:`MergeError.kind` to learn what went wrong.
"""

from __future__ import annotations


class MergeError(Exception):
    """Base class for all merge failures."""

    kind = "MergeError"

    def __init__(self, message: str, *, source: object | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source


class InvalidInput(MergeError):  # noqa: N818
    """Empty source list, or no usable image to merge."""

    kind = "InvalidInput"


class InvalidColor(InvalidInput):
    """Background color could not be parsed."""

    kind = "InvalidColor"


class InvalidBorder(MergeError):  # noqa: N818
    """Negative or non-integer border size."""

    kind = "InvalidBorder"


class SourceUnreadable(MergeError):  # noqa: N818
    """Source does not exist or cannot be opened."""

    kind = "SourceUnreadable"


class SourceCorrupt(MergeError):  # noqa: N818
    """Source format or dimensions cannot be determined."""

    kind = "SourceCorrupt"


class RenderFailure(MergeError):  # noqa: N818
    """Decoding or bordering a single source failed."""

    kind = "RenderFailure"


class CompositionFailure(MergeError):  # noqa: N818
    """A buffer could not be placed on the canvas (internal invariant)."""

    kind = "CompositionFailure"


class WriteFailure(MergeError):  # noqa: N818
    """Encoding or writing the merged canvas failed."""

    kind = "WriteFailure"


__all__ = [
    "CompositionFailure",
    "InvalidBorder",
    "InvalidColor",
    "InvalidInput",
    "MergeError",
    "RenderFailure",
    "SourceCorrupt",
    "SourceUnreadable",
    "WriteFailure",
]
