"""Public package exports for the image merger."""

from __future__ import annotations

from .errors import (
    CompositionFailure,
    InvalidBorder,
    InvalidColor,
    InvalidInput,
    MergeError,
    RenderFailure,
    SourceCorrupt,
    SourceUnreadable,
    WriteFailure,
)
from .merger import (
    ImageMerger,
    MergeResult,
    MergeRun,
    MergeState,
    merge_images,
)
from .progress import ProgressEvent

__all__ = [
    "CompositionFailure",
    "ImageMerger",
    "InvalidBorder",
    "InvalidColor",
    "InvalidInput",
    "MergeError",
    "MergeResult",
    "MergeRun",
    "MergeState",
    "ProgressEvent",
    "RenderFailure",
    "SourceCorrupt",
    "SourceUnreadable",
    "WriteFailure",
    "merge_images",
]
