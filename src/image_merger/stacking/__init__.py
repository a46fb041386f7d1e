"""
Vertical stacking split into core primitives, layouts, and naming helpers.

The package exposes the most commonly used entry points directly so
callers can import them without knowing the submodule layout.
"""

from __future__ import annotations

from . import core, layouts, naming
from .core import (
    ImageSource,
    Placement,
    ResolvedSource,
    describe_source,
    paste_at,
    render_bordered_copy,
    resolve_dimensions,
    resolve_source,
)
from .layouts import Layout, compose, compute_layout
from .naming import (
    default_output_path,
    encode_canvas,
    ensure_suffix,
    output_format,
    write_canvas,
)

__all__ = [
    "ImageSource",
    "Layout",
    "Placement",
    "ResolvedSource",
    "compose",
    "compute_layout",
    "core",
    "default_output_path",
    "describe_source",
    "encode_canvas",
    "ensure_suffix",
    "layouts",
    "naming",
    "output_format",
    "paste_at",
    "render_bordered_copy",
    "resolve_dimensions",
    "resolve_source",
    "write_canvas",
]
