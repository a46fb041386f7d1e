"""Runtime helpers for input discovery, validation, and versioning."""

from .discovery import (
    find_images_in_directory,
    is_supported_image,
    supported_formats,
)
from .validation import validate_border_size, validate_sources
from .version import resolve_project_version

__all__ = [
    "find_images_in_directory",
    "is_supported_image",
    "resolve_project_version",
    "supported_formats",
    "validate_border_size",
    "validate_sources",
]
