"""
Constants used internally by the image merger.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Extensions picked up by the directory enumerator (lowercase)
SUPPORTED_FORMATS = (".jpg", ".jpeg", ".png", ".webp", ".tiff", ".gif")

# Canvas and buffer mode; the canvas always carries an alpha channel
COLOR_MODE_RGBA = "RGBA"
COLOR_MODE_RGB = "RGB"

# Suffix appended when the output path has none
CANONICAL_OUTPUT_SUFFIX = ".png"

# Encoders that cannot store an alpha channel
ALPHA_LESS_FORMATS = frozenset({"JPEG", "BMP", "PPM"})

# Alpha bounds
ALPHA_OPAQUE = 255
ALPHA_MAX_FLOAT = 1.0

# Progress stages, in pipeline order
STAGE_SOURCE_RESOLVED = "source_resolved"
STAGE_IMAGE_RENDERED = "image_rendered"
STAGE_CANVAS_COMPOSED = "canvas_composed"
STAGE_FILE_WRITTEN = "file_written"
