"""Shared default values for user-facing configuration settings."""

# Layout
DEFAULT_BORDER_SIZE = 10
DEFAULT_BACKGROUND = "#ffffff"

# Output
DEFAULT_OUTPUT_PATH = "merged_images.png"
DEFAULT_SORT_INPUTS = False
