"""Directory enumeration for supported image files."""

from __future__ import annotations

from pathlib import Path

from image_merger.constants import SUPPORTED_FORMATS
from image_merger.errors import SourceUnreadable
from image_merger.logging_utils import logger


def supported_formats() -> tuple[str, ...]:
    """Return the lowercase extensions picked up from directories."""
    return SUPPORTED_FORMATS


def is_supported_image(path: Path) -> bool:
    """Return True when ``path`` has a supported extension (any case)."""
    return path.suffix.lower() in SUPPORTED_FORMATS


def find_images_in_directory(
    directory: str | Path,
    *,
    sort: bool = False,
) -> list[Path]:
    """
    List the supported images directly inside ``directory``.

    Entries come back in the platform's directory-listing order unless
    ``sort`` is set, in which case they are ordered by name.
    Sub-directories are skipped even if their names look like images.

    Raises:
        SourceUnreadable: If the directory cannot be listed.

    """
    dir_path = Path(directory)
    try:
        entries = list(dir_path.iterdir())
    except OSError as exc:
        msg = f"Error reading directory '{dir_path}': {exc!s}"
        raise SourceUnreadable(msg, source=str(dir_path)) from exc

    images = [p for p in entries if is_supported_image(p) and not p.is_dir()]
    if sort:
        images.sort(key=lambda p: p.name)
    logger.debug("Found %d supported images in %s", len(images), dir_path)
    return images
