"""Version lookup for ``--version``."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from image_merger.logging_utils import logger

DISTRIBUTION_NAME = "image-merger"
DEV_VERSION = "0.0.0"

# src/image_merger/runtime/version.py -> repository root
_SOURCE_TREE_DEPTH = 3


def _source_tree_pyproject() -> Path:
    return Path(__file__).resolve().parents[_SOURCE_TREE_DEPTH] / \
        "pyproject.toml"


def resolve_project_version() -> str:
    """
    Return the installed version, or the checkout's pyproject version.

    Running from a source checkout without installing falls back to
    ``[project] version`` in the repository's pyproject.toml, and to
    ``DEV_VERSION`` when that cannot be read.
    """
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        pass

    pyproject = _source_tree_pyproject()
    try:
        doc = tomlkit.parse(pyproject.read_text(encoding="utf-8"))
    except (OSError, ParseError) as exc:
        logger.debug("No version in %s: %s", pyproject, exc)
        return DEV_VERSION

    version = doc.unwrap().get("project", {}).get("version")
    if isinstance(version, str) and version.strip():
        return version.strip()
    return DEV_VERSION
