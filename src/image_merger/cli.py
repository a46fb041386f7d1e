"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from pydantic import ValidationError
from tomlkit.exceptions import ParseError

import image_merger.config as im_config
from image_merger.config_defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_BORDER_SIZE,
    DEFAULT_OUTPUT_PATH,
)
from image_merger.errors import MergeError
from image_merger.logging_utils import logger, set_verbosity
from image_merger.merger import ImageMerger
from image_merger.progress import TqdmProgress
from image_merger.runtime.version import resolve_project_version

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")

EXIT_OK = 0
EXIT_FAILURE = 1


def non_negative_int(text: str) -> int:
    """Argparse-style validator for a border size."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value < 0:
        msg = "must be non-negative"
        raise ValueError(msg)
    return value


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="image-merger",
        description=(
            "Merge images vertically, padding each with a uniform border "
            "and centering it horizontally."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  image-merger img1.jpg img2.png -o merged.png\n"
            "  image-merger --dir ./photos -o merged_photos.png\n"
            "  image-merger --dir ./photos --sort --border-size 0\n"
        ),
    )
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    inputs = p.add_argument_group("inputs")
    inputs.add_argument(
        "images", nargs="*", type=Path, metavar="IMAGE",
        help="Images to merge, top to bottom")
    inputs.add_argument(
        "--dir", type=Path, metavar="DIRECTORY",
        help="Merge every supported image found in DIRECTORY")
    inputs.add_argument(
        "--sort", action="store_true", default=None,
        help="Sort directory images by file name (default: listing order)")

    output = p.add_argument_group("output")
    output.add_argument(
        "-o", "--output", type=str, default=None,
        help=f"Output image path (default: {DEFAULT_OUTPUT_PATH})")

    layout = p.add_argument_group("layout")
    layout.add_argument(
        "--border-size", type=_wrap_validator(non_negative_int),
        default=None,
        help=f"Border in pixels around each image "
             f"(default: {DEFAULT_BORDER_SIZE})")
    layout.add_argument(
        "--background", type=str, default=None,
        help=(
            "Border and canvas color: #rrggbb, #rrggbbaa, a color name, or "
            "R,G,B[,A] with A as 0..255, or 0.0..1.0 with a decimal point "
            f"(default: {DEFAULT_BACKGROUND})"
        ))

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without merging")

    misc = p.add_argument_group("misc")
    misc.add_argument(
        "--no-progress", action="store_true",
        help="Disable the progress bar")
    misc.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging")

    return p


def log_parameters(
    images: Sequence[Path],
    cfg: im_config.MergerConfig,
    args: argparse.Namespace,
) -> None:
    """Log the effective merge parameters."""
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Images: %d", len(images))
    logger.info("Border Size: %d", cfg.layout.border_size)
    logger.info("Background: %s", cfg.layout.background)
    logger.info("Output: %s", cfg.output.output)


def collect_images(
    args: argparse.Namespace,
    cfg: im_config.MergerConfig,
) -> list[Path]:
    """Return the ordered inputs from positional paths or ``--dir``."""
    if args.dir is None:
        return list(args.images)
    images = ImageMerger.find_images_in_directory(
        args.dir, sort=cfg.output.sort_inputs,
    )
    if images:
        logger.info("Found %d images in directory", len(images))
    return images


def run_from_args(args: argparse.Namespace) -> int:
    """Run a merge from parsed arguments and return the exit status."""
    base_cfg: im_config.MergerConfig | None = None
    if args.config:
        base_cfg = im_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return EXIT_OK

    cfg = im_config.build_config_from_cli(vars(args), base_config=base_cfg)
    merger = ImageMerger.from_config(cfg)

    images = collect_images(args, cfg)
    if not images:
        print(
            f"No supported images found in directory: {args.dir}",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    log_parameters(images, cfg, args)
    with TqdmProgress(len(images), disable=args.no_progress) as progress:
        merger.merge(images, cfg.output.output, progress=progress)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface and return the exit status."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only:
        if args.dir is not None and args.images:
            arg_parser.error("image paths cannot be combined with --dir")
        if args.dir is None and not args.images:
            arg_parser.error("provide image paths or --dir DIRECTORY")

    set_verbosity(verbose=args.verbose)

    try:
        return run_from_args(args)
    except (
        MergeError, ValidationError, ParseError, FileNotFoundError,
    ) as exc:
        print(f"CLI Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
