"""
Top-level orchestration for vertical image merging.

:class:`ImageMerger` holds the border and background configuration and
can be reused; every :meth:`ImageMerger.merge` call builds a fresh,
single-use :class:`MergeRun` that walks the pipeline

    IDLE -> RESOLVING_DIMENSIONS -> COMPUTING_LAYOUT
         -> RENDERING(0..n-1) -> COMPOSING -> WRITING -> DONE

and drops to FAILED on the first error, which is re-raised unchanged.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from image_merger.colors import is_transparent, parse_background
from image_merger.config_defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_BORDER_SIZE,
)
from image_merger.constants import (
    STAGE_CANVAS_COMPOSED,
    STAGE_FILE_WRITTEN,
    STAGE_IMAGE_RENDERED,
    STAGE_SOURCE_RESOLVED,
)
from image_merger.logging_utils import logger
from image_merger.progress import ProgressEvent
from image_merger.runtime.discovery import (
    find_images_in_directory,
    supported_formats,
)
from image_merger.runtime.validation import (
    validate_border_size,
    validate_sources,
)
from image_merger.stacking import (
    compose,
    compute_layout,
    default_output_path,
    render_bordered_copy,
    resolve_source,
    write_canvas,
)

if TYPE_CHECKING:  # pragma: no cover
    import os
    from collections.abc import Iterator, Sequence

    from PIL import Image

    from image_merger.colors import RGBA, ColorValue
    from image_merger.config import MergerConfig
    from image_merger.progress import ProgressCallback, Stage
    from image_merger.stacking import ImageSource, Layout, ResolvedSource


class MergeState(enum.Enum):
    """Pipeline stages of a single merge."""

    IDLE = "idle"
    RESOLVING_DIMENSIONS = "resolving_dimensions"
    COMPUTING_LAYOUT = "computing_layout"
    RENDERING = "rendering"
    COMPOSING = "composing"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: dict[MergeState, frozenset[MergeState]] = {
    MergeState.IDLE: frozenset({MergeState.RESOLVING_DIMENSIONS}),
    MergeState.RESOLVING_DIMENSIONS: frozenset(
        {MergeState.COMPUTING_LAYOUT},
    ),
    MergeState.COMPUTING_LAYOUT: frozenset({MergeState.RENDERING}),
    # RENDERING -> RENDERING moves on to the next source index
    MergeState.RENDERING: frozenset(
        {MergeState.RENDERING, MergeState.COMPOSING},
    ),
    MergeState.COMPOSING: frozenset({MergeState.WRITING}),
    MergeState.WRITING: frozenset({MergeState.DONE}),
    MergeState.DONE: frozenset(),
    MergeState.FAILED: frozenset(),
}


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Outcome of a successful merge."""

    output_path: Path
    width: int
    height: int
    image_count: int


class MergeRun:
    """
    One merge invocation.

    Not reusable: calling :meth:`run` a second time raises
    ``RuntimeError`` whatever the outcome of the first call.
    """

    def __init__(  # noqa: PLR0913
        self,
        sources: Sequence[ImageSource],
        output_path: str | os.PathLike[str],
        *,
        border_size: int,
        background: RGBA,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.border_size = validate_border_size(border_size)
        validate_sources(sources)
        self.sources = tuple(sources)
        self.output_path = Path(output_path)
        self.background = background
        self.progress = progress
        self.state = MergeState.IDLE
        self.rendering_index: int | None = None
        self.history: list[tuple[MergeState, int | None]] = [
            (MergeState.IDLE, None),
        ]
        self.error: BaseException | None = None
        self.layout: Layout | None = None

    def _advance(self, state: MergeState, index: int | None = None) -> None:
        if state not in _TRANSITIONS[self.state]:
            msg = f"Illegal merge transition {self.state.name} -> {state.name}"
            raise RuntimeError(msg)
        if state is MergeState.RENDERING and (
            self.rendering_index is not None
            and index is not None
            and index <= self.rendering_index
        ):
            msg = f"Source {index} was already rendered"
            raise RuntimeError(msg)
        self.state = state
        if state is MergeState.RENDERING:
            self.rendering_index = index
        self.history.append((state, index))

    def _emit(
        self,
        stage: Stage,
        index: int | None = None,
        source: str | None = None,
    ) -> None:
        if self.progress is not None:
            self.progress(ProgressEvent(
                stage=stage, total=len(self.sources),
                index=index, source=source,
            ))

    def run(self) -> MergeResult:
        """Execute the pipeline and return the result."""
        if self.state is not MergeState.IDLE:
            msg = "MergeRun instances are single use"
            raise RuntimeError(msg)
        try:
            return self._run()
        except Exception as exc:
            self.error = exc
            self.state = MergeState.FAILED
            self.history.append((MergeState.FAILED, self.rendering_index))
            logger.error("Error merging images: %s", exc)
            raise

    def _resolve_all(self) -> list[ResolvedSource]:
        self._advance(MergeState.RESOLVING_DIMENSIONS)
        resolved = []
        for idx, src in enumerate(self.sources):
            item = resolve_source(src, idx)
            resolved.append(item)
            self._emit(STAGE_SOURCE_RESOLVED, idx, item.label)
        return resolved

    def _render_all(
        self,
        resolved: list[ResolvedSource],
    ) -> Iterator[Image.Image]:
        for item in resolved:
            self._advance(MergeState.RENDERING, item.index)
            logger.debug("Processing: %s", item.label)
            buffer = render_bordered_copy(
                item, self.border_size, self.background,
            )
            self._emit(STAGE_IMAGE_RENDERED, item.index, item.label)
            yield buffer

    def _run(self) -> MergeResult:
        logger.info("Processing %d images...", len(self.sources))
        resolved = self._resolve_all()

        self._advance(MergeState.COMPUTING_LAYOUT)
        layout = compute_layout(
            [(item.width, item.height) for item in resolved],
            self.border_size,
        )
        self.layout = layout
        logger.info("Final canvas size: %dx%d",
                    layout.canvas_width, layout.canvas_height)

        canvas = compose(
            self._render_all(resolved),
            layout.placements,
            layout.canvas_size,
            self.background,
        )
        self._advance(MergeState.COMPOSING)
        self._emit(STAGE_CANVAS_COMPOSED)

        self._advance(MergeState.WRITING)
        saved = write_canvas(canvas, self.output_path)
        self._emit(STAGE_FILE_WRITTEN, source=str(saved))
        self._advance(MergeState.DONE)

        logger.info("Successfully merged images to: %s", saved)
        logger.info("Final dimensions: %dx%dpx",
                    layout.canvas_width, layout.canvas_height)
        return MergeResult(
            output_path=saved,
            width=layout.canvas_width,
            height=layout.canvas_height,
            image_count=len(self.sources),
        )


class ImageMerger:
    """
    Merge images vertically with a uniform border.

    Border size and background are validated up front, so a bad
    configuration fails before any file is touched.
    """

    def __init__(
        self,
        border_size: int = DEFAULT_BORDER_SIZE,
        background: ColorValue = DEFAULT_BACKGROUND,
    ) -> None:
        self.border_size = validate_border_size(border_size)
        self.background = parse_background(background)
        if is_transparent(self.background):
            logger.debug("Background %s is translucent", self.background)

    @classmethod
    def from_config(cls, config: MergerConfig) -> ImageMerger:
        """Build a merger from the ``[layout]`` section of a config."""
        return cls(
            border_size=config.layout.border_size,
            background=config.layout.background,
        )

    @staticmethod
    def supported_formats() -> tuple[str, ...]:
        """Return the extensions recognised by directory discovery."""
        return supported_formats()

    @staticmethod
    def find_images_in_directory(
        directory: str | os.PathLike[str],
        *,
        sort: bool = False,
    ) -> list[Path]:
        """List supported images inside ``directory``."""
        return find_images_in_directory(directory, sort=sort)

    def merge(
        self,
        sources: Sequence[ImageSource],
        output_path: str | os.PathLike[str] | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> MergeResult:
        """
        Stack ``sources`` top to bottom and write the result.

        Args:
            sources: Ordered image paths, byte strings, or binary streams.
            output_path: Destination file; defaults to
                ``merged_images.png`` in the working directory.
            progress: Optional callback notified at each stage boundary.

        Returns:
            The written path, canvas size, and number of merged images.

        Raises:
            MergeError: The first failure encountered, unchanged.

        """
        run = MergeRun(
            sources,
            output_path if output_path is not None else default_output_path(),
            border_size=self.border_size,
            background=self.background,
            progress=progress,
        )
        return run.run()


def merge_images(  # noqa: PLR0913
    sources: Sequence[ImageSource],
    output_path: str | os.PathLike[str] | None = None,
    *,
    border_size: int = DEFAULT_BORDER_SIZE,
    background: ColorValue = DEFAULT_BACKGROUND,
    progress: ProgressCallback | None = None,
) -> MergeResult:
    """Merge ``sources`` in one call without keeping a merger around."""
    merger = ImageMerger(border_size=border_size, background=background)
    return merger.merge(sources, output_path, progress=progress)


__all__ = [
    "ImageMerger",
    "MergeResult",
    "MergeRun",
    "MergeState",
    "merge_images",
]
