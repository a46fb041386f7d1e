"""Progress events emitted at merge stage boundaries."""

from __future__ import annotations

from collections.abc import Mapping  # noqa: TC003
from dataclasses import dataclass
from typing import Literal, Protocol

from tqdm import tqdm

from image_merger.constants import (
    STAGE_CANVAS_COMPOSED,
    STAGE_FILE_WRITTEN,
    STAGE_IMAGE_RENDERED,
    STAGE_SOURCE_RESOLVED,
)

Stage = Literal[
    "source_resolved",
    "image_rendered",
    "canvas_composed",
    "file_written",
]


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """
    A single pipeline milestone.

    ``index`` is the zero-based source position for per-source stages
    and ``None`` for whole-canvas stages.
    """

    stage: Stage
    total: int
    index: int | None = None
    source: str | None = None


class ProgressCallback(Protocol):
    """Callable notified of each :class:`ProgressEvent`."""

    def __call__(self, event: ProgressEvent) -> None:
        """Handle one event."""


class ProgressReporter(Protocol):
    """Protocol capturing the subset of tqdm's interface we rely on."""

    def update(self, n: float | None = 1) -> bool | None:
        """Advance the progress display by ``n`` units."""

    def set_postfix(
        self,
        ordered_dict: Mapping[str, object] | None = None,
        refresh: bool | None = True,  # noqa: FBT001,FBT002
        **kwargs: object,
    ) -> None:
        """Update the supplementary values shown beside the progress bar."""

    def close(self) -> None:
        """Release any resources associated with the display."""


class TqdmProgress:
    """
    Progress callback that drives a tqdm bar.

    Each source advances the bar twice (probe and render) and the
    composed and written stages advance it once more each.
    """

    def __init__(
        self,
        total_sources: int,
        *,
        bar: ProgressReporter | None = None,
        disable: bool = False,
    ) -> None:
        self._owns_bar = bar is None
        self._bar: ProgressReporter = bar or tqdm(
            total=2 * total_sources + 2,
            desc="Merging",
            unit="step",
            disable=disable,
        )

    def __call__(self, event: ProgressEvent) -> None:
        if event.stage in (STAGE_SOURCE_RESOLVED, STAGE_IMAGE_RENDERED):
            self._bar.set_postfix(stage=event.stage, image=event.source or "")
        elif event.stage in (STAGE_CANVAS_COMPOSED, STAGE_FILE_WRITTEN):
            self._bar.set_postfix(stage=event.stage)
        self._bar.update(1)

    def close(self) -> None:
        """Close the bar if this reporter created it."""
        if self._owns_bar:
            self._bar.close()

    def __enter__(self) -> TqdmProgress:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
