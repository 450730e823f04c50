"""
Segment planning and materialization component.

A normalized WAV becomes one or more transient segment files under
``spectrograms/``. Planning is pure (silences in, Segment variants out);
materialization is the only step that touches the renderer or the disk.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from neuralforge.components.platform.ffmpeg_comp import FFmpegRenderer, audible_intervals
from neuralforge.helpers.dto.spectrogram_dto import IntervalSegment, Segment, SilenceInterval, WholeFileSegment

logger = logging.getLogger(__name__)


def plan_segments(silences: Iterable[SilenceInterval]) -> list[Segment]:
    """
    Turn detected silences into the segments to materialize.

    No audible interval means the whole file is one segment.
    """
    intervals = audible_intervals(silences)
    if not intervals:
        return [WholeFileSegment()]
    return [
        IntervalSegment(index=i, start=interval.start, duration=interval.duration)
        for i, interval in enumerate(intervals, start=1)
    ]


def segment_target(segment: Segment, name: str, spectrograms_dir: Path) -> Path:
    """
    File name of a segment.

    ``<name>.wav`` for the whole file, ``<name>_chunk<i>.wav`` for intervals.
    """
    if isinstance(segment, WholeFileSegment):
        return spectrograms_dir / f"{name}.wav"
    return spectrograms_dir / f"{name}_chunk{segment.index}.wav"


def materialize_segment(renderer: FFmpegRenderer, source: Path, segment: Segment, target: Path) -> Path:
    """
    Write ``segment`` of ``source`` to ``target``.

    Raises:
        OSError: If the whole-file copy fails
        RendererError: If extraction fails
    """
    if isinstance(segment, WholeFileSegment):
        shutil.copyfile(source, target)
    else:
        renderer.extract_segment(source, target, segment.start, segment.duration)
    logger.debug("[segment] wrote %s", target.name)
    return target
