"""
Segment + spectrogram extraction workflow.

This is a PURE WORKFLOW module wiring a segment producer to the extractor pool:
- Producer (caller thread): either segments every ``sounds/*.wav`` (combined
  mode) or walks leftover ``spectrograms/*.wav`` (resume mode), handing each
  segment path to the pool as soon as it exists
- Extractor pool: ``pool_spectrogram`` workers run hash -> store -> delete
- Collector: gathers content hashes, duplicates included

ARCHITECTURE:
- Does NOT read configuration or touch services.
- Per-file and per-segment failures are written to the error log, collected
  in the result and never abort the phase. A failed segment stays on disk.

USAGE:
    result = process_chunks_workflow(paths, renderer, store, config, error_log)
    result = process_pending_chunks_workflow(paths, renderer, store, config, error_log)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from pathlib import Path

from neuralforge.components.audio.segment_comp import materialize_segment, plan_segments, segment_target
from neuralforge.components.audio.spectrogram_comp import extract_spectrogram
from neuralforge.components.platform.ffmpeg_comp import FFmpegRenderer
from neuralforge.components.project.error_log_comp import ErrorLogWriter
from neuralforge.components.store.content_store_comp import ContentStore
from neuralforge.components.workers.bounded_pool_comp import BoundedWorkerPool
from neuralforge.helpers.dto.processing_dto import ChunkProcessingResult, ItemFailure, PipelineConfig
from neuralforge.helpers.dto.project_dto import ProjectPaths
from neuralforge.helpers.dto.spectrogram_dto import SegmentOutcome
from neuralforge.helpers.files_helper import list_files_with_suffix

logger = logging.getLogger(__name__)


def iter_new_segments(
    paths: ProjectPaths,
    renderer: FFmpegRenderer,
    error_log: ErrorLogWriter,
    result: ChunkProcessingResult,
) -> Iterator[Path]:
    """
    Segment each normalized WAV and yield segment paths as they are written.

    A file whose silence detection fails, or a segment whose extraction fails,
    is logged and skipped.
    """
    for source in list_files_with_suffix(paths.sounds_dir, ".wav"):
        try:
            segments = plan_segments(renderer.detect_silence(source))
        except Exception as e:
            error_log.append(f"Error detecting silence in {source}", e)
            result.failures.append(ItemFailure(item=str(source), error=str(e)))
            continue

        logger.debug("[chunks] %s: %d segment(s)", source.name, len(segments))
        for segment in segments:
            target = segment_target(segment, source.stem, paths.spectrograms_dir)
            try:
                materialize_segment(renderer, source, segment, target)
            except Exception as e:
                error_log.append(f"Error extracting segment {target}", e)
                result.failures.append(ItemFailure(item=str(target), error=str(e)))
                continue
            yield target


def iter_pending_segments(paths: ProjectPaths) -> Iterator[Path]:
    """Yield segment WAVs already sitting in ``spectrograms/``."""
    yield from list_files_with_suffix(paths.spectrograms_dir, ".wav")


def _run_extractor_pool(
    segments: Iterator[Path],
    renderer: FFmpegRenderer,
    store: ContentStore,
    config: PipelineConfig,
    error_log: ErrorLogWriter,
    result: ChunkProcessingResult,
    stop_event: threading.Event | None,
) -> ChunkProcessingResult:
    def handle(segment_path: Path) -> SegmentOutcome:
        return extract_spectrogram(
            renderer,
            store,
            segment_path,
            width=config.spectrogram_width,
            height=config.spectrogram_height,
        )

    def on_result(segment_path: Path, outcome: SegmentOutcome) -> None:
        result.hashes.append(outcome.md5_hash)
        if outcome.duplicate:
            result.duplicates += 1
        else:
            result.recorded += 1

    def on_error(segment_path: Path, error: Exception) -> None:
        error_log.append(f"Error processing segment {segment_path}", error)
        result.failures.append(ItemFailure(item=str(segment_path), error=str(error)))

    pool = BoundedWorkerPool(
        name="spectrogram",
        workers=config.pool_spectrogram,
        handler=handle,
        on_result=on_result,
        on_error=on_error,
        stop_event=stop_event,
    )
    pool.run(segments)

    logger.info(
        "[chunks] recorded=%d duplicates=%d failed=%d",
        result.recorded,
        result.duplicates,
        len(result.failures),
    )
    return result


def process_chunks_workflow(
    paths: ProjectPaths,
    renderer: FFmpegRenderer,
    store: ContentStore,
    config: PipelineConfig,
    error_log: ErrorLogWriter,
    stop_event: threading.Event | None = None,
) -> ChunkProcessingResult:
    """
    Segment every ``sounds/*.wav`` and extract a spectrogram per segment.

    Both ``sounds/`` and ``spectrograms/`` must already exist.

    Returns:
        ChunkProcessingResult with one hash per handled segment
    """
    result = ChunkProcessingResult()
    logger.info("[chunks] %s: segmenting %s", paths.name, paths.sounds_dir)
    segments = iter_new_segments(paths, renderer, error_log, result)
    return _run_extractor_pool(segments, renderer, store, config, error_log, result, stop_event)


def process_pending_chunks_workflow(
    paths: ProjectPaths,
    renderer: FFmpegRenderer,
    store: ContentStore,
    config: PipelineConfig,
    error_log: ErrorLogWriter,
    stop_event: threading.Event | None = None,
) -> ChunkProcessingResult:
    """
    Extract spectrograms for segment WAVs left in ``spectrograms/`` by an
    earlier, interrupted run. Nothing is re-segmented.
    """
    result = ChunkProcessingResult()
    logger.info("[chunks] %s: resuming from %s", paths.name, paths.spectrograms_dir)
    return _run_extractor_pool(
        iter_pending_segments(paths), renderer, store, config, error_log, result, stop_event
    )
