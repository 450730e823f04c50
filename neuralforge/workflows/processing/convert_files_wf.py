"""
WAV normalization workflow.

This is a PURE WORKFLOW module that turns a project's file inventory into
``<project>/sounds/<stem>.wav`` files:
- Resolve every inventory entry to a source path and a target path
- Drop all but the last entry of each target collision (last writer wins)
- Normalize in fixed-size batches; all files of a batch run concurrently,
  batches run one after the other

ARCHITECTURE:
- Does NOT read configuration or touch services.
- Callers provide ProjectPaths, ProjectData, the renderer, the typed
  PipelineConfig and the project's error log writer.
- Per-file failures are written to the error log and collected in the result;
  the workflow never raises for a single file.

USAGE:
    result = convert_files_workflow(paths, project_data, renderer, config, error_log)
    if not result.ok:
        ...
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from neuralforge.components.audio.wav_normalize_comp import normalize_one, source_path, target_path
from neuralforge.components.platform.ffmpeg_comp import FFmpegRenderer
from neuralforge.components.project.error_log_comp import ErrorLogWriter
from neuralforge.helpers.dto.processing_dto import ItemFailure, NormalizeResult, PipelineConfig
from neuralforge.helpers.dto.project_dto import ProjectData, ProjectPaths

logger = logging.getLogger(__name__)


def plan_conversions(paths: ProjectPaths, project_data: ProjectData) -> tuple[list[tuple[Path, Path]], list[str]]:
    """
    Map inventory entries to (source, target) pairs.

    When several entries share a target, only the last one (inventory order)
    is kept.

    A target whose name starts with a dot is still planned but logged, since
    segmentation ignores hidden files.

    Returns:
        (pairs in inventory order, sources dropped because of a collision)
    """
    by_target: dict[Path, Path] = {}
    dropped: list[str] = []

    for entry in project_data.entries():
        source = source_path(project_data.selected_directory, entry)
        target = target_path(paths.sounds_dir, entry)
        if target.name.startswith("."):
            logger.warning("[convert] %s normalizes to hidden %s, which segmentation will skip", source, target.name)
        previous = by_target.pop(target, None)
        if previous is not None:
            logger.warning("[convert] %s and %s both normalize to %s; keeping %s", previous, source, target.name, source)
            dropped.append(str(previous))
        by_target[target] = source

    return [(source, target) for target, source in by_target.items()], dropped


def _batches(items: list[tuple[Path, Path]], size: int) -> list[list[tuple[Path, Path]]]:
    size = max(1, size)
    return [items[i : i + size] for i in range(0, len(items), size)]


def convert_files_workflow(
    paths: ProjectPaths,
    project_data: ProjectData,
    renderer: FFmpegRenderer,
    config: PipelineConfig,
    error_log: ErrorLogWriter,
) -> NormalizeResult:
    """
    Normalize every inventory entry into ``sounds/``.

    The sounds directory must already exist.

    Returns:
        NormalizeResult; ``ok`` is False if any file failed
    """
    pairs, dropped = plan_conversions(paths, project_data)
    result = NormalizeResult(collisions=dropped)
    batches = _batches(pairs, config.batch_normalize)

    logger.info("[convert] %s: %d file(s) in %d batch(es)", paths.name, len(pairs), len(batches))

    for batch_no, batch in enumerate(batches, start=1):
        with ThreadPoolExecutor(max_workers=len(batch), thread_name_prefix=f"normalize-{batch_no}") as executor:
            futures = [(source, executor.submit(normalize_one, renderer, source, target)) for source, target in batch]
            for source, future in futures:
                try:
                    action = future.result()
                except Exception as e:
                    error_log.append(f"Error converting {source}", e)
                    result.failures.append(ItemFailure(item=str(source), error=str(e)))
                    continue
                getattr(result, action).append(str(source))
        logger.debug("[convert] batch %d/%d done", batch_no, len(batches))

    logger.info(
        "[convert] %s: copied=%d transcoded=%d skipped=%d failed=%d",
        paths.name,
        len(result.copied),
        len(result.transcoded),
        len(result.skipped),
        len(result.failures),
    )
    return result
