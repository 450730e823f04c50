"""
WAV normalization component.

Turns one inventory entry into ``<sounds>/<stem>.wav``: existing targets are
left alone, WAV sources are byte-copied and everything else goes through the
renderer's transcode operation.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from neuralforge.components.platform.ffmpeg_comp import FFmpegRenderer
from neuralforge.helpers.dto.processing_dto import NormalizeAction
from neuralforge.helpers.dto.project_dto import InventoryEntry
from neuralforge.helpers.files_helper import is_wav_name, wav_stem

logger = logging.getLogger(__name__)


def source_path(selected_directory: Path, entry: InventoryEntry) -> Path:
    """Absolute source path of an inventory entry (``"."`` is the root itself)."""
    if entry.subdir in ("", "."):
        return selected_directory / entry.file_name
    return selected_directory / entry.subdir / entry.file_name


def target_path(sounds_dir: Path, entry: InventoryEntry) -> Path:
    """``<sounds>/<stem>.wav``; the subdirectory never appears in the target."""
    return sounds_dir / f"{wav_stem(entry.file_name)}.wav"


def normalize_one(renderer: FFmpegRenderer, source: Path, target: Path) -> NormalizeAction:
    """
    Normalize a single source file into ``target``.

    Returns:
        "skipped" if the target already existed, "copied" for WAV sources,
        "transcoded" otherwise

    Raises:
        OSError: If a WAV source cannot be copied
        RendererError: If transcoding fails
    """
    if target.exists():
        logger.info("[normalize] %s already exists", target)
        return "skipped"

    if is_wav_name(source.name):
        shutil.copyfile(source, target)
        logger.debug("[normalize] copied %s -> %s", source, target)
        return "copied"

    renderer.transcode_to_wav(source, target)
    logger.debug("[normalize] transcoded %s -> %s", source, target)
    return "transcoded"
