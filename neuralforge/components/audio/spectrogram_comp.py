"""
Spectrogram extraction component.

Per segment: hash, consult the content store, render, decode, persist, delete.
The hash -> store -> delete order is strict; a failure at any step leaves the
segment file in place and raises to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from neuralforge.components.platform.ffmpeg_comp import FFmpegRenderer
from neuralforge.components.store.content_store_comp import ContentStore
from neuralforge.helpers.dto.spectrogram_dto import SegmentOutcome, SpectrogramRecord
from neuralforge.helpers.exceptions import SpectrogramDecodeError

logger = logging.getLogger(__name__)

FULL_SCALE = 65535.0

# 8-bit channel -> 16-bit range (0xRR -> 0xRRRR)
_WIDEN_8_TO_16 = 257.0

_SIXTEEN_BIT_GRAY_MODES = {"I;16", "I;16B", "I;16L", "I"}


def decode_spectrogram_png(path: str | Path, width: int = 1024, height: int = 1024) -> np.ndarray:
    """
    Decode a rendered spectrogram into a ``height x width`` intensity matrix.

    Each pixel becomes ``(R + G + B) / (3 * 65535)`` with channels taken in the
    16-bit range, so every value lies in [0, 1]. Rows run top to bottom,
    columns left to right.

    Images with an alpha channel are alpha-premultiplied first, truncating
    like 16-bit integer math: ``floor(C16 * A16 / 65535)``. ffmpeg writes
    opaque rgb24, where this is a no-op. Pillow loads 48-bit RGB PNGs as
    8 bits per channel, so only 16-bit grayscale keeps its full depth.

    Raises:
        SpectrogramDecodeError: If the file is not a readable image or its
            size is not ``width x height``
    """
    try:
        with Image.open(path) as img:
            img.load()
            if img.size != (width, height):
                raise SpectrogramDecodeError(
                    f"Spectrogram {Path(path).name} is {img.size[0]}x{img.size[1]}, expected {width}x{height}"
                )
            if img.mode in _SIXTEEN_BIT_GRAY_MODES:
                gray = np.asarray(img, dtype=np.float64)
                matrix = np.clip(gray, 0.0, FULL_SCALE) / FULL_SCALE
            else:
                rgba = np.asarray(img.convert("RGBA"), dtype=np.float64) * _WIDEN_8_TO_16
                rgb = np.floor(rgba[:, :, :3] * rgba[:, :, 3:] / FULL_SCALE)
                matrix = rgb.sum(axis=2) / (3.0 * FULL_SCALE)
    except (UnidentifiedImageError, OSError) as e:
        raise SpectrogramDecodeError(f"Cannot decode spectrogram {Path(path).name}: {e}") from e

    return matrix


def extract_spectrogram(
    renderer: FFmpegRenderer,
    store: ContentStore,
    segment_path: Path,
    width: int = 1024,
    height: int = 1024,
) -> SegmentOutcome:
    """
    Push one segment file through hash -> store -> delete.

    A hash already in the store short-circuits: nothing is rendered and the
    segment is deleted.

    Returns:
        SegmentOutcome with the content hash and whether it was a duplicate

    Raises:
        RendererError: If rendering fails
        SpectrogramDecodeError: If the rendered PNG cannot be decoded
        OSError: If hashing, persisting or deleting fails
    """
    md5_hash = store.hash_file(segment_path)

    if store.contains(md5_hash):
        segment_path.unlink()
        logger.debug("[spectrogram] %s duplicate of %s", segment_path.name, md5_hash)
        return SegmentOutcome(segment_path=str(segment_path), md5_hash=md5_hash, duplicate=True)

    with renderer.rendered_spectrogram(segment_path, width=width, height=height) as png_path:
        matrix = decode_spectrogram_png(png_path, width=width, height=height)

    record = SpectrogramRecord(
        file_name=segment_path.name,
        md5_hash=md5_hash,
        chunk_path=str(segment_path),
        spectrogram=matrix,
    )
    written = store.put(record)
    segment_path.unlink()

    logger.debug("[spectrogram] %s -> %s%s", segment_path.name, md5_hash, "" if written else " (raced)")
    return SegmentOutcome(segment_path=str(segment_path), md5_hash=md5_hash, duplicate=not written)
