"""
File system helpers for audio file operations.

Pure path/byte utilities shared by the normalizer, the segmenter and the
content store. Nothing here knows about projects or ffmpeg.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

# Read size for streaming hashes (1 MiB)
_HASH_BLOCK_SIZE = 1024 * 1024


def wav_stem(file_name: str) -> str:
    """
    Strip the final extension from a base name.

    Only the base name is considered, so directory components never leak
    into the result.

    Examples:
        >>> wav_stem("take.final.mp3")
        'take.final'
        >>> wav_stem("sub/dir/a.WAV")
        'a'
        >>> wav_stem("noext")
        'noext'
    """
    return Path(file_name).stem


def is_wav_name(file_name: str) -> bool:
    """Return True if the file name carries a .wav extension (case-insensitive)."""
    return Path(file_name).suffix.lower() == ".wav"


def md5_file(path: str | Path) -> str:
    """
    Compute the MD5 hex digest over the full byte content of a file.

    Args:
        path: File to hash

    Returns:
        32-character lowercase hex digest

    Raises:
        OSError: If the file cannot be read
    """
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(_HASH_BLOCK_SIZE), b""):
            digest.update(block)
    return digest.hexdigest()


def list_files_with_suffix(directory: str | Path, suffix: str) -> list[Path]:
    """
    List regular files directly inside a directory whose suffix matches.

    Matching is case-insensitive and non-recursive. Hidden files (leading dot)
    are ignored so in-flight temp files are never picked up.

    Returns:
        Sorted list of paths; empty if the directory does not exist.
    """
    root = Path(directory)
    if not root.is_dir():
        return []
    suffix = suffix.lower()
    return sorted(p for p in root.iterdir() if p.is_file() and not p.name.startswith(".") and p.suffix.lower() == suffix)
