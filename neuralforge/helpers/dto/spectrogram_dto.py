"""Spectrogram domain DTOs.

Segments, silence markers and the spectrogram record persisted per content
hash.

Rules:
- Import only stdlib and typing (no neuralforge.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class SilenceInterval:
    """
    One silence reported by the silence detector.

    ``start`` is None when the detector reported an end without a preceding
    start (silence at the very beginning). ``end`` is None when the silence
    runs to end of file.
    """

    start: float | None
    end: float | None


@dataclass(frozen=True)
class AudibleInterval:
    """
    Audible stretch between silences, in seconds.

    ``end`` is None for an open-ended interval that runs to end of file.
    """

    start: float
    end: float | None

    @property
    def duration(self) -> float | None:
        return None if self.end is None else self.end - self.start


@dataclass(frozen=True)
class WholeFileSegment:
    """The entire source file is one segment (no silence was detected)."""


@dataclass(frozen=True)
class IntervalSegment:
    """
    A slice of the source file.

    Attributes:
        index: 1-based position among the file's segments
        start: Offset in seconds
        duration: Length in seconds, None to extract to end of file
    """

    index: int
    start: float
    duration: float | None


Segment = Union[WholeFileSegment, IntervalSegment]


@dataclass
class SpectrogramRecord:
    """
    Persisted spectrogram for one segment, keyed by its content hash.

    Attributes:
        file_name: Base name of the segment file it was rendered from
        md5_hash: Content hash of the segment bytes (also the record's file stem)
        chunk_path: Path of the segment when generated (advisory; the segment
            is deleted once the record is stored)
        spectrogram: height x width matrix of intensities in [0, 1]
            (np.ndarray or nested lists)
    """

    file_name: str
    md5_hash: str
    chunk_path: str
    spectrogram: Any

    def to_json_dict(self) -> dict[str, Any]:
        """Field-ordered dict ready for JSON serialization."""
        matrix = self.spectrogram
        if hasattr(matrix, "tolist"):
            matrix = matrix.tolist()
        return {
            "file_name": self.file_name,
            "md5_hash": self.md5_hash,
            "chunk_path": self.chunk_path,
            "spectrogram": matrix,
        }


@dataclass(frozen=True)
class SegmentOutcome:
    """Result of pushing one segment through hash -> store -> delete."""

    segment_path: str
    md5_hash: str
    duplicate: bool
