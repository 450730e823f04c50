"""Processing domain DTOs.

Typed pipeline configuration and the per-phase result objects returned by
workflows to services and interfaces.

Rules:
- Import only stdlib and typing (no neuralforge.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class PipelineConfig:
    """
    Everything a workflow needs from configuration.

    Built by ConfigService.make_pipeline_config(); workflows never read the
    raw config dict.
    """

    ffmpeg_binary: str = "ffmpeg"
    ffmpeg_timeout_s: float = 600.0
    batch_normalize: int = 200
    pool_spectrogram: int = 10
    pool_loader: int = 100
    silence_threshold_db: float = -30.0
    silence_min_duration_s: float = 0.5
    spectrogram_width: int = 1024
    spectrogram_height: int = 1024
    k_max: int = 10
    kmeans_iterations: int = 100
    kmeans_seed: int | None = None


@dataclass(frozen=True)
class ItemFailure:
    """One item that failed inside a phase; the phase kept going."""

    item: str
    error: str


NormalizeAction = Literal["copied", "transcoded", "skipped"]


@dataclass
class NormalizeResult:
    """Summary of convert_files_to_wav."""

    copied: list[str] = field(default_factory=list)
    transcoded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    collisions: list[str] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.copied) + len(self.transcoded) + len(self.skipped) + len(self.failures)


@dataclass
class ChunkProcessingResult:
    """
    Summary of process_audio_chunks_and_spectrograms / process_pending_chunks.

    ``hashes`` holds one entry per successfully handled segment, duplicates
    included, in completion order.
    """

    hashes: list[str] = field(default_factory=list)
    recorded: int = 0
    duplicates: int = 0
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class ElbowResult:
    """Persisted as elbow_results.json."""

    wcss_values: list[float]
    optimal_k: int

    def to_json_dict(self) -> dict[str, object]:
        return {"wcss_values": list(self.wcss_values), "optimal_k": self.optimal_k}


@dataclass
class PipelineRunResult:
    """Summary of run_pipeline."""

    normalize: NormalizeResult
    chunks: ChunkProcessingResult
    optimal_k: int

    @property
    def ok(self) -> bool:
        return self.normalize.ok and self.chunks.ok
