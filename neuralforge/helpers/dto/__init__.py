"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

Domain-specific DTOs live in helpers/dto/<domain>_dto.py and form cross-layer contracts
within that domain (interfaces -> services -> workflows -> components).

Rules for DTO modules:
- Import only stdlib and typing (no neuralforge.* imports)
- Contain ONLY dataclass/type definitions and simple type aliases
- No I/O, no business logic
"""

from __future__ import annotations

from neuralforge.helpers.dto.processing_dto import (
    ChunkProcessingResult,
    ElbowResult,
    ItemFailure,
    NormalizeResult,
    PipelineConfig,
    PipelineRunResult,
)
from neuralforge.helpers.dto.project_dto import InventoryEntry, ProjectData, ProjectPaths
from neuralforge.helpers.dto.spectrogram_dto import (
    AudibleInterval,
    IntervalSegment,
    Segment,
    SegmentOutcome,
    SilenceInterval,
    SpectrogramRecord,
    WholeFileSegment,
)

__all__ = [
    "AudibleInterval",
    "ChunkProcessingResult",
    "ElbowResult",
    "IntervalSegment",
    "InventoryEntry",
    "ItemFailure",
    "NormalizeResult",
    "PipelineConfig",
    "PipelineRunResult",
    "ProjectData",
    "ProjectPaths",
    "Segment",
    "SegmentOutcome",
    "SilenceInterval",
    "SpectrogramRecord",
    "WholeFileSegment",
]
