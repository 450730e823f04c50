"""
Audio package.
"""

from .segment_comp import materialize_segment, plan_segments, segment_target
from .spectrogram_comp import FULL_SCALE, decode_spectrogram_png, extract_spectrogram
from .wav_normalize_comp import normalize_one, source_path, target_path

__all__ = [
    "FULL_SCALE",
    "decode_spectrogram_png",
    "extract_spectrogram",
    "materialize_segment",
    "normalize_one",
    "plan_segments",
    "segment_target",
    "source_path",
    "target_path",
]
