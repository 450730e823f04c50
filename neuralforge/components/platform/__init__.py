"""
Platform package.
"""

from .ffmpeg_comp import (
    DEFAULT_TIMEOUT_SECONDS,
    STDERR_TAIL_CHARS,
    FFmpegRenderer,
    audible_intervals,
    format_seconds,
    parse_silence_markers,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "STDERR_TAIL_CHARS",
    "FFmpegRenderer",
    "audible_intervals",
    "format_seconds",
    "parse_silence_markers",
]
