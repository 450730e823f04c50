"""
Helpers package.
"""

from .exceptions import (
    EmptyCorpusError,
    ForgeError,
    PhaseFailedError,
    ProjectError,
    RecordSchemaError,
    RendererError,
    SpectrogramDecodeError,
)
from .files_helper import is_wav_name, list_files_with_suffix, md5_file, wav_stem
from .logging_helper import ForgeLogFilter, clear_log_context, configure_logging, get_log_context, set_log_context
from .time_helper import iso_timestamp, now_ms

__all__ = [
    "EmptyCorpusError",
    "ForgeError",
    "ForgeLogFilter",
    "PhaseFailedError",
    "ProjectError",
    "RecordSchemaError",
    "RendererError",
    "SpectrogramDecodeError",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "is_wav_name",
    "iso_timestamp",
    "list_files_with_suffix",
    "md5_file",
    "now_ms",
    "set_log_context",
    "wav_stem",
]
