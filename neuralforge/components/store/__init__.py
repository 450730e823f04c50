"""
Store package.
"""

from .content_store_comp import RECORD_SUFFIX, ContentStore, SpectrogramRecordFile, write_json_atomic

__all__ = [
    "RECORD_SUFFIX",
    "ContentStore",
    "SpectrogramRecordFile",
    "write_json_atomic",
]
