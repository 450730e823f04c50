"""
Processing package.
"""

from .convert_files_wf import convert_files_workflow, plan_conversions
from .process_chunks_wf import (
    iter_new_segments,
    iter_pending_segments,
    process_chunks_workflow,
    process_pending_chunks_workflow,
)

__all__ = [
    "convert_files_workflow",
    "iter_new_segments",
    "iter_pending_segments",
    "plan_conversions",
    "process_chunks_workflow",
    "process_pending_chunks_workflow",
]
