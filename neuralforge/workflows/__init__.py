"""
Workflows package.
"""

from .clustering.optimal_clusters_wf import load_elbow_result, optimal_clusters_workflow
from .processing.convert_files_wf import convert_files_workflow
from .processing.process_chunks_wf import process_chunks_workflow, process_pending_chunks_workflow

__all__ = [
    "convert_files_workflow",
    "load_elbow_result",
    "optimal_clusters_workflow",
    "process_chunks_workflow",
    "process_pending_chunks_workflow",
]
