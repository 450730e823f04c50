"""
Clustering package.
"""

from .optimal_clusters_wf import (
    ElbowResultFile,
    load_elbow_result,
    load_record_vectors,
    optimal_clusters_workflow,
    stack_vectors,
)

__all__ = [
    "ElbowResultFile",
    "load_elbow_result",
    "load_record_vectors",
    "optimal_clusters_workflow",
    "stack_vectors",
]
