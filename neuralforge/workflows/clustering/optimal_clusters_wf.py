"""
Cluster-count estimation workflow.

This is a PURE WORKFLOW module that estimates how many clusters a project's
spectrograms form:
- Snapshot ``spectrograms/*.json`` (records added later are not seen)
- Load and flatten every record through a ``pool_loader``-wide worker pool
- Stack the vectors (sorted by record path) and run the elbow method
- Persist ``{wcss_values, optimal_k}`` to ``elbow_results.json`` atomically

ARCHITECTURE:
- Does NOT read configuration or touch services.
- Malformed records are written to the error log and skipped; the phase
  fails with EmptyCorpusError only when no usable record remains.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np
from pydantic import BaseModel, Field, ValidationError

from neuralforge.components.ml.kmeans_comp import elbow_method
from neuralforge.components.project.error_log_comp import ErrorLogWriter
from neuralforge.components.store.content_store_comp import ContentStore, write_json_atomic
from neuralforge.components.workers.bounded_pool_comp import BoundedWorkerPool
from neuralforge.helpers.dto.processing_dto import ElbowResult, PipelineConfig
from neuralforge.helpers.dto.project_dto import ProjectPaths
from neuralforge.helpers.exceptions import EmptyCorpusError, ProjectError

logger = logging.getLogger(__name__)


class ElbowResultFile(BaseModel):
    """Schema of ``elbow_results.json``."""

    wcss_values: list[float]
    optimal_k: int = Field(ge=1)


def load_record_vectors(
    store: ContentStore,
    error_log: ErrorLogWriter,
    workers: int,
) -> dict[Path, np.ndarray]:
    """
    Load every record in the store as a flat row-major float64 vector.

    Records that cannot be read or validated are logged and left out.
    """
    record_paths = store.list_record_paths()
    vectors: dict[Path, np.ndarray] = {}

    def handle(path: Path) -> np.ndarray:
        record = store.load(path)
        return np.asarray(record.spectrogram, dtype=np.float64).ravel()

    def on_result(path: Path, vector: np.ndarray) -> None:
        vectors[path] = vector

    def on_error(path: Path, error: Exception) -> None:
        error_log.append(f"Error loading spectrogram {path}", error)

    pool = BoundedWorkerPool(
        name="loader",
        workers=max(1, min(workers, len(record_paths) or 1)),
        handler=handle,
        on_result=on_result,
        on_error=on_error,
    )
    pool.run(record_paths)

    logger.info("[clusters] loaded %d/%d record(s)", len(vectors), len(record_paths))
    return vectors


def stack_vectors(vectors: dict[Path, np.ndarray], error_log: ErrorLogWriter) -> np.ndarray:
    """
    Stack vectors into an ``[N, W*H]`` matrix, ordered by record path.

    The first record (by path) fixes the expected length; records of any other
    length are logged and left out.

    Raises:
        EmptyCorpusError: If there is nothing to stack
    """
    if not vectors:
        raise EmptyCorpusError("No spectrogram records available for clustering")

    ordered = sorted(vectors)
    expected = vectors[ordered[0]].shape[0]
    rows: list[np.ndarray] = []
    for path in ordered:
        vector = vectors[path]
        if vector.shape[0] != expected:
            error_log.append(
                f"Error loading spectrogram {path}",
                f"vector length {vector.shape[0]} does not match {expected}",
            )
            continue
        rows.append(vector)

    return np.vstack(rows)


def optimal_clusters_workflow(
    paths: ProjectPaths,
    store: ContentStore,
    config: PipelineConfig,
    error_log: ErrorLogWriter,
    seed: int | None = None,
    k_max: int | None = None,
) -> ElbowResult:
    """
    Estimate the cluster count of the project's spectrograms.

    Args:
        seed: RNG seed for centroid initialization; falls back to
            ``config.kmeans_seed`` (None means OS entropy)
        k_max: Largest k to try; falls back to ``config.k_max``

    Returns:
        The persisted ElbowResult

    Raises:
        EmptyCorpusError: If no usable record exists
        OSError: If elbow_results.json cannot be written
    """
    seed = config.kmeans_seed if seed is None else seed
    k_max = config.k_max if k_max is None else k_max

    vectors = load_record_vectors(store, error_log, config.pool_loader)
    data = stack_vectors(vectors, error_log)
    logger.info("[clusters] %s: %d record(s) x %d values, k_max=%d", paths.name, data.shape[0], data.shape[1], k_max)

    wcss_values, optimal_k = elbow_method(data, k_max=k_max, iterations=config.kmeans_iterations, seed=seed)
    result = ElbowResult(wcss_values=wcss_values, optimal_k=optimal_k)

    write_json_atomic(paths.elbow_results_path, result.to_json_dict())
    logger.info("[clusters] %s: optimal_k=%d", paths.name, optimal_k)
    return result


def load_elbow_result(paths: ProjectPaths) -> ElbowResult:
    """
    Read back ``elbow_results.json``.

    Raises:
        ProjectError: If the file is missing or malformed
    """
    try:
        with open(paths.elbow_results_path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise ProjectError(f"No elbow results for project {paths.name}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ProjectError(f"Error reading {paths.elbow_results_path}: {e}") from e

    try:
        parsed = ElbowResultFile.model_validate(raw)
    except ValidationError as e:
        raise ProjectError(f"Malformed elbow results {paths.elbow_results_path}: {e}") from e
    return ElbowResult(wcss_values=parsed.wcss_values, optimal_k=parsed.optimal_k)
