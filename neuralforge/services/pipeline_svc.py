"""
Pipeline coordinator service.

Exposes the three phases (normalize, segment + extract, cluster-count) as
separately callable entry points plus the incidental helpers around them.
The service keeps no state between calls: everything lives on disk under the
project directory, which is what makes every phase resumable.

Error policy:
- Fatal problems (missing project, unusable project files, output directory
  that cannot be created, empty corpus) raise a ForgeError subclass
- Per-item problems are appended to ``<project>/log.error`` and reported in
  the phase result
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator
from pathlib import Path

from neuralforge.components.platform.ffmpeg_comp import FFmpegRenderer
from neuralforge.components.project.error_log_comp import ErrorLogWriter, get_error_log
from neuralforge.components.project.project_files_comp import (
    ensure_directory,
    list_projects,
    load_project_data,
    require_project_root,
    resolve_project_paths,
)
from neuralforge.components.store.content_store_comp import ContentStore
from neuralforge.helpers.dto.processing_dto import (
    ChunkProcessingResult,
    ElbowResult,
    NormalizeResult,
    PipelineConfig,
    PipelineRunResult,
)
from neuralforge.helpers.dto.project_dto import ProjectPaths
from neuralforge.helpers.exceptions import PhaseFailedError, ProjectError
from neuralforge.helpers.logging_helper import clear_log_context, set_log_context
from neuralforge.helpers.time_helper import now_ms
from neuralforge.workflows.clustering.optimal_clusters_wf import load_elbow_result, optimal_clusters_workflow
from neuralforge.workflows.processing.convert_files_wf import convert_files_workflow
from neuralforge.workflows.processing.process_chunks_wf import (
    process_chunks_workflow,
    process_pending_chunks_workflow,
)

logger = logging.getLogger(__name__)


class PipelineService:
    """
    Drives the pipeline phases for projects under one projects root.

    Args:
        config: Typed pipeline configuration
        projects_root: Parent directory of all project directories
        renderer: Media tool adapter; built from ``config`` when omitted
        stop_event: Shared cancellation flag; when set, extractor pools stop
            feeding new segments
    """

    def __init__(
        self,
        config: PipelineConfig,
        projects_root: str | Path,
        renderer: FFmpegRenderer | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        self.config = config
        self.projects_root = Path(projects_root).expanduser()
        self.renderer = renderer or FFmpegRenderer(
            binary=config.ffmpeg_binary,
            timeout=config.ffmpeg_timeout_s,
            silence_threshold_db=config.silence_threshold_db,
            silence_min_duration_s=config.silence_min_duration_s,
        )
        self.stop_event = stop_event or threading.Event()

    # ------------------------------------------------------------------
    # Project plumbing
    # ------------------------------------------------------------------

    def project_paths(self, project: str) -> ProjectPaths:
        return resolve_project_paths(self.projects_root, project)

    def error_log(self, project: str) -> ErrorLogWriter:
        return get_error_log(self.project_paths(project).log_path)

    def list_projects(self) -> list[str]:
        """Names of all projects under the projects root."""
        return list_projects(self.projects_root)

    def log_error(self, project: str, err: BaseException | str | None, message: str) -> str:
        """
        Append one record to the project's error log.

        Returns:
            The line written
        """
        return self.error_log(project).append(message, err)

    @contextlib.contextmanager
    def _phase(self, project: str, phase: str) -> Iterator[ProjectPaths]:
        paths = self.project_paths(project)
        require_project_root(paths)
        set_log_context(project=project, phase=phase)
        try:
            yield paths
        finally:
            clear_log_context()

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def convert_files_to_wav(self, project: str) -> NormalizeResult:
        """
        Normalize the project's inventory into ``sounds/*.wav``.

        Returns:
            NormalizeResult when every file was copied, transcoded or skipped

        Raises:
            ProjectError: If the project or its files are unusable, or
                ``sounds/`` cannot be created
            PhaseFailedError: After all batches ran, if any file failed; the
                NormalizeResult is attached as ``.result``
        """
        with self._phase(project, "convert") as paths:
            project_data = load_project_data(paths)
            ensure_directory(paths.sounds_dir)
            result = convert_files_workflow(
                paths, project_data, self.renderer, self.config, get_error_log(paths.log_path)
            )

        if not result.ok:
            raise PhaseFailedError(
                f"{len(result.failures)} of {result.total} file(s) failed to convert in project {project}",
                result=result,
            )
        return result

    def process_audio_chunks_and_spectrograms(self, project: str) -> ChunkProcessingResult:
        """
        Segment every normalized WAV and store one spectrogram per new segment.

        Returns:
            ChunkProcessingResult; ``hashes`` lists every handled segment's
            content hash, duplicates included

        Raises:
            ProjectError: If the project or ``sounds/`` is missing, or
                ``spectrograms/`` cannot be created
        """
        with self._phase(project, "chunks") as paths:
            if not paths.sounds_dir.is_dir():
                raise ProjectError(f"Sounds directory not found: {paths.sounds_dir}")
            ensure_directory(paths.spectrograms_dir)
            return process_chunks_workflow(
                paths,
                self.renderer,
                ContentStore(paths.spectrograms_dir),
                self.config,
                get_error_log(paths.log_path),
                stop_event=self.stop_event,
            )

    def process_pending_chunks(self, project: str) -> ChunkProcessingResult:
        """
        Finish segment WAVs left in ``spectrograms/`` by an interrupted run.

        Raises:
            ProjectError: If the project is missing or ``spectrograms/`` cannot
                be created
        """
        with self._phase(project, "resume") as paths:
            ensure_directory(paths.spectrograms_dir)
            return process_pending_chunks_workflow(
                paths,
                self.renderer,
                ContentStore(paths.spectrograms_dir),
                self.config,
                get_error_log(paths.log_path),
                stop_event=self.stop_event,
            )

    def calculate_optimal_clusters(self, project: str, seed: int | None = None, k_max: int | None = None) -> int:
        """
        Estimate the project's cluster count and persist ``elbow_results.json``.

        Returns:
            optimal_k in [1, k_max]

        Raises:
            ProjectError: If the project is missing
            EmptyCorpusError: If no usable spectrogram record exists
        """
        with self._phase(project, "clusters") as paths:
            result = optimal_clusters_workflow(
                paths,
                ContentStore(paths.spectrograms_dir),
                self.config,
                get_error_log(paths.log_path),
                seed=seed,
                k_max=k_max,
            )
        return result.optimal_k

    def load_elbow_result(self, project: str) -> ElbowResult:
        """Read back the last persisted elbow result."""
        paths = self.project_paths(project)
        require_project_root(paths)
        return load_elbow_result(paths)

    def run_pipeline(self, project: str, seed: int | None = None) -> PipelineRunResult:
        """
        Run all three phases in order.

        A normalizer failure is reported but does not stop the later phases:
        files that did normalize still get segmented and clustered.

        Raises:
            ProjectError: As raised by any phase
            EmptyCorpusError: If nothing made it into the store
        """
        started = now_ms()
        try:
            normalize = self.convert_files_to_wav(project)
        except PhaseFailedError as e:
            logger.warning("[pipeline] %s; continuing with the files that converted", e)
            normalize = e.result

        chunks = self.process_audio_chunks_and_spectrograms(project)
        optimal_k = self.calculate_optimal_clusters(project, seed=seed)

        logger.info("[pipeline] %s: done in %d ms, optimal_k=%d", project, now_ms() - started, optimal_k)
        return PipelineRunResult(normalize=normalize, chunks=chunks, optimal_k=optimal_k)
