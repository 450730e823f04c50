"""Project domain DTOs.

Data transfer objects describing a project's on-disk layout and the inputs
handed over by the project-management side (selected directory + inventory).

Rules:
- Import only stdlib and typing (no neuralforge.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

PROJECTS_DIR_PARTS = ("NeuralForge", "projects")

CONFIG_FILE_NAME = "config.json"
FILE_LIST_FILE_NAME = "file_list.json"
SOUNDS_DIR_NAME = "sounds"
SPECTROGRAMS_DIR_NAME = "spectrograms"
ELBOW_RESULTS_FILE_NAME = "elbow_results.json"
ERROR_LOG_FILE_NAME = "log.error"


@dataclass(frozen=True)
class ProjectPaths:
    """
    Every filesystem location a pipeline phase touches for one project.

    Built once per call and threaded through components and workflows so no
    layer recomputes paths from the home directory.

    Attributes:
        name: Project name (path-safe, single component)
        project_root: <projects_root>/<name>
        sounds_dir: Normalized WAVs
        spectrograms_dir: Spectrogram records and transient segment WAVs
        log_path: Append-only per-project error log
    """

    name: str
    project_root: Path

    @property
    def config_path(self) -> Path:
        return self.project_root / CONFIG_FILE_NAME

    @property
    def file_list_path(self) -> Path:
        return self.project_root / FILE_LIST_FILE_NAME

    @property
    def sounds_dir(self) -> Path:
        return self.project_root / SOUNDS_DIR_NAME

    @property
    def spectrograms_dir(self) -> Path:
        return self.project_root / SPECTROGRAMS_DIR_NAME

    @property
    def elbow_results_path(self) -> Path:
        return self.project_root / ELBOW_RESULTS_FILE_NAME

    @property
    def log_path(self) -> Path:
        return self.project_root / ERROR_LOG_FILE_NAME


@dataclass(frozen=True)
class InventoryEntry:
    """One (subdirectory, base name) pair from the file inventory."""

    subdir: str
    file_name: str


@dataclass
class ProjectData:
    """
    Inputs persisted by the project-management side before any phase runs.

    Attributes:
        selected_directory: Absolute path of the user-selected source root
        file_list: Relative subdirectory ("." for root) -> base names
    """

    selected_directory: Path
    file_list: dict[str, list[str]] = field(default_factory=dict)

    def entries(self) -> list[InventoryEntry]:
        """Flatten the inventory in a stable order (subdirectory, then listed order)."""
        return [
            InventoryEntry(subdir=subdir, file_name=name)
            for subdir in sorted(self.file_list)
            for name in self.file_list[subdir]
        ]
