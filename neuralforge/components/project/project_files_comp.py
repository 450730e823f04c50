"""
Project files component.

Resolves a project's on-disk layout and loads the inputs persisted by the
project-management side (``config.json`` + ``file_list.json``). Both files
are validated with pydantic; anything unusable surfaces as ProjectError.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePath

from pydantic import BaseModel, ConfigDict, ValidationError

from neuralforge.helpers.dto.project_dto import PROJECTS_DIR_PARTS, ProjectData, ProjectPaths
from neuralforge.helpers.exceptions import ProjectError

logger = logging.getLogger(__name__)


class ProjectConfigFile(BaseModel):
    """Schema of ``config.json``."""

    model_config = ConfigDict(extra="allow")

    selected_directory: str


class FileListFile(BaseModel):
    """Schema of ``file_list.json``: relative subdirectory -> base names."""

    entries: dict[str, list[str]]


def default_projects_root() -> Path:
    """``<home>/NeuralForge/projects``."""
    return Path.home().joinpath(*PROJECTS_DIR_PARTS)


def validate_project_name(name: str) -> str:
    """
    Ensure a project name is a single, path-safe component.

    Raises:
        ProjectError: If the name is empty, absolute, contains separators,
            traversal components or NUL bytes
    """
    if not name or not name.strip():
        raise ProjectError("Project name must not be empty")
    if "\x00" in name:
        raise ProjectError("Project name contains NUL byte")
    parts = PurePath(name).parts
    if len(parts) != 1 or parts[0] in (".", "..") or "/" in name or "\\" in name:
        raise ProjectError(f"Invalid project name: {name!r}")
    return name


def resolve_project_paths(projects_root: str | Path, name: str) -> ProjectPaths:
    """Build the ProjectPaths for ``name`` under ``projects_root`` (no I/O)."""
    validate_project_name(name)
    return ProjectPaths(name=name, project_root=Path(projects_root).expanduser() / name)


def require_project_root(paths: ProjectPaths) -> None:
    """
    Raises:
        ProjectError: If the project directory does not exist
    """
    if not paths.project_root.is_dir():
        raise ProjectError(f"Project directory not found: {paths.project_root}")


def ensure_directory(directory: Path) -> Path:
    """
    Create ``directory`` (and parents) if missing.

    Raises:
        ProjectError: If the directory cannot be created
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProjectError(f"Cannot create directory {directory}: {e}") from e
    return directory


def _read_json(path: Path, what: str) -> object:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ProjectError(f"{what} not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ProjectError(f"Error reading {what} {path}: {e}") from e


def load_project_data(paths: ProjectPaths) -> ProjectData:
    """
    Load the selected source directory and the file inventory.

    Returns:
        ProjectData with the selected directory and inventory

    Raises:
        ProjectError: If the project root, either file, or a required field is
            missing or malformed
    """
    require_project_root(paths)

    raw_config = _read_json(paths.config_path, "project config")
    try:
        config = ProjectConfigFile.model_validate(raw_config)
    except ValidationError as e:
        raise ProjectError(f"selected_directory not found in config {paths.config_path}: {e}") from e

    raw_list = _read_json(paths.file_list_path, "file list")
    try:
        file_list = FileListFile.model_validate({"entries": raw_list})
    except ValidationError as e:
        raise ProjectError(f"Malformed file list {paths.file_list_path}: {e}") from e

    logger.debug(
        "[project] %s: %d folders, %d files from %s",
        paths.name,
        len(file_list.entries),
        sum(len(v) for v in file_list.entries.values()),
        config.selected_directory,
    )
    return ProjectData(selected_directory=Path(config.selected_directory), file_list=file_list.entries)


def list_projects(projects_root: str | Path) -> list[str]:
    """
    List project names (directories) under ``projects_root``.

    Returns:
        Sorted project names; empty if the root does not exist
    """
    root = Path(projects_root).expanduser()
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir() and not p.name.startswith("."))
