"""
Project package.
"""

from .error_log_comp import ErrorLogWriter, format_error_line, get_error_log
from .project_files_comp import (
    default_projects_root,
    ensure_directory,
    list_projects,
    load_project_data,
    require_project_root,
    resolve_project_paths,
    validate_project_name,
)

__all__ = [
    "ErrorLogWriter",
    "default_projects_root",
    "ensure_directory",
    "format_error_line",
    "get_error_log",
    "list_projects",
    "load_project_data",
    "require_project_root",
    "resolve_project_paths",
    "validate_project_name",
]
