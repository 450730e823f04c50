"""
Commands package.
"""

from .clusters_cli import cmd_clusters
from .convert_cli import cmd_convert
from .list_cli import cmd_list
from .process_cli import cmd_process
from .run_cli import cmd_run

__all__ = [
    "cmd_clusters",
    "cmd_convert",
    "cmd_list",
    "cmd_process",
    "cmd_run",
]
