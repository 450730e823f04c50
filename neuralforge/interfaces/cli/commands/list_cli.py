"""
List command: Show the projects under the projects root.
"""

from __future__ import annotations

import argparse

from neuralforge.interfaces.cli.cli_ui import TableDisplay, print_error, print_info
from neuralforge.services.cli_bootstrap_svc import bootstrap_cli


def cmd_list(args: argparse.Namespace) -> int:
    """List project directories (sorted by name)."""
    try:
        service = bootstrap_cli(args.config, args.projects_root, args.log_level)
        names = service.list_projects()
    except (ValueError, OSError) as e:
        print_error(f"Error listing projects: {e}")
        return 1

    if not names:
        print_info(f"No projects found in {service.projects_root}")
        return 0

    TableDisplay.show_projects(names, str(service.projects_root))
    return 0
