"""
Convert command: Normalize a project's inventory into sounds/*.wav.

Architecture:
- Uses CLI bootstrap service to get a PipelineService instance
- Does NOT call workflows or components directly
"""

from __future__ import annotations

import argparse

from neuralforge.helpers.exceptions import ForgeError, PhaseFailedError
from neuralforge.interfaces.cli.cli_ui import print_error, print_warning, show_normalize_result, show_spinner
from neuralforge.services.cli_bootstrap_svc import bootstrap_cli


def cmd_convert(args: argparse.Namespace) -> int:
    """
    Copy or transcode every inventory entry into the project's sounds/ folder.

    Exit codes: 0 all files converted, 2 some files failed, 1 fatal error.
    """
    try:
        service = bootstrap_cli(args.config, args.projects_root, args.log_level)
        result = show_spinner(f"Converting files for {args.project}...", service.convert_files_to_wav, args.project)
    except PhaseFailedError as e:
        show_normalize_result(e.result)
        print_warning(f"{e} (details in log.error)")
        return 2
    except (ForgeError, ValueError, OSError) as e:
        print_error(f"Error converting files: {e}")
        return 1

    show_normalize_result(result)
    return 0
