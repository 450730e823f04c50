"""
Run command: Normalize, segment + extract, then estimate clusters.
"""

from __future__ import annotations

import argparse

from neuralforge.helpers.exceptions import ForgeError
from neuralforge.interfaces.cli.cli_ui import (
    print_error,
    print_success,
    print_warning,
    show_chunk_result,
    show_normalize_result,
    show_spinner,
)
from neuralforge.services.cli_bootstrap_svc import bootstrap_cli


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the whole pipeline for one project.

    Exit codes: 0 clean run, 2 finished with per-item failures, 1 fatal error.
    """
    try:
        service = bootstrap_cli(args.config, args.projects_root, args.log_level)
        result = show_spinner(
            f"Running pipeline for {args.project}...", service.run_pipeline, args.project, seed=args.seed
        )
    except (ForgeError, ValueError, OSError) as e:
        print_error(f"Pipeline failed: {e}")
        return 1

    show_normalize_result(result.normalize)
    show_chunk_result(result.chunks)
    print_success(f"Optimal number of clusters: {result.optimal_k}")
    if not result.ok:
        print_warning("Some items failed (details in log.error)")
        return 2
    return 0
