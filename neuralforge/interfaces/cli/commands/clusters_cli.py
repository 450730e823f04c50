"""
Clusters command: Estimate a project's cluster count with the elbow method.
"""

from __future__ import annotations

import argparse

from neuralforge.helpers.exceptions import ForgeError
from neuralforge.interfaces.cli.cli_ui import TableDisplay, print_error, print_success, show_spinner
from neuralforge.services.cli_bootstrap_svc import bootstrap_cli


def cmd_clusters(args: argparse.Namespace) -> int:
    """
    Run k-means for k = 1..k_max over the stored spectrograms and report the
    chosen k. The result is also written to elbow_results.json.
    """
    try:
        service = bootstrap_cli(args.config, args.projects_root, args.log_level)
        optimal_k = show_spinner(
            f"Clustering spectrograms for {args.project}...",
            service.calculate_optimal_clusters,
            args.project,
            seed=args.seed,
            k_max=args.k_max,
        )
        elbow = service.load_elbow_result(args.project)
    except (ForgeError, ValueError, OSError) as e:
        print_error(f"Error calculating clusters: {e}")
        return 1

    TableDisplay.show_elbow(elbow)
    print_success(f"Optimal number of clusters: {optimal_k}")
    return 0
