"""
Process command: Segment normalized WAVs and store their spectrograms.

``--resume`` skips segmentation and only finishes segment WAVs left in
spectrograms/ by an interrupted run.
"""

from __future__ import annotations

import argparse

from neuralforge.helpers.exceptions import ForgeError
from neuralforge.interfaces.cli.cli_ui import print_error, print_warning, show_chunk_result, show_spinner
from neuralforge.services.cli_bootstrap_svc import bootstrap_cli


def cmd_process(args: argparse.Namespace) -> int:
    """
    Run the segment + spectrogram phase for one project.

    Exit codes: 0 every segment handled, 2 some segments failed, 1 fatal error.
    """
    resume = getattr(args, "resume", False)
    try:
        service = bootstrap_cli(args.config, args.projects_root, args.log_level)
        if resume:
            result = show_spinner(
                f"Resuming pending chunks for {args.project}...",
                service.process_pending_chunks,
                args.project,
            )
        else:
            result = show_spinner(
                f"Processing chunks for {args.project}...",
                service.process_audio_chunks_and_spectrograms,
                args.project,
            )
    except (ForgeError, ValueError, OSError) as e:
        print_error(f"Error processing chunks: {e}")
        return 1

    show_chunk_result(result, "Pending Chunks" if resume else "Chunks & Spectrograms")
    if not result.ok:
        print_warning(f"{len(result.failures)} item(s) failed (details in log.error)")
        return 2
    return 0
