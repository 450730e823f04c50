#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from neuralforge.__version__ import __version__
from neuralforge.interfaces.cli.commands.clusters_cli import cmd_clusters
from neuralforge.interfaces.cli.commands.convert_cli import cmd_convert
from neuralforge.interfaces.cli.commands.list_cli import cmd_list
from neuralforge.interfaces.cli.commands.process_cli import cmd_process
from neuralforge.interfaces.cli.commands.run_cli import cmd_run


def _add_global_options(p: argparse.ArgumentParser, suppress_defaults: bool = False) -> None:
    # Subparsers re-declare the globals so they work on either side of the
    # command; SUPPRESS keeps a subparser from overwriting a value given earlier.
    default = argparse.SUPPRESS if suppress_defaults else None
    p.add_argument("--config", metavar="PATH", default=default, help="extra YAML config file")
    p.add_argument("--projects-root", metavar="PATH", default=default, help="parent directory of all projects")
    p.add_argument(
        "--log-level",
        metavar="LEVEL",
        default=default,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="process log level (default from config: INFO)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="forge",
        description="NeuralForge - Sound corpus preparation: WAV normalization, spectrograms, cluster-count estimation",
        epilog="Examples:\n"
        "  forge list                                 # List projects\n"
        "  forge convert birds                        # Normalize inventory into sounds/*.wav\n"
        "  forge process birds                        # Segment + store spectrograms\n"
        "  forge process birds --resume               # Finish leftover segment WAVs\n"
        "  forge clusters birds --seed 7              # Estimate cluster count\n"
        "  forge run birds                            # All three phases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_global_options(p)

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'forge <command> --help' for command-specific help)",
    )

    # list: Show projects
    s = sub.add_parser("list", help="List projects under the projects root")
    _add_global_options(s, suppress_defaults=True)
    s.set_defaults(func=cmd_list)

    # convert: Phase 1
    s = sub.add_parser("convert", help="Copy/transcode the project's inventory into sounds/*.wav")
    s.add_argument("project", help="project name")
    _add_global_options(s, suppress_defaults=True)
    s.set_defaults(func=cmd_convert)

    # process: Phase 2
    s = sub.add_parser("process", help="Segment sounds and store one spectrogram per unique segment")
    s.add_argument("project", help="project name")
    s.add_argument("--resume", action="store_true", help="only finish segment WAVs left in spectrograms/")
    _add_global_options(s, suppress_defaults=True)
    s.set_defaults(func=cmd_process)

    # clusters: Phase 3
    s = sub.add_parser("clusters", help="Estimate the number of clusters with the elbow method")
    s.add_argument("project", help="project name")
    s.add_argument("--seed", type=int, default=None, help="RNG seed for centroid initialization")
    s.add_argument("--k-max", type=int, default=None, help="largest k to try (default from config: 10)")
    _add_global_options(s, suppress_defaults=True)
    s.set_defaults(func=cmd_clusters)

    # run: All phases
    s = sub.add_parser("run", help="Run convert, process and clusters in order")
    s.add_argument("project", help="project name")
    s.add_argument("--seed", type=int, default=None, help="RNG seed for centroid initialization")
    _add_global_options(s, suppress_defaults=True)
    s.set_defaults(func=cmd_run)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())
