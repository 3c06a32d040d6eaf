"""Main module for the DECAES runner CLI."""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .core import (
    ConfigurationError,
    DecaesRunnerError,
    RunnerConfig,
    ToolNotFound,
    configure_cli_logging,
    dry_run_decaes,
    get_logger,
    run_decaes,
)

EXIT_USAGE = 2
EXIT_TOOL_NOT_FOUND = 127


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decaes-runner",
        description="Run the DECAES.jl command line tool through Julia",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run on 4 threads, computing T2 distributions and T2 parts
  decaes-runner run 4 image.nii.gz --output results --T2map --T2part \\
                      --TE 7e-3 --nT2 60 --T2Range 10e-3 2.0

  # Read flags and values from a settings file, one per line
  decaes-runner run 4 @settings.txt

  # Show version
  decaes-runner version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    run_parser: argparse.ArgumentParser = subparsers.add_parser(
        "run", help="Run DECAES, forwarding all trailing arguments"
    )
    run_parser.add_argument(
        "--julia", default=None, help="Julia executable (default: julia or $DECAES_JULIA_BINARY)"
    )
    run_parser.add_argument(
        "--dry-run", action="store_true", help="Print the command instead of running it"
    )
    run_parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    run_parser.add_argument("nthreads", help="Number of Julia threads")
    run_parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Input image or @settings file followed by DECAES flags and values",
    )

    subparsers.add_parser("version", help="Show version information")
    return parser


def run_command(args: argparse.Namespace) -> int:
    """Execute the ``run`` subcommand and return the process exit code."""
    logger = configure_cli_logging(debug=args.debug)
    try:
        config = RunnerConfig.from_env(julia_binary=args.julia, debug=args.debug or None)
        if args.dry_run:
            print(dry_run_decaes(args.nthreads, *args.args, config=config))
            return 0
        status = run_decaes(
            args.nthreads,
            *args.args,
            return_status=True,
            config=config,
        )
    except ToolNotFound as exc:
        logger.error(f"Install Julia or pass --julia (looked for {exc.binary!r})")
        return EXIT_TOOL_NOT_FOUND
    except ConfigurationError as exc:
        logger.error(str(exc))
        return EXIT_USAGE
    except DecaesRunnerError:
        # already logged by run_decaes
        return EXIT_USAGE
    return status


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the ``decaes-runner`` command line interface.

    ``run`` exits with the status of the Julia process. ``version`` prints
    version information. No command prints help and exits with status 1.
    """
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.command == "run":
        try:
            sys.exit(run_command(args))
        except KeyboardInterrupt:
            get_logger("decaes-runner").warning("Interrupted by user.")
            sys.exit(130)

    elif args.command == "version":
        print("DECAES runner CLI")
        print(f"Version {__version__}")
        print("Runs DECAES.jl through Julia")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
