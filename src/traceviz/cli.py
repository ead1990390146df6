"""
traceviz.cli - Command-line interface.

Main entry point for the traceviz CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from traceviz import __version__
from traceviz.commands import health, layout_cmd, report_cmd, summary_cmd
from traceviz.errors import TracevizError


def _add_data_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "data",
        type=Path,
        help="Traceability JSON produced by the tag scanner",
        metavar="DATA",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write output to file instead of stdout",
        metavar="PATH",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="traceviz",
        description="Traceability coverage statistics and diagram layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  traceviz layout trace.json -o layout.json   # Diagram geometry for a renderer
  traceviz summary trace.json                 # Per-layer coverage summary
  traceviz health trace.json                  # Isolated tags, dangling references
  traceviz report trace.json --format html    # Summary + health as HTML

Configuration:
  Settings are read from .traceviz.toml in the current directory or
  any parent. Set the layer order there to avoid order inference:

    [layers]
    order = ["Requirement", "Architecture", "Implementation", "Unit Test"]

For detailed command help: traceviz <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"traceviz {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--layer-order",
        help="Comma-separated layer order, upstream first (overrides config)",
        metavar="NAMES",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # layout command
    layout_parser = subparsers.add_parser(
        "layout",
        help="Compute coverage and diagram geometry as JSON",
    )
    _add_data_arguments(layout_parser)
    layout_parser.add_argument(
        "--width",
        type=float,
        help="Flow diagram width in pixels (default: from config)",
        metavar="PX",
    )
    layout_parser.add_argument(
        "--compact",
        action="store_true",
        help="Emit JSON without indentation",
    )

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Show upstream/downstream coverage per layer and file",
    )
    _add_data_arguments(summary_parser)

    # health command
    health_parser = subparsers.add_parser(
        "health",
        help="Show isolated tags and dangling references",
    )
    _add_data_arguments(health_parser)
    health_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    health_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any isolated tag or dangling reference exists",
    )

    # report command
    report_parser = subparsers.add_parser(
        "report",
        help="Render summary and health as Markdown or HTML",
    )
    _add_data_arguments(report_parser)
    report_parser.add_argument(
        "--format",
        choices=["markdown", "html"],
        default="markdown",
        help="Report format (default: markdown)",
    )

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install traceviz[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    _configure_logging(args)

    try:
        if args.command == "layout":
            return layout_cmd.run(args)
        elif args.command == "summary":
            return summary_cmd.run(args)
        elif args.command == "health":
            return health.run(args)
        elif args.command == "report":
            return report_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except TracevizError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
