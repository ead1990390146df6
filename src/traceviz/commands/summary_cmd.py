"""
traceviz.commands.summary_cmd - Print per-layer coverage summary.
"""

import argparse

from traceviz.commands.common import load_session, write_output
from traceviz.summary import format_summary_text


def run(args: argparse.Namespace) -> int:
    """Run the summary command."""
    session = load_session(args)
    if not session.summaries:
        if not args.quiet:
            print("No cross-layer links found.")
        return 0
    write_output(format_summary_text(session.summaries), args.output, args.quiet)
    return 0
