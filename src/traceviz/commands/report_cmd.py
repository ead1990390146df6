"""
traceviz.commands.report_cmd - Render a Markdown or HTML report.
"""

import argparse

from traceviz.commands.common import load_session, write_output
from traceviz.report import ReportGenerator


def run(args: argparse.Namespace) -> int:
    """Run the report command."""
    session = load_session(args)
    content = ReportGenerator(session).generate(format=args.format)
    write_output(content, args.output, args.quiet)
    return 0
