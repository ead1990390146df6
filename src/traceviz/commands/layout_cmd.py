"""
traceviz.commands.layout_cmd - Compute diagram layouts as JSON.

Emits everything an external renderer needs: layer order, colours,
coverage, both diagram geometries, summaries and health.
"""

import argparse
import json

from traceviz.commands.common import load_session, write_output


def run(args: argparse.Namespace) -> int:
    """Run the layout command."""
    session = load_session(args)
    indent = None if args.compact else 2
    write_output(json.dumps(session.to_dict(), indent=indent), args.output, args.quiet)
    return 0
