"""
traceviz.commands.health - Report traceability health.

Shows tag totals, isolated tags (nothing derives from them) and dangling
references (from-links to tags that do not exist).
"""

from __future__ import annotations

import argparse
import json
import sys

from traceviz.commands.common import load_session, write_output
from traceviz.serialize import serialize_health
from traceviz.summary import format_health_text


def run(args: argparse.Namespace) -> int:
    """Run the health command.

    Returns 1 when ``--strict`` is given and the dataset has isolated tags
    or dangling references.
    """
    session = load_session(args)
    health = session.health
    if health is None:
        print("No health data available.", file=sys.stderr)
        return 1

    if args.json:
        write_output(json.dumps(serialize_health(health), indent=2), args.output, args.quiet)
    else:
        write_output(format_health_text(health), args.output, args.quiet)

    if args.strict and (health.isolated_tags or health.dangling_references):
        return 1
    return 0
