"""
traceviz.commands.common - Helpers shared by the CLI commands.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from traceviz.config import DiagramConfig, get_config
from traceviz.dataset import load_dataset
from traceviz.session import RenderSession


def load_configuration(args: argparse.Namespace) -> DiagramConfig:
    """Load settings from ``--config``, a discovered file, or the defaults.

    ``--layer-order`` overrides the configured layer order.
    """
    config = DiagramConfig.from_dict(get_config(getattr(args, "config", None), Path.cwd()))
    layer_order = getattr(args, "layer_order", None)
    if layer_order:
        config.layer_order = [name.strip() for name in layer_order.split(",") if name.strip()]
    return config


def load_session(args: argparse.Namespace) -> RenderSession:
    """Load the dataset named on the command line and compute a session."""
    config = load_configuration(args)
    dataset = load_dataset(args.data)
    return RenderSession(dataset, config, width=getattr(args, "width", None))


def write_output(content: str, output: Path | None, quiet: bool = False) -> None:
    """Write to ``output`` or stdout."""
    if output is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    if not quiet:
        print(f"Wrote {output}", file=sys.stderr)
