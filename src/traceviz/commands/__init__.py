"""
traceviz.commands - CLI command implementations
"""

__all__ = [
    "common",
    "health",
    "layout_cmd",
    "report_cmd",
    "summary_cmd",
]
