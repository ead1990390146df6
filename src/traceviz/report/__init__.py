"""
traceviz.report - Summary and health reports rendered from templates.
"""

from traceviz.report.generator import ReportGenerator

__all__ = ["ReportGenerator"]
