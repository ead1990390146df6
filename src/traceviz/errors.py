"""
traceviz.errors - Exception types raised at the input boundary.

The computation core never raises for structurally valid input; these
cover the cases where a caller hands over something unusable.
"""


class TracevizError(Exception):
    """Base class for traceviz errors."""


class DatasetError(TracevizError, ValueError):
    """The traceability dataset is missing or lacks a required field."""


class ConfigError(TracevizError, ValueError):
    """The configuration file cannot be parsed."""


__all__ = ["TracevizError", "DatasetError", "ConfigError"]
