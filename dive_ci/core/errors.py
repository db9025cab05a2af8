"""Input errors raised while loading configuration or analysis data.

Rule evaluation never raises these: a bad threshold is reported as a
FAILED rule outcome instead.
"""


class ConfigError(ValueError):
    """CI config file missing, unreadable or not a mapping."""


class AnalysisError(ValueError):
    """Analysis result document is missing fields or holds bad values."""
